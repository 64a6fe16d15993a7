from homedash.core.modules.record.models import Record


class Link(Record):
    """Quick link shown on the dashboard."""

    label: str
    url: str
    icon_url: str | None = None
    pinned: bool | None = None
