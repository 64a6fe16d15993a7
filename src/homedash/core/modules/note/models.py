from homedash.core.modules.record.models import Record


class Note(Record):
    """Notebook entry."""

    body: str
    title: str | None = None
