from datetime import datetime

from pydantic import Field

from homedash.core.modules.record.models import Record


class Event(Record):
    """Calendar event. Instants are stored and returned in UTC."""

    title: str
    start_iso: datetime = Field(alias="startISO")
    end_iso: datetime | None = Field(default=None, alias="endISO")
    all_day: bool | None = None
    description: str | None = None
    location: str | None = None
