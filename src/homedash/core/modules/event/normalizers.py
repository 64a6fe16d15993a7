from collections.abc import Mapping
from datetime import datetime
from typing import Any

from homedash.core.modules.event.models import Event
from homedash.core.modules.record.models import Payload
from homedash.errors import ValidationError
from homedash.utils import clean_str, parse_instant


def _ensure_ordered(start: datetime | None, end: datetime | None) -> None:
    if start is not None and end is not None and end < start:
        raise ValidationError("endISO must be after startISO")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional_text_fields(payload: Payload, *, strict: bool) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if "allDay" in payload:
        fields["all_day"] = bool(payload["allDay"])
    for key in ("description", "location"):
        value = clean_str(payload.get(key))
        if value is not None:
            fields[key] = value
        elif strict and key in payload:
            fields[key] = ""
    return fields


def normalize_event_create(payload: Payload) -> dict[str, Any]:
    title = clean_str(payload.get("title"))
    if not title:
        raise ValidationError("Event title is required")

    start = parse_instant(payload.get("startISO"))
    if start is None:
        raise ValidationError("Valid startISO is required")

    fields: dict[str, Any] = {"title": title, "start_iso": start}

    if not _is_blank(payload.get("endISO")):
        end = parse_instant(payload["endISO"])
        if end is None:
            raise ValidationError("endISO must be a valid ISO string")
        _ensure_ordered(start, end)
        fields["end_iso"] = end

    fields.update(_optional_text_fields(payload, strict=False))
    return fields


def normalize_event_update(payload: Payload, existing: Event | None) -> dict[str, Any]:
    """Validate a partial event update.

    The start/end order is checked against the stored record for whichever
    side the update leaves untouched. A blank endISO clears the end instant.
    """
    updates: dict[str, Any] = {}

    title = clean_str(payload.get("title"))
    if title is not None:
        if not title:
            raise ValidationError("Event title cannot be empty")
        updates["title"] = title

    if "startISO" in payload:
        start = parse_instant(payload["startISO"])
        if start is None:
            raise ValidationError("startISO must be a valid ISO string")
        updates["start_iso"] = start

    if "endISO" in payload:
        if _is_blank(payload["endISO"]):
            updates["end_iso"] = None
        else:
            end = parse_instant(payload["endISO"])
            if end is None:
                raise ValidationError("endISO must be a valid ISO string")
            updates["end_iso"] = end

    effective_start = updates.get("start_iso", existing.start_iso if existing else None)
    effective_end = updates["end_iso"] if "end_iso" in updates else (existing.end_iso if existing else None)
    _ensure_ordered(effective_start, effective_end)

    updates.update(_optional_text_fields(payload, strict=True))
    return updates


def prepare_event_list(events: list[Event], params: Mapping[str, str]) -> list[Event]:
    """Keep events starting within the optional from/to bounds, earliest first."""
    start_from = parse_instant(params.get("from"))
    start_to = parse_instant(params.get("to"))

    selected = [
        event
        for event in events
        if (start_from is None or event.start_iso >= start_from) and (start_to is None or event.start_iso <= start_to)
    ]
    return sorted(selected, key=lambda event: event.start_iso)
