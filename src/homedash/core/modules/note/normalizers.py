from typing import Any

from homedash.core.modules.note.models import Note
from homedash.core.modules.record.models import Payload
from homedash.errors import ValidationError
from homedash.utils import clean_str


def normalize_note_create(payload: Payload) -> dict[str, Any]:
    body = clean_str(payload.get("body"))
    if not body:
        raise ValidationError("Note body is required")
    fields: dict[str, Any] = {"body": body}
    title = clean_str(payload.get("title"))
    if title is not None:
        fields["title"] = title
    return fields


def normalize_note_update(payload: Payload, _existing: Note | None) -> dict[str, Any]:
    updates: dict[str, Any] = {}

    body = clean_str(payload.get("body"))
    if body is not None:
        if not body:
            raise ValidationError("Note body cannot be empty")
        updates["body"] = body

    if "title" in payload:
        updates["title"] = clean_str(payload["title"]) or ""

    return updates
