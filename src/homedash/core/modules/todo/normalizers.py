from typing import Any

from homedash.core.modules.record.models import Payload
from homedash.core.modules.todo.models import Todo
from homedash.errors import ValidationError
from homedash.utils import clean_str


def normalize_todo_create(payload: Payload) -> dict[str, Any]:
    text = clean_str(payload.get("text"))
    if not text:
        raise ValidationError("Todo text is required")
    done = payload.get("done")
    return {"text": text, "done": done if isinstance(done, bool) else False}


def normalize_todo_update(payload: Payload, _existing: Todo | None) -> dict[str, Any]:
    updates: dict[str, Any] = {}

    text = clean_str(payload.get("text"))
    if text is not None:
        if not text:
            raise ValidationError("Todo text cannot be empty")
        updates["text"] = text

    if "done" in payload:
        updates["done"] = bool(payload["done"])

    return updates
