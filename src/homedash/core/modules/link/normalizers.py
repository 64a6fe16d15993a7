import re
from typing import Any

from homedash.core.modules.link.models import Link
from homedash.core.modules.record.models import Payload
from homedash.errors import ValidationError
from homedash.utils import clean_str

SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_url(value: Any) -> str:
    """Trim the URL and prefix ``https://`` when it carries no http(s) scheme."""
    url = clean_str(value)
    if not url:
        raise ValidationError("URL is required")
    if SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def _label_source(payload: Payload) -> str | None:
    # "title" is accepted as an alias of "label"
    for key in ("label", "title"):
        if isinstance(payload.get(key), str):
            return payload[key]
    return None


def normalize_link_create(payload: Payload) -> dict[str, Any]:
    label = (_label_source(payload) or "").strip()
    if not label:
        raise ValidationError("Label is required")

    fields: dict[str, Any] = {"label": label, "url": normalize_url(payload.get("url"))}
    icon_url = clean_str(payload.get("iconUrl"))
    if icon_url is not None:
        fields["icon_url"] = icon_url
    if isinstance(payload.get("pinned"), bool):
        fields["pinned"] = payload["pinned"]
    return fields


def normalize_link_update(payload: Payload, _existing: Link | None) -> dict[str, Any]:
    updates: dict[str, Any] = {}

    label_source = _label_source(payload)
    if label_source is not None:
        label = label_source.strip()
        if not label:
            raise ValidationError("Label cannot be empty")
        updates["label"] = label

    if "url" in payload:
        updates["url"] = normalize_url(payload["url"])

    if "iconUrl" in payload:
        updates["icon_url"] = clean_str(payload["iconUrl"]) or ""

    if "pinned" in payload:
        updates["pinned"] = bool(payload["pinned"])

    return updates
