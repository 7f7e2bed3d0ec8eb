"""Wire encoding for ordered image layouts.

A layout travels as a JSON array next to the uploaded files. Each element is
either a tagged object::

    {"kind": "existing", "url": "https://cdn/hero-1.png"}
    {"kind": "pending", "file_index": 0}

or, for older forms, a bare string: a stored URL or the placeholder token
``new_file_<k>`` referencing the k-th uploaded file.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable

from ..exceptions import InvalidLayoutError
from .home_models import ExistingImage, LayoutEntry, PendingImage

PLACEHOLDER_PREFIX = "new_file_"
_PLACEHOLDER_RE = re.compile(r"^new_file_(0|[1-9]\d*)$")


def placeholder_token(file_index: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{file_index}"


def _parse_string(item: str, position: int) -> LayoutEntry:
    if not item:
        raise InvalidLayoutError(f"layout[{position}] is an empty string")
    if item.startswith(PLACEHOLDER_PREFIX):
        match = _PLACEHOLDER_RE.match(item)
        if match is None:
            raise InvalidLayoutError(f"layout[{position}] is a malformed placeholder: {item!r}")
        return PendingImage(file_index=int(match.group(1)))
    return ExistingImage(url=item)


def _parse_object(item: dict[str, Any], position: int) -> LayoutEntry:
    kind = item.get("kind")
    if kind == "existing":
        url = item.get("url")
        if not isinstance(url, str) or not url:
            raise InvalidLayoutError(f"layout[{position}] must carry a non-empty url")
        return ExistingImage(url=url)
    if kind == "pending":
        file_index = item.get("file_index")
        # bool is an int subclass
        if isinstance(file_index, bool) or not isinstance(file_index, int) or file_index < 0:
            raise InvalidLayoutError(
                f"layout[{position}] must carry a non-negative integer file_index"
            )
        return PendingImage(file_index=file_index)
    raise InvalidLayoutError(f"layout[{position}] has unknown kind {kind!r}")


def parse_layout_entries(items: Iterable[Any]) -> list[LayoutEntry]:
    entries: list[LayoutEntry] = []
    for position, item in enumerate(items):
        if isinstance(item, str):
            entries.append(_parse_string(item, position))
        elif isinstance(item, dict):
            entries.append(_parse_object(item, position))
        else:
            raise InvalidLayoutError(f"layout[{position}] must be a string or an object")
    return entries


def parse_layout(raw: str) -> list[LayoutEntry]:
    """Decode the ``image_layout`` form field."""
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidLayoutError(f"image_layout is not valid JSON: {exc.msg}") from exc
    if not isinstance(decoded, list):
        raise InvalidLayoutError("image_layout must be a JSON array")
    return parse_layout_entries(decoded)


def parse_url_list(raw: str | None) -> list[str]:
    """Decode the legacy ``current_images`` field (JSON array of URLs)."""
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidLayoutError(f"current_images is not valid JSON: {exc.msg}") from exc
    if not isinstance(decoded, list) or not all(isinstance(item, str) for item in decoded):
        raise InvalidLayoutError("current_images must be a JSON array of strings")
    return [item for item in decoded if item]


def entry_to_wire(entry: LayoutEntry) -> dict[str, Any]:
    if isinstance(entry, PendingImage):
        return {"kind": "pending", "file_index": entry.file_index}
    return {"kind": "existing", "url": entry.url}


def encode_layout(entries: Iterable[LayoutEntry]) -> str:
    return json.dumps([entry_to_wire(entry) for entry in entries], ensure_ascii=False)
