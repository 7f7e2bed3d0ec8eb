"""In-memory cache for rendered page payloads, invalidated by path."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

import structlog

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class PageCache:
    """Payloads keyed by page path with a TTL safety net."""

    ttl_seconds: int = 60
    _entries: dict[str, tuple[Any, datetime]] = field(default_factory=dict)

    def get(self, path: str) -> Any | None:
        entry = self._entries.get(path)
        if entry is None:
            return None
        data, stored_at = entry
        if (utcnow() - stored_at).total_seconds() > self.ttl_seconds:
            self._entries.pop(path, None)
            return None
        return data

    def set(self, path: str, data: Any) -> None:
        self._entries[path] = (data, utcnow())

    def invalidate(self, path: str) -> None:
        removed = self._entries.pop(path, None) is not None
        logger.info("cache.invalidated", path=path, had_entry=removed)

    def invalidate_many(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.invalidate(path)
