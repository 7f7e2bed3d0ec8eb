"""Object storage for uploaded site images."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Protocol

from ..config import StoragePaths
from ..exceptions import StorageError

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def sanitize_filename(filename: str | None) -> str:
    """Keep only ASCII letters, digits, dots and dashes."""
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", filename or "")
    return cleaned or "upload"


def build_object_key(prefix: str, stamp_ms: int, index: int, filename: str | None) -> str:
    """Return a collision resistant key, e.g. ``hero/hero-1700000000000-0-a.png``."""
    return f"{prefix}/{prefix}-{stamp_ms}-{index}-{sanitize_filename(filename)}"


class MediaStorage(Protocol):
    """Write-only object store returning publicly resolvable URLs."""

    def put(self, key: str, data: bytes, *, content_type: str | None = None) -> str:
        ...


@dataclass(slots=True)
class LocalMediaStorage:
    """Store objects under ``MEDIA_ROOT/<bucket>`` and expose them via ``/media``."""

    paths: StoragePaths
    url_prefix: str = "/media"
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def object_path(self, key: str) -> Path:
        relative = PurePosixPath(key)
        if relative.is_absolute() or ".." in relative.parts:
            raise StorageError(f"invalid object key: {key!r}")
        return self.paths.bucket_dir.joinpath(*relative.parts)

    def public_url(self, key: str) -> str:
        return f"{self.paths.public_base_url}{self.url_prefix}/{self.paths.bucket}/{key}"

    def put(self, key: str, data: bytes, *, content_type: str | None = None) -> str:
        target = self.object_path(key)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"failed to write {key}: {exc}") from exc
        self.log.info(
            "media.object.stored",
            extra={"key": key, "size_bytes": len(data), "content_type": content_type},
        )
        return self.public_url(key)
