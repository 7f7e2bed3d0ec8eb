"""Merge freshly uploaded images back into a submitted layout.

Files of a batch are uploaded first, in the order received; each successful
upload maps its batch index to a public URL. The layout is then walked in
order and every pending entry is swapped for its URL, so the final list
follows the layout and not the upload order.

A file that fails to upload is dropped from the result instead of failing
the whole save.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Sequence

import structlog

from ..exceptions import StorageError
from ..media.media_storage import MediaStorage, build_object_key
from .home_models import ExistingImage, LayoutEntry, PendingImage, PendingUpload, ReconcileResult

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class ImageUploadReconciler:
    storage: MediaStorage
    key_prefix: str = "hero"
    clock: Callable[[], datetime] = field(default=_utcnow)

    def upload_batch(self, files: Sequence[PendingUpload]) -> dict[int, str]:
        """Upload every non-empty file and return ``batch index -> URL``."""
        stamp_ms = int(self.clock().timestamp() * 1000)
        uploaded: dict[int, str] = {}
        for index, upload in enumerate(files):
            if upload.size == 0:
                logger.info("home.image.skipped_empty", file_index=index, filename=upload.filename)
                continue
            key = build_object_key(self.key_prefix, stamp_ms, index, upload.filename)
            try:
                url = self.storage.put(key, upload.data, content_type=upload.content_type)
            except StorageError as exc:
                logger.warning(
                    "home.image.upload_failed",
                    file_index=index,
                    filename=upload.filename,
                    error=str(exc),
                )
                continue
            uploaded[index] = url
        return uploaded

    @staticmethod
    def resolve(
        layout: Sequence[LayoutEntry], uploaded: dict[int, str]
    ) -> tuple[list[str], list[LayoutEntry]]:
        images: list[str] = []
        dropped: list[LayoutEntry] = []
        for entry in layout:
            if isinstance(entry, ExistingImage):
                images.append(entry.url)
                continue
            url = uploaded.get(entry.file_index)
            if url is None:
                logger.warning("home.image.placeholder_unresolved", file_index=entry.file_index)
                dropped.append(entry)
                continue
            images.append(url)
        return images, dropped

    def reconcile(
        self, layout: Sequence[LayoutEntry], files: Sequence[PendingUpload]
    ) -> ReconcileResult:
        uploaded = self.upload_batch(files) if files else {}
        images, dropped = self.resolve(layout, uploaded)
        return ReconcileResult(images=images, uploaded=uploaded, dropped=dropped)

    def append_uploads(
        self, current_images: Sequence[str], files: Sequence[PendingUpload]
    ) -> ReconcileResult:
        """Deprecated path for submissions without a layout: new files go last."""
        layout: list[LayoutEntry] = [ExistingImage(url=url) for url in current_images]
        layout.extend(PendingImage(file_index=index) for index in range(len(files)))
        return self.reconcile(layout, files)
