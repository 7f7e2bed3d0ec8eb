"""Editing model for the home settings admin form.

Holds the working copy of the text fields and the ordered image slots, and
turns them into a submission on save. Slots are either *persisted* (a stored
URL, no file) or *pending* (a ``data:`` preview plus the raw file to upload).

On submit pending files are collected in display order, so the k-th pending
slot becomes ``PendingImage(file_index=k)`` and the k-th file of the batch.
While a submit is in flight every edit raises :class:`FormLockedError`.
The working copy is never rebuilt from the save response; reload the
settings to get server-confirmed URLs.
"""

from __future__ import annotations

import base64
import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Sequence

import structlog

from ..config import DEFAULT_ALLOWED_CONTENT_TYPES, DEFAULT_MAX_UPLOAD_BYTES
from .home_layout import encode_layout
from .home_models import ExistingImage, HomeSettings, LayoutEntry, PendingImage, PendingUpload

logger = structlog.get_logger(__name__)



class FormError(Exception):
    """Base class for form controller errors."""


class FormLockedError(FormError):
    """Raised when the form is edited while a submit is in flight."""


class ImageRejectedError(FormError):
    """Raised when an attached file violates the upload limits."""


class SubmitFailedError(FormError):
    """Raised when the save call failed; the working copy is kept for retry."""


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class MoveDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(slots=True)
class FormLimits:
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    allowed_content_types: Sequence[str] = DEFAULT_ALLOWED_CONTENT_TYPES


@dataclass(slots=True)
class ImageSlot:
    id: str
    url: str
    file: PendingUpload | None = None

    @property
    def is_new(self) -> bool:
        return self.file is not None


@dataclass(slots=True)
class HomeSubmission:
    """Frozen form state ready to be sent to the save endpoint."""

    hero_headline: str
    hero_subheadline: str
    show_products_section: bool
    layout: list[LayoutEntry]
    files: list[PendingUpload]
    current_images: list[str] = field(default_factory=list)
    expected_version: int | None = None

    def form_fields(self) -> dict[str, str]:
        fields = {
            "hero_headline": self.hero_headline,
            "hero_subheadline": self.hero_subheadline,
            "image_layout": encode_layout(self.layout),
            "current_images": json.dumps(self.current_images, ensure_ascii=False),
            "show_products_section": "on" if self.show_products_section else "off",
        }
        if self.expected_version is not None:
            fields["expected_version"] = str(self.expected_version)
        return fields


SubmitHandler = Callable[[HomeSubmission], Awaitable[Any]]


def _preview_uri(upload: PendingUpload) -> str:
    encoded = base64.b64encode(upload.data).decode("ascii")
    return f"data:{upload.content_type or 'application/octet-stream'};base64,{encoded}"


class HomeSettingsForm:
    """Working copy of the home settings with image slot editing."""

    def __init__(
        self,
        settings: HomeSettings,
        *,
        submit_handler: SubmitHandler,
        limits: FormLimits | None = None,
        track_version: bool = False,
    ) -> None:
        self._submit_handler = submit_handler
        self._limits = limits or FormLimits()
        self._state = FormState.IDLE
        self._base_version = settings.version if track_version and settings.id is not None else None
        self.hero_headline = settings.hero_headline
        self.hero_subheadline = settings.hero_subheadline
        self.show_products_section = settings.show_products_section
        self._slots: list[ImageSlot] = [
            ImageSlot(id=f"server-{index}-{url}", url=url)
            for index, url in enumerate(settings.hero_images)
        ]
        self.last_result: Any = None

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def slots(self) -> tuple[ImageSlot, ...]:
        return tuple(self._slots)

    def _ensure_editable(self) -> None:
        if self._state is FormState.SUBMITTING:
            raise FormLockedError("form is locked while saving")

    def set_fields(
        self,
        *,
        hero_headline: str | None = None,
        hero_subheadline: str | None = None,
        show_products_section: bool | None = None,
    ) -> None:
        self._ensure_editable()
        if hero_headline is not None:
            self.hero_headline = hero_headline
        if hero_subheadline is not None:
            self.hero_subheadline = hero_subheadline
        if show_products_section is not None:
            self.show_products_section = show_products_section

    def add_image(self, filename: str, data: bytes, content_type: str | None) -> ImageSlot:
        self._ensure_editable()
        if content_type not in self._limits.allowed_content_types:
            raise ImageRejectedError(f"unsupported content type: {content_type}")
        if len(data) > self._limits.max_upload_bytes:
            raise ImageRejectedError(
                f"file is {len(data)} bytes, limit is {self._limits.max_upload_bytes}"
            )
        upload = PendingUpload(filename=filename, data=data, content_type=content_type)
        slot = ImageSlot(id=f"local-{uuid.uuid4().hex}", url=_preview_uri(upload), file=upload)
        self._slots.append(slot)
        return slot

    def remove_image(self, index: int) -> ImageSlot | None:
        self._ensure_editable()
        if not 0 <= index < len(self._slots):
            return None
        slot = self._slots.pop(index)
        if slot.is_new:
            # drop the preview and the file buffer with the slot
            slot.url = ""
            slot.file = None
        return slot

    def move_image(self, index: int, direction: MoveDirection | str) -> bool:
        """Swap the slot with its neighbour; returns False at the boundaries."""
        self._ensure_editable()
        step = -1 if MoveDirection(direction) is MoveDirection.LEFT else 1
        target = index + step
        if not 0 <= index < len(self._slots) or not 0 <= target < len(self._slots):
            return False
        self._slots[index], self._slots[target] = self._slots[target], self._slots[index]
        return True

    def build_submission(self) -> HomeSubmission:
        layout: list[LayoutEntry] = []
        files: list[PendingUpload] = []
        for slot in self._slots:
            if slot.file is not None:
                layout.append(PendingImage(file_index=len(files)))
                files.append(slot.file)
            else:
                layout.append(ExistingImage(url=slot.url))
        return HomeSubmission(
            hero_headline=self.hero_headline,
            hero_subheadline=self.hero_subheadline,
            show_products_section=self.show_products_section,
            layout=layout,
            files=files,
            current_images=[slot.url for slot in self._slots if not slot.is_new],
            expected_version=self._base_version,
        )

    async def submit(self) -> Any:
        self._ensure_editable()
        submission = self.build_submission()
        self._state = FormState.SUBMITTING
        try:
            result = await self._submit_handler(submission)
        except Exception as exc:
            logger.warning("home.form.submit_failed", error=str(exc))
            raise SubmitFailedError("설정 저장에 실패했습니다") from exc
        finally:
            self._state = FormState.IDLE
        self.last_result = result
        logger.info("home.form.submitted", images=len(submission.layout), new_files=len(submission.files))
        return result
