"""Home settings domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_HERO_HEADLINE = "산업 기계의 미래를 혁신하다"
DEFAULT_HERO_SUBHEADLINE = "블로우 몰딩기 및 압출 라인의 신뢰할 수 있는 파트너."
DEFAULT_HERO_IMAGES = ("/hero-bg.png", "/hero-bg-2.png", "/hero-bg-3.png")


@dataclass(slots=True)
class HomeSettings:
    """Persisted hero/content settings for the home page."""

    hero_headline: str
    hero_subheadline: str
    hero_images: list[str] = field(default_factory=list)
    show_products_section: bool = True
    id: int | None = None
    version: int = 0
    updated_at: datetime | None = None
    updated_by: str | None = None

    @classmethod
    def defaults(cls) -> "HomeSettings":
        return cls(
            hero_headline=DEFAULT_HERO_HEADLINE,
            hero_subheadline=DEFAULT_HERO_SUBHEADLINE,
            hero_images=list(DEFAULT_HERO_IMAGES),
            show_products_section=True,
        )


@dataclass(frozen=True, slots=True)
class ExistingImage:
    """Layout entry pointing at an already stored image."""

    url: str


@dataclass(frozen=True, slots=True)
class PendingImage:
    """Layout entry pointing at the n-th file of the accompanying batch."""

    file_index: int


LayoutEntry = ExistingImage | PendingImage


@dataclass(slots=True)
class PendingUpload:
    """Raw file attached to a submission, not yet stored."""

    filename: str
    data: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(slots=True)
class HomeSettingsUpdate:
    """Decoded form submission handed to the service."""

    hero_headline: str = ""
    hero_subheadline: str = ""
    show_products_section: bool | None = None
    layout: list[LayoutEntry] | None = None
    current_images: list[str] = field(default_factory=list)
    new_images: list[PendingUpload] = field(default_factory=list)
    expected_version: int | None = None


@dataclass(slots=True)
class ReconcileResult:
    images: list[str]
    uploaded: dict[int, str]
    dropped: list[LayoutEntry] = field(default_factory=list)


@dataclass(slots=True)
class SaveOutcome:
    settings: HomeSettings
    created: bool
    dropped_images: int = 0
