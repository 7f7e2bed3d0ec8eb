"""Pydantic schemas for the home settings API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from .home_models import HomeSettings


class HomeSettingsResponse(BaseModel):
    id: int | None = None
    hero_headline: str
    hero_subheadline: str
    hero_images: list[str] = Field(default_factory=list)
    show_products_section: bool
    version: int = 0
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, settings: HomeSettings) -> "HomeSettingsResponse":
        return cls(
            id=settings.id,
            hero_headline=settings.hero_headline,
            hero_subheadline=settings.hero_subheadline,
            hero_images=list(settings.hero_images),
            show_products_section=settings.show_products_section,
            version=settings.version,
            updated_at=settings.updated_at,
        )


class HomeSettingsSaveResponse(BaseModel):
    success: bool = True
    created: bool
    dropped_images: int = 0
    settings: HomeSettingsResponse


class UploadLimitsResponse(BaseModel):
    max_upload_bytes: int
    allowed_content_types: list[str]
