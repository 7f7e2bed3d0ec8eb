"""Home settings read/write orchestration."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ..public.page_cache import PageCache
from .home_models import HomeSettings, HomeSettingsUpdate, SaveOutcome
from .home_repository import HomeSettingsRepository
from .image_reconciler import ImageUploadReconciler

logger = structlog.get_logger(__name__)

HOME_PAGE_PATHS = ("/", "/admin/home")


@dataclass(slots=True)
class HomeSettingsService:
    """Reconcile hero images, write the settings row, invalidate cached pages."""

    repo: HomeSettingsRepository
    reconciler: ImageUploadReconciler
    page_cache: PageCache
    invalidate_paths: tuple[str, ...] = HOME_PAGE_PATHS

    def load(self) -> HomeSettings:
        """Return the stored settings or built-in defaults when nothing was saved yet."""
        settings = self.repo.get()
        if settings is None:
            logger.info("home.settings.defaults_used")
            return HomeSettings.defaults()
        return settings

    def update(self, update: HomeSettingsUpdate, *, actor: str | None = None) -> SaveOutcome:
        if update.layout is not None:
            result = self.reconciler.reconcile(update.layout, update.new_images)
        else:
            logger.warning(
                "home.settings.layout_missing",
                current_images=len(update.current_images),
                new_images=len(update.new_images),
            )
            result = self.reconciler.append_uploads(update.current_images, update.new_images)

        # a failure here propagates; nothing of the text fields is written
        settings, created = self.repo.upsert(
            hero_headline=update.hero_headline,
            hero_subheadline=update.hero_subheadline,
            hero_images=result.images,
            show_products_section=update.show_products_section,
            expected_version=update.expected_version,
            updated_by=actor,
        )
        self.page_cache.invalidate_many(self.invalidate_paths)

        logger.info(
            "home.settings.saved",
            settings_id=settings.id,
            created=created,
            version=settings.version,
            images=len(settings.hero_images),
            uploaded=len(result.uploaded),
            dropped=len(result.dropped),
            actor=actor,
        )
        return SaveOutcome(settings=settings, created=created, dropped_images=len(result.dropped))
