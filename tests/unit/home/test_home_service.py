from __future__ import annotations

import pytest
from sqlalchemy.orm import sessionmaker

from src.sitecms.exceptions import DatabaseOperationError
from src.sitecms.home.home_models import (
    DEFAULT_HERO_IMAGES,
    ExistingImage,
    HomeSettingsUpdate,
    PendingImage,
    PendingUpload,
)
from src.sitecms.home.home_repository import HomeSettingsRepository
from src.sitecms.home.home_service import HomeSettingsService
from src.sitecms.home.image_reconciler import ImageUploadReconciler
from src.sitecms.public.page_cache import PageCache
from tests.conftest import FIXED_NOW
from tests.mocks.storage import RecordingStorage

pytestmark = pytest.mark.unit


class FailingRepository:
    def __init__(self) -> None:
        self.calls = 0

    def get(self):
        return None

    def upsert(self, **kwargs):
        self.calls += 1
        raise DatabaseOperationError("home_settings: database operation failed")


def _service(repo, storage: RecordingStorage, cache: PageCache) -> HomeSettingsService:
    return HomeSettingsService(
        repo=repo,
        reconciler=ImageUploadReconciler(storage=storage, clock=lambda: FIXED_NOW),
        page_cache=cache,
    )


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def cache() -> PageCache:
    cache = PageCache(ttl_seconds=300)
    cache.set("/", {"cached": True})
    cache.set("/admin/home", {"cached": True})
    return cache


@pytest.fixture()
def service(session_factory: sessionmaker, storage: RecordingStorage, cache: PageCache) -> HomeSettingsService:
    return _service(HomeSettingsRepository(session_factory), storage, cache)


def _png(name: str) -> PendingUpload:
    return PendingUpload(filename=name, data=b"\x89PNG", content_type="image/png")


def test_load_falls_back_to_defaults(service: HomeSettingsService) -> None:
    settings = service.load()

    assert settings.id is None
    assert settings.hero_images == list(DEFAULT_HERO_IMAGES)
    assert settings.show_products_section is True


def test_update_persists_layout_order_and_invalidates_pages(
    service: HomeSettingsService, storage: RecordingStorage, cache: PageCache
) -> None:
    outcome = service.update(
        HomeSettingsUpdate(
            hero_headline="혁신",
            hero_subheadline="파트너",
            show_products_section=True,
            layout=[PendingImage(0), ExistingImage("https://old/a.png")],
            new_images=[_png("new.png")],
        ),
        actor="admin",
    )

    assert outcome.created is True
    assert outcome.dropped_images == 0
    assert outcome.settings.hero_images[0].startswith(f"{storage.base_url}/hero/hero-")
    assert outcome.settings.hero_images[1] == "https://old/a.png"
    assert outcome.settings.updated_by == "admin"
    assert cache.get("/") is None
    assert cache.get("/admin/home") is None
    assert service.load().hero_images == outcome.settings.hero_images


def test_empty_layout_clears_images(service: HomeSettingsService) -> None:
    service.update(HomeSettingsUpdate(layout=[ExistingImage("https://old/a.png")]))

    outcome = service.update(HomeSettingsUpdate(layout=[]))

    assert outcome.settings.hero_images == []
    assert outcome.created is False


def test_partial_upload_failure_still_writes_record(
    session_factory: sessionmaker, cache: PageCache
) -> None:
    storage = RecordingStorage(fail_on={"-1-"})
    service = _service(HomeSettingsRepository(session_factory), storage, cache)

    outcome = service.update(
        HomeSettingsUpdate(
            hero_headline="h",
            layout=[
                ExistingImage("https://old/a.png"),
                PendingImage(0),
                PendingImage(1),
                PendingImage(2),
            ],
            new_images=[_png("a.png"), _png("b.png"), _png("c.png")],
        )
    )

    assert len(outcome.settings.hero_images) == 3
    assert outcome.settings.hero_images[0] == "https://old/a.png"
    assert outcome.dropped_images == 1


def test_missing_layout_appends_uploads_to_current_images(service: HomeSettingsService) -> None:
    outcome = service.update(
        HomeSettingsUpdate(
            layout=None,
            current_images=["https://old/a.png"],
            new_images=[_png("n.png")],
        )
    )

    assert outcome.settings.hero_images[0] == "https://old/a.png"
    assert outcome.settings.hero_images[1].endswith("-0-n.png")


def test_resubmitting_same_layout_is_idempotent(service: HomeSettingsService) -> None:
    layout = [ExistingImage("https://old/b.png"), ExistingImage("https://old/a.png")]

    first = service.update(HomeSettingsUpdate(hero_headline="h", layout=layout))
    second = service.update(HomeSettingsUpdate(hero_headline="h", layout=layout))

    assert first.settings.hero_images == second.settings.hero_images == [
        "https://old/b.png",
        "https://old/a.png",
    ]
    assert second.settings.id == first.settings.id
    assert second.settings.version == first.settings.version + 1


def test_record_write_failure_propagates_and_keeps_cache(
    storage: RecordingStorage, cache: PageCache
) -> None:
    repo = FailingRepository()
    service = _service(repo, storage, cache)

    with pytest.raises(DatabaseOperationError):
        service.update(HomeSettingsUpdate(layout=[ExistingImage("https://old/a.png")]))

    assert repo.calls == 1
    assert cache.get("/") == {"cached": True}
