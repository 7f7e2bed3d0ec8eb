from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.orm import sessionmaker

from src.sitecms.db.db_models import HomeSettingsModel
from src.sitecms.exceptions import VersionConflictError
from src.sitecms.home.home_repository import HomeSettingsRepository

pytestmark = pytest.mark.unit


def _save(repo: HomeSettingsRepository, images: list[str], **overrides):
    values = {
        "hero_headline": "헤드라인",
        "hero_subheadline": "서브",
        "hero_images": images,
        "show_products_section": True,
    }
    values.update(overrides)
    return repo.upsert(**values)


def test_get_returns_none_before_first_save(session_factory: sessionmaker) -> None:
    assert HomeSettingsRepository(session_factory).get() is None


def test_first_save_inserts_then_updates_same_row(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)

    first, created_first = _save(repo, ["a.png"])
    second, created_second = _save(repo, ["b.png", "a.png"], hero_headline="새 헤드라인")

    assert created_first is True
    assert created_second is False
    assert second.id == first.id
    assert second.hero_images == ["b.png", "a.png"]
    assert second.hero_headline == "새 헤드라인"
    assert second.version == first.version + 1
    with session_factory() as session:
        assert session.query(HomeSettingsModel).count() == 1


def test_resaving_same_images_keeps_images_and_bumps_version(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)
    first, _ = _save(repo, ["a.png", "b.png"])

    second, _ = _save(repo, ["a.png", "b.png"])

    assert second.hero_images == first.hero_images
    assert second.version == 2
    assert second.updated_at >= first.updated_at


def test_expected_version_mismatch_raises_conflict(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)
    _save(repo, ["a.png"])
    _save(repo, ["b.png"])

    with pytest.raises(VersionConflictError):
        _save(repo, ["c.png"], expected_version=1)

    stored = repo.get()
    assert stored is not None
    assert stored.hero_images == ["b.png"]


def test_expected_version_match_allows_write(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)
    saved, _ = _save(repo, ["a.png"])

    updated, _ = _save(repo, [], expected_version=saved.version)

    assert updated.hero_images == []


def test_sections_are_isolated(session_factory: sessionmaker) -> None:
    home = HomeSettingsRepository(session_factory)
    other = HomeSettingsRepository(session_factory, section="company")

    _save(home, ["home.png"])

    assert other.get() is None


def test_insert_race_is_retried_as_update(
    session_factory: sessionmaker, monkeypatch: pytest.MonkeyPatch
) -> None:
    repo = HomeSettingsRepository(session_factory)
    original_find = repo._find
    lookups: list[int] = []

    def find_after_concurrent_insert(session):
        lookups.append(1)
        if len(lookups) == 1:
            # another writer creates the row right after our lookup misses
            with session_factory() as other:
                other.add(HomeSettingsModel(section="home", hero_headline="theirs", version=1))
                other.commit()
            return None
        return original_find(session)

    monkeypatch.setattr(repo, "_find", find_after_concurrent_insert)

    saved, created = _save(repo, ["mine.png"], hero_headline="mine")

    assert created is False
    assert len(lookups) == 2
    assert saved.hero_headline == "mine"
    assert saved.hero_images == ["mine.png"]
    with session_factory() as session:
        assert session.query(HomeSettingsModel).count() == 1


def test_missing_products_flag_keeps_stored_value(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)

    inserted, _ = _save(repo, [], show_products_section=None)
    _save(repo, [], show_products_section=False)
    kept, _ = _save(repo, ["a.png"], show_products_section=None)

    assert inserted.show_products_section is True
    assert kept.show_products_section is False


def test_updated_at_is_timezone_aware(session_factory: sessionmaker) -> None:
    repo = HomeSettingsRepository(session_factory)
    _save(repo, ["a.png"])

    stored = repo.get()

    assert stored is not None
    assert stored.updated_at is not None
    assert stored.updated_at.utcoffset() == timedelta(0)
