"""Persistence for the home settings row."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db.db_models import HomeSettingsModel, as_utc
from ..exceptions import ensure_version, handle_sqlalchemy_errors
from .home_models import HomeSettings

logger = logging.getLogger(__name__)


class HomeSettingsRepository:
    """Single-row store keyed by ``section``."""

    def __init__(self, session_factory: Callable[[], Session], section: str = "home") -> None:
        self._session_factory = session_factory
        self._section = section

    def get(self) -> HomeSettings | None:
        with handle_sqlalchemy_errors(entity="home_settings"):
            with self._session_factory() as session:
                row = self._find(session)
                return self._to_domain(row) if row is not None else None

    def upsert(
        self,
        *,
        hero_headline: str,
        hero_subheadline: str,
        hero_images: Sequence[str],
        show_products_section: bool | None = None,
        expected_version: int | None = None,
        updated_by: str | None = None,
    ) -> tuple[HomeSettings, bool]:
        """Update the section row in place or create it; return ``(settings, created)``.

        ``show_products_section=None`` keeps the stored flag (``True`` on insert).
        """
        values: dict[str, object] = {
            "hero_headline": hero_headline,
            "hero_subheadline": hero_subheadline,
            "hero_images": list(hero_images),
            "updated_by": updated_by,
        }
        if show_products_section is not None:
            values["show_products_section"] = show_products_section
        with handle_sqlalchemy_errors(entity="home_settings"):
            try:
                return self._write(values, expected_version)
            except IntegrityError:
                # another writer created the row between our lookup and insert
                logger.warning("home.settings.insert_race", extra={"section": self._section})
                return self._write(values, expected_version)

    def _write(
        self, values: dict[str, object], expected_version: int | None
    ) -> tuple[HomeSettings, bool]:
        with self._session_factory() as session:
            row = self._find(session)
            created = row is None
            if row is None:
                row = HomeSettingsModel(section=self._section, version=0)
                session.add(row)
            else:
                ensure_version(expected=expected_version, actual=row.version, entity="home_settings")
            for name, value in values.items():
                setattr(row, name, value)
            row.version = (row.version or 0) + 1
            row.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(row)
            return self._to_domain(row), created

    def _find(self, session: Session) -> HomeSettingsModel | None:
        return (
            session.query(HomeSettingsModel)
            .filter(HomeSettingsModel.section == self._section)
            .one_or_none()
        )

    @staticmethod
    def _to_domain(model: HomeSettingsModel) -> HomeSettings:
        return HomeSettings(
            id=model.id,
            hero_headline=model.hero_headline or "",
            hero_subheadline=model.hero_subheadline or "",
            hero_images=list(model.hero_images or []),
            show_products_section=bool(model.show_products_section),
            version=model.version,
            updated_at=as_utc(model.updated_at),
            updated_by=model.updated_by,
        )
