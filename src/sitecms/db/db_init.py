"""Database initialization helpers."""

from __future__ import annotations

from sqlalchemy.engine import Engine

from .db_models import Base


def init_db(engine: Engine) -> None:
    """Create tables if they do not exist yet.

    The home settings row is not seeded: it is created lazily by the first
    save, reads fall back to built-in defaults until then.
    """
    Base.metadata.create_all(engine)
