"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive values; SQLite drops the offset of aware columns."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Base(DeclarativeBase):
    """Base declarative class."""


class HomeSettingsModel(Base):
    __tablename__ = "home_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # one row per page section; the unique index backs the upsert
    section: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, default="home")
    hero_headline: Mapped[str] = mapped_column(Text, nullable=False, default="")
    hero_subheadline: Mapped[str] = mapped_column(Text, nullable=False, default="")
    hero_images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    show_products_section: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_by: Mapped[str | None] = mapped_column(String(64))


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint(
            "status IN ('draft', 'active', 'archived')", name="ck_products_status"
        ),
        Index("ix_products_featured_status", "is_featured", "status"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name_ko: Mapped[str] = mapped_column(String(255), nullable=False)
    name_en: Mapped[str | None] = mapped_column(String(255))
    model_no: Mapped[str | None] = mapped_column(String(64))
    category_code: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="draft")
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
