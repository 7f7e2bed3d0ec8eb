"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .db.db_init import init_db

DEFAULT_ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(slots=True)
class UploadLimits:
    allowed_content_types: Sequence[str]
    max_upload_bytes: int


@dataclass(slots=True)
class StoragePaths:
    root: Path
    bucket: str
    public_base_url: str

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket


@dataclass(slots=True)
class AppConfig:
    storage: StoragePaths
    upload_limits: UploadLimits
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    page_cache_ttl_seconds: int
    jwt_signing_key: str
    admin_credentials_path: Path
    admin_jwt_ttl_hours: int


def _ensure_storage(paths: StoragePaths) -> None:
    paths.root.mkdir(parents=True, exist_ok=True)
    paths.bucket_dir.mkdir(parents=True, exist_ok=True)


def _build_engine(database_url: str) -> Engine:
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # request handlers run in the threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, future=True, connect_args=connect_args)


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    storage = StoragePaths(
        root=Path(os.getenv("MEDIA_ROOT", "media")),
        bucket=os.getenv("MEDIA_BUCKET", "products"),
        public_base_url=os.getenv("PUBLIC_BASE_URL", "").rstrip("/"),
    )
    _ensure_storage(storage)

    upload_limits = UploadLimits(
        allowed_content_types=DEFAULT_ALLOWED_CONTENT_TYPES,
        max_upload_bytes=int(os.getenv("UPLOAD_MAX_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
    )

    database_url = os.getenv("DATABASE_URL", "sqlite:///sitecms.db")
    engine = _build_engine(database_url)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine)

    return AppConfig(
        storage=storage,
        upload_limits=upload_limits,
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        page_cache_ttl_seconds=int(os.getenv("PAGE_CACHE_TTL_SECONDS", 60)),
        jwt_signing_key=os.getenv("JWT_SIGNING_KEY", ""),
        admin_credentials_path=Path(
            os.getenv("ADMIN_CREDENTIALS_PATH", "secrets/admin_credentials.json")
        ),
        admin_jwt_ttl_hours=int(os.getenv("ADMIN_JWT_TTL_HOURS", 12)),
    )
