"""Dependency wiring helpers."""

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .auth.auth_api import router as auth_router
from .auth.auth_service import AuthService
from .config import AppConfig
from .home.home_api import router as home_router
from .home.home_repository import HomeSettingsRepository
from .home.home_service import HomeSettingsService
from .home.image_reconciler import ImageUploadReconciler
from .media.media_storage import LocalMediaStorage
from .products.products_api import router as products_router
from .products.products_repository import ProductRepository
from .products.products_service import ProductService
from .public.page_cache import PageCache
from .public.public_home_router import build_public_home_router


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    page_cache = PageCache(ttl_seconds=config.page_cache_ttl_seconds)
    media_storage = LocalMediaStorage(config.storage)

    home_service = HomeSettingsService(
        repo=HomeSettingsRepository(config.session_factory),
        reconciler=ImageUploadReconciler(storage=media_storage),
        page_cache=page_cache,
    )
    product_service = ProductService(
        repo=ProductRepository(config.session_factory),
        page_cache=page_cache,
    )
    auth_service = AuthService.from_file(
        path=config.admin_credentials_path,
        signing_key=config.jwt_signing_key,
        token_ttl_hours=config.admin_jwt_ttl_hours,
    )

    app.state.config = config
    app.state.upload_limits = config.upload_limits
    app.state.page_cache = page_cache
    app.state.media_storage = media_storage
    app.state.home_service = home_service
    app.state.product_service = product_service
    app.state.auth_service = auth_service

    app.include_router(auth_router)
    app.include_router(home_router)
    app.include_router(products_router)
    app.include_router(build_public_home_router(home_service, product_service, page_cache))

    app.mount(
        f"{media_storage.url_prefix}/{config.storage.bucket}",
        StaticFiles(directory=config.storage.bucket_dir),
        name="media",
    )
