"""Public home page payload, served through the page cache."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ..home.home_service import HomeSettingsService
from ..products.products_schemas import ProductSummaryResponse
from ..products.products_service import ProductService
from .page_cache import PageCache

HOME_PATH = "/"


class PublicHomeResponse(BaseModel):
    hero_headline: str
    hero_subheadline: str
    hero_images: list[str] = Field(default_factory=list)
    show_products_section: bool
    featured_products: list[ProductSummaryResponse] = Field(default_factory=list)


def build_public_home_router(
    home_service: HomeSettingsService,
    product_service: ProductService,
    page_cache: PageCache,
) -> APIRouter:
    router = APIRouter(prefix="/api/public", tags=["public"])

    def _render() -> dict[str, Any]:
        settings = home_service.load()
        featured: list[ProductSummaryResponse] = []
        if settings.show_products_section:
            featured = [
                ProductSummaryResponse.from_domain(product)
                for product in product_service.list_featured()
            ]
        return PublicHomeResponse(
            hero_headline=settings.hero_headline,
            hero_subheadline=settings.hero_subheadline,
            hero_images=list(settings.hero_images),
            show_products_section=settings.show_products_section,
            featured_products=featured,
        ).model_dump()

    @router.get("/home", response_model=PublicHomeResponse)
    def read_public_home() -> dict[str, Any]:
        payload = page_cache.get(HOME_PATH)
        if payload is None:
            payload = _render()
            page_cache.set(HOME_PATH, payload)
        return payload

    return router
