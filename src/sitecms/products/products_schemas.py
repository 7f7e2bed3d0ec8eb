"""Pydantic schemas for product admin API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .products_models import Product


class ProductSummaryResponse(BaseModel):
    product_id: str
    name_ko: str
    name_en: str | None = None
    model_no: str | None = None
    category_code: str
    status: str
    is_featured: bool
    thumbnail_url: str | None = None

    @classmethod
    def from_domain(cls, product: Product) -> "ProductSummaryResponse":
        return cls(
            product_id=product.id,
            name_ko=product.name_ko,
            name_en=product.name_en,
            model_no=product.model_no,
            category_code=product.category_code,
            status=product.status.value,
            is_featured=product.is_featured,
            thumbnail_url=product.images[0] if product.images else None,
        )


class FeaturedUpdateRequest(BaseModel):
    is_featured: bool = Field(...)
