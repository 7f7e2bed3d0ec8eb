"""Featured product management."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import structlog

from ..home.home_service import HOME_PAGE_PATHS
from ..public.page_cache import PageCache
from .products_models import Product
from .products_repository import ProductRepository

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ProductService:
    repo: ProductRepository
    page_cache: PageCache

    def list_products(self) -> Sequence[Product]:
        return self.repo.list_products()

    def list_featured(self) -> Sequence[Product]:
        return self.repo.list_featured()

    def set_featured(self, product_id: str, is_featured: bool) -> Product:
        """Raises ``NotFoundError`` for unknown products."""
        product = self.repo.set_featured(product_id, is_featured)
        self.page_cache.invalidate_many(HOME_PAGE_PATHS)
        logger.info("products.featured.updated", product_id=product_id, is_featured=is_featured)
        return product
