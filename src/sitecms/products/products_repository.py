"""Product repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ..db.db_models import ProductModel, as_utc
from ..exceptions import NotFoundError, handle_sqlalchemy_errors
from .products_models import Product, ProductStatus


class ProductRepository:
    """Read products and flip their featured flag."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_products(self) -> Sequence[Product]:
        with self._session_factory() as session:
            rows = (
                session.query(ProductModel)
                .order_by(ProductModel.created_at.desc(), ProductModel.id)
                .all()
            )
            return [self._to_domain(row) for row in rows]

    def list_featured(self) -> Sequence[Product]:
        """Featured products visible on the public home page."""
        with self._session_factory() as session:
            rows = (
                session.query(ProductModel)
                .filter(
                    ProductModel.is_featured.is_(True),
                    ProductModel.status == ProductStatus.ACTIVE.value,
                )
                .order_by(ProductModel.created_at.desc(), ProductModel.id)
                .all()
            )
            return [self._to_domain(row) for row in rows]

    def set_featured(self, product_id: str, is_featured: bool) -> Product:
        with handle_sqlalchemy_errors(entity="products"):
            with self._session_factory() as session:
                row = session.get(ProductModel, product_id)
                if row is None:
                    raise NotFoundError(f"Product '{product_id}' not found")
                row.is_featured = is_featured
                row.updated_at = datetime.now(timezone.utc)
                session.commit()
                session.refresh(row)
                return self._to_domain(row)

    @staticmethod
    def _to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            name_ko=model.name_ko,
            name_en=model.name_en,
            model_no=model.model_no,
            category_code=model.category_code,
            status=ProductStatus(model.status),
            is_featured=model.is_featured,
            images=list(model.images or []),
            updated_at=as_utc(model.updated_at),
        )
