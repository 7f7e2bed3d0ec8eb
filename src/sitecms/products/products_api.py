"""Admin product routes used by the home settings screen."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..auth.auth_dependencies import require_admin_user
from ..exceptions import NotFoundError
from .products_schemas import FeaturedUpdateRequest, ProductSummaryResponse
from .products_service import ProductService

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=[Depends(require_admin_user)],
)


def get_product_service(request: Request) -> ProductService:
    try:
        return request.app.state.product_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("ProductService is not configured") from exc


@router.get("")
def list_products(
    service: ProductService = Depends(get_product_service),
) -> list[ProductSummaryResponse]:
    return [ProductSummaryResponse.from_domain(product) for product in service.list_products()]


@router.put("/{product_id}/featured")
def update_featured(
    product_id: str,
    payload: FeaturedUpdateRequest,
    service: ProductService = Depends(get_product_service),
) -> ProductSummaryResponse:
    try:
        product = service.set_featured(product_id, payload.is_featured)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "product_not_found"},
        ) from None
    return ProductSummaryResponse.from_domain(product)
