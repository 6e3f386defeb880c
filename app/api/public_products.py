"""Public catalog API endpoints.

Read-only product browsing for storefront clients.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.products import page_to_response
from app.api.schemas import ErrorResponse, ProductsListResponse
from app.catalog.service import PublicProductPagingRequest, PublicProductService
from app.infrastructure.config import settings
from app.infrastructure.database import get_session
from app.infrastructure.storage import StorageService, get_storage

router = APIRouter(prefix="/public/products", tags=["Public Catalog"])


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PublicProductService:
    """Get public product service."""
    return PublicProductService(session)


@router.get(
    "",
    response_model=ProductsListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Browse products",
    description="Get a paginated list of products, optionally within one category.",
)
async def list_public_products(
    service: Annotated[PublicProductService, Depends(get_service)],
    storage: Annotated[StorageService, Depends(get_storage)],
    language_id: str = Query(default=settings.default_language_id, description="Language id"),
    category_id: int | None = Query(default=None, ge=0, description="Filter by category"),
    page: int = Query(default=1, ge=1, description="Page number"),
    page_size: int = Query(default=settings.default_page_size, ge=1, le=100, description="Items per page"),
) -> ProductsListResponse:
    """Browse products by category."""
    result = await service.get_all_by_category_id(
        language_id,
        PublicProductPagingRequest(category_id=category_id, page=page, page_size=page_size),
    )
    return page_to_response(result, storage)
