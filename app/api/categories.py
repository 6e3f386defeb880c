"""Category API endpoints.

Provides endpoints for creating and listing categories.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.schemas import (
    CategoryCreateRequestSchema,
    CategoryListResponse,
    CategorySchema,
    ErrorResponse,
)
from app.application.category_service import (
    CategoryCreateRequest,
    CategoryService,
    CategoryView,
)
from app.infrastructure.config import settings
from app.infrastructure.database import get_session

router = APIRouter(prefix="/categories", tags=["Categories"])


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryService:
    """Get category service."""
    return CategoryService(session)


def category_to_schema(category: CategoryView) -> CategorySchema:
    """Convert CategoryView to CategorySchema."""
    return CategorySchema(
        id=category.id,
        name=category.name,
        language_id=category.language_id,
        sort_order=category.sort_order,
        is_show_on_home=category.is_show_on_home,
        parent_id=category.parent_id,
        status=category.status,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=CategoryListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List categories",
)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_service)],
    language_id: str = Query(default=settings.default_language_id, description="Language id"),
) -> CategoryListResponse:
    """List all categories with their names in one language."""
    categories = await service.get_all(language_id)
    return CategoryListResponse(
        items=[category_to_schema(c) for c in categories],
        total=len(categories),
    )


@router.get(
    "/{category_id}",
    response_model=CategorySchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_service)],
    language_id: str = Query(default=settings.default_language_id, description="Language id"),
) -> CategorySchema:
    """Get one category in one language."""
    category = await service.get_by_id(category_id, language_id)
    return category_to_schema(category)


@router.post(
    "",
    response_model=CategorySchema,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create category",
)
async def create_category(
    request: CategoryCreateRequestSchema,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategorySchema:
    """Create a category with its first translation."""
    category_id = await service.create(
        CategoryCreateRequest(
            name=request.name,
            language_id=request.language_id,
            sort_order=request.sort_order,
            is_show_on_home=request.is_show_on_home,
            parent_id=request.parent_id,
            seo_description=request.seo_description,
            seo_title=request.seo_title,
            seo_alias=request.seo_alias,
        )
    )
    category = await service.get_by_id(category_id, request.language_id)
    return category_to_schema(category)
