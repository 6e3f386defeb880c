"""Catalog read models and public browsing.

Paging parameters and results, the product/image views returned by
the catalog services, and the read-only public product service.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product, ProductImage, ProductTranslation
from app.catalog.repository import SqlProductRepository
from app.domain.exceptions import UnsupportedLanguageError
from app.domain.repositories import ProductRepository
from app.infrastructure.config import settings

T = TypeVar("T")


NO_IMAGE_FILE = "no-image.jpg"


def check_language(language_id: str) -> str:
    """Validate a language id against the configured languages.

    Args:
        language_id: Language code to check.

    Returns:
        The language id, normalized to lowercase.

    Raises:
        UnsupportedLanguageError: If the language is not configured.
    """
    normalized = language_id.strip().lower()
    if normalized not in settings.supported_languages:
        raise UnsupportedLanguageError(language_id, list(settings.supported_languages))
    return normalized


# ============================================================================
# Paging
# ============================================================================


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
    """

    page: int = 1
    page_size: int = 10

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class ProductPagingRequest(PaginationParams):
    """Management listing request.

    Attributes:
        language_id: Language of the returned texts.
        keyword: Substring of the product name.
        category_id: Only products in this category; None or 0 means any.
    """

    language_id: str = field(default_factory=lambda: settings.default_language_id)
    keyword: str | None = None
    category_id: int | None = None


@dataclass
class PublicProductPagingRequest(PaginationParams):
    """Public listing request.

    Attributes:
        category_id: Only products in this category; None or 0 means any.
    """

    category_id: int | None = None


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
        total_pages: Total number of pages.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1


# ============================================================================
# Views
# ============================================================================


@dataclass
class ProductView:
    """Product as seen in one language."""

    id: int
    price: Decimal
    original_price: Decimal
    stock: int
    view_count: int
    date_created: datetime
    language_id: str
    name: str | None = None
    description: str | None = None
    details: str | None = None
    seo_description: str | None = None
    seo_title: str | None = None
    seo_alias: str | None = None
    thumbnail_image: str | None = None
    categories: list[str] = field(default_factory=list)


@dataclass
class ProductImageView:
    """Product image metadata."""

    id: int
    product_id: int
    image_path: str
    caption: str | None
    is_default: bool
    date_created: datetime
    sort_order: int
    file_size: int


def to_product_view(
    product: Product,
    translation: ProductTranslation | None,
    image: ProductImage | None,
    language_id: str,
    categories: list[str] | None = None,
    fallback_image: str | None = None,
) -> ProductView:
    """Flatten a product, its translation and default image into a view.

    A missing translation leaves the text fields as None.
    """
    return ProductView(
        id=product.id,
        price=product.price,
        original_price=product.original_price,
        stock=product.stock,
        view_count=product.view_count,
        date_created=product.date_created,
        language_id=translation.language_id if translation else language_id,
        name=translation.name if translation else None,
        description=translation.description if translation else None,
        details=translation.details if translation else None,
        seo_description=translation.seo_description if translation else None,
        seo_title=translation.seo_title if translation else None,
        seo_alias=translation.seo_alias if translation else None,
        thumbnail_image=image.image_path if image else fallback_image,
        categories=categories or [],
    )


def to_image_view(image: ProductImage) -> ProductImageView:
    """Copy image row fields into a view."""
    return ProductImageView(
        id=image.id,
        product_id=image.product_id,
        image_path=image.image_path,
        caption=image.caption,
        is_default=image.is_default,
        date_created=image.date_created,
        sort_order=image.sort_order,
        file_size=image.file_size,
    )


# ============================================================================
# Public Product Service
# ============================================================================


class PublicProductService:
    """Read-only catalog browsing for storefront clients.

    Example usage:
        async with async_session_factory() as session:
            service = PublicProductService(session)
            page = await service.get_all_by_category_id(
                "en",
                PublicProductPagingRequest(category_id=3, page=1),
            )
    """

    def __init__(
        self,
        session: AsyncSession,
        product_repo: ProductRepository | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            product_repo: Product repository, defaults to the SQL one.
        """
        self.session = session
        self.products = product_repo or SqlProductRepository(session)

    async def get_all_by_category_id(
        self,
        language_id: str,
        request: PublicProductPagingRequest,
    ) -> PaginatedResult[ProductView]:
        """List products of a category in one language.

        Args:
            language_id: Language of the returned texts.
            request: Category filter and paging.

        Returns:
            Paginated product views ordered by product id.
        """
        language_id = check_language(language_id)

        rows = await self.products.find_page(
            language_id=language_id,
            category_id=request.category_id,
            limit=request.limit,
            offset=request.offset,
        )
        total = await self.products.count(
            language_id=language_id,
            category_id=request.category_id,
        )

        return PaginatedResult(
            items=[
                to_product_view(product, translation, image, language_id)
                for product, translation, image in rows
            ],
            total=total,
            page=request.page,
            page_size=request.page_size,
        )
