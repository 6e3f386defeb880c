"""Product management application service.

Orchestrates product administration:
- Paged listing and single-product lookup in one language
- Creating and updating products with their translations
- Price, stock and view count changes
- Category membership
- Image upload, update and removal backed by file storage
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import PurePath
from typing import Any, BinaryIO
from uuid import uuid4

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Product, ProductImage, ProductTranslation
from app.catalog.repository import (
    SqlCategoryRepository,
    SqlProductImageRepository,
    SqlProductRepository,
)
from app.catalog.service import (
    NO_IMAGE_FILE,
    PaginatedResult,
    ProductImageView,
    ProductPagingRequest,
    ProductView,
    check_language,
    to_image_view,
    to_product_view,
)
from app.domain.exceptions import ImageNotFoundError, ProductNotFoundError
from app.domain.repositories import (
    CategoryRepository,
    ProductImageRepository,
    ProductRepository,
)
from app.domain.value_objects import CategoryLink, StoredFile, TranslationKey
from app.infrastructure.database import transaction
from app.infrastructure.storage import StorageService, get_storage

logger = structlog.get_logger()

THUMBNAIL_CAPTION = "Thumbnail Image"


# ============================================================================
# Requests
# ============================================================================


@dataclass
class UploadedFile:
    """File received from a client.

    Attributes:
        filename: Name given by the client; only its extension is kept.
        stream: Readable binary content.
    """

    filename: str
    stream: BinaryIO


@dataclass
class ProductCreateRequest:
    """Fields of a new product and its first translation."""

    price: Decimal
    original_price: Decimal
    stock: int
    name: str
    language_id: str
    description: str | None = None
    details: str | None = None
    seo_description: str | None = None
    seo_title: str | None = None
    seo_alias: str | None = None
    thumbnail_image: UploadedFile | None = None


@dataclass
class ProductUpdateRequest:
    """Replacement translation fields for one language."""

    id: int
    language_id: str
    name: str
    description: str | None = None
    details: str | None = None
    seo_description: str | None = None
    seo_title: str | None = None
    seo_alias: str | None = None
    thumbnail_image: UploadedFile | None = None


@dataclass
class ProductImageCreateRequest:
    """New image attached to a product."""

    caption: str | None = None
    is_default: bool = False
    sort_order: int = 0
    image_file: UploadedFile | None = None


@dataclass
class ProductImageUpdateRequest:
    """Changes to an image; None leaves a field as it is."""

    caption: str | None = None
    is_default: bool | None = None
    sort_order: int | None = None
    image_file: UploadedFile | None = None


@dataclass
class CategoryAssignItem:
    """Desired membership in one category, addressed by name."""

    name: str
    selected: bool


@dataclass
class CategoryAssignRequest:
    """Desired membership in a set of categories."""

    categories: list[CategoryAssignItem] = field(default_factory=list)


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ServiceResult:
    """Outcome of an operation that reports failure instead of raising."""

    success: bool = True
    data: Any = None
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Application service for managing products.

    Every write runs inside a single transaction. Files written during
    a failed transaction are removed again, and files deleted by a
    transaction are only purged once it has committed.
    """

    def __init__(
        self,
        session: AsyncSession,
        storage: StorageService | None = None,
        product_repo: ProductRepository | None = None,
        image_repo: ProductImageRepository | None = None,
        category_repo: CategoryRepository | None = None,
    ) -> None:
        """Initialize service.

        Args:
            session: Async SQLAlchemy session.
            storage: File storage for images.
            product_repo: Product repository.
            image_repo: Product image repository.
            category_repo: Category repository.
        """
        self.session = session
        self.storage = storage or get_storage()
        self.products = product_repo or SqlProductRepository(session)
        self.images = image_repo or SqlProductImageRepository(session)
        self.categories = category_repo or SqlCategoryRepository(session)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_all_paging(self, request: ProductPagingRequest) -> PaginatedResult[ProductView]:
        """List products with their translation and default image.

        Args:
            request: Language, keyword and category filters plus paging.

        Returns:
            One page of product views and the total filtered count.
        """
        language_id = check_language(request.language_id)

        rows = await self.products.find_page(
            language_id=language_id,
            keyword=request.keyword,
            category_id=request.category_id,
            limit=request.limit,
            offset=request.offset,
        )
        total = await self.products.count(
            language_id=language_id,
            keyword=request.keyword,
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

    async def get_by_id(self, product_id: int, language_id: str) -> ProductView:
        """Get a product in one language.

        A product without a translation in the language is returned
        with empty text fields.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        language_id = check_language(language_id)

        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        translation = await self.products.get_translation(TranslationKey.of(product_id, language_id))
        categories = await self.products.get_category_names(product_id, language_id)
        image = await self.images.get_default(product_id)

        return to_product_view(
            product,
            translation,
            image,
            language_id,
            categories=categories,
            fallback_image=NO_IMAGE_FILE,
        )

    async def get_image_by_id(self, image_id: int) -> ProductImageView:
        """Get image metadata.

        Raises:
            ImageNotFoundError: If the image does not exist.
        """
        image = await self.images.get_by_id(image_id)
        if image is None:
            raise ImageNotFoundError(image_id)
        return to_image_view(image)

    async def get_list_images(self, product_id: int) -> list[ProductImageView]:
        """Get the images of a product ordered by sort order."""
        images = await self.images.list_by_product(product_id)
        return [to_image_view(image) for image in images]

    # ------------------------------------------------------------------
    # Product writes
    # ------------------------------------------------------------------

    async def create(self, request: ProductCreateRequest) -> int:
        """Create a product with one translation and optional thumbnail.

        Args:
            request: Product fields.

        Returns:
            ID of the new product.
        """
        language_id = check_language(request.language_id)

        product = Product(
            price=request.price,
            original_price=request.original_price,
            stock=request.stock,
            view_count=0,
            translations=[
                ProductTranslation(
                    language_id=language_id,
                    name=request.name,
                    description=request.description,
                    details=request.details,
                    seo_description=request.seo_description,
                    seo_title=request.seo_title,
                    seo_alias=request.seo_alias,
                )
            ],
        )

        async with self._write_scope() as saved:
            if request.thumbnail_image is not None:
                stored = await self._store(request.thumbnail_image, saved)
                product.images = [
                    ProductImage(
                        caption=THUMBNAIL_CAPTION,
                        file_size=stored.size,
                        image_path=stored.file_name,
                        is_default=True,
                        sort_order=1,
                    )
                ]
            await self.products.add(product)

        logger.info(
            "Product created",
            product_id=product.id,
            language_id=language_id,
            has_thumbnail=request.thumbnail_image is not None,
        )
        return product.id

    async def update(self, request: ProductUpdateRequest) -> ProductView:
        """Overwrite a product's translation and optionally its thumbnail.

        Raises:
            ProductNotFoundError: If the product or its translation in
                the requested language does not exist.
        """
        language_id = check_language(request.language_id)
        replaced: str | None = None

        async with self._write_scope() as saved:
            product = await self.products.get_by_id(request.id)
            translation = await self.products.get_translation(TranslationKey.of(request.id, language_id))
            if product is None or translation is None:
                raise ProductNotFoundError(request.id)

            translation.name = request.name
            translation.description = request.description
            translation.details = request.details
            translation.seo_description = request.seo_description
            translation.seo_title = request.seo_title
            translation.seo_alias = request.seo_alias

            if request.thumbnail_image is not None:
                stored = await self._store(request.thumbnail_image, saved)
                thumbnail = await self.images.get_default(request.id)
                if thumbnail is None:
                    await self.images.add(
                        ProductImage(
                            product_id=request.id,
                            caption=THUMBNAIL_CAPTION,
                            file_size=stored.size,
                            image_path=stored.file_name,
                            is_default=True,
                            sort_order=1,
                        )
                    )
                else:
                    replaced = thumbnail.image_path
                    thumbnail.image_path = stored.file_name
                    thumbnail.file_size = stored.size

        if replaced:
            await self.storage.delete_file(replaced)

        logger.info("Product updated", product_id=request.id, language_id=language_id)
        return await self.get_by_id(request.id, language_id)

    async def update_price(self, product_id: int, new_price: Decimal) -> bool:
        """Set a product's price.

        Returns:
            True if the price changed.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        async with transaction(self.session):
            product = await self._require_product(product_id)
            changed = product.price != new_price
            product.price = new_price

        logger.info("Product price updated", product_id=product_id, price=str(new_price), changed=changed)
        return changed

    async def update_stock(self, product_id: int, added_quantity: int) -> bool:
        """Add a (possibly negative) quantity to a product's stock.

        Returns:
            True if the stock changed.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        async with transaction(self.session):
            product = await self._require_product(product_id)
            product.stock += added_quantity

        logger.info("Product stock updated", product_id=product_id, added=added_quantity, stock=product.stock)
        return added_quantity != 0

    async def add_view_count(self, product_id: int) -> int:
        """Record one view of a product.

        Returns:
            The new view count.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        async with transaction(self.session):
            product = await self._require_product(product_id)
            product.view_count += 1
        return product.view_count

    async def category_assign(self, product_id: int, request: CategoryAssignRequest) -> ServiceResult:
        """Make a product's category links match the requested selection.

        Selected categories without a link get one; unselected
        categories with a link lose it. Unknown category names fail
        the whole request and nothing is changed.

        Args:
            product_id: Product to assign.
            request: Desired selection, by category name.

        Returns:
            ServiceResult describing success or the failure reason.
        """
        async with transaction(self.session):
            product = await self.products.get_by_id(product_id)
            if product is None:
                return ServiceResult(
                    success=False,
                    error=f"Product not found: {product_id}",
                    error_code="PRODUCT_NOT_FOUND",
                )

            resolved: list[tuple[CategoryAssignItem, int]] = []
            missing: list[str] = []
            for item in request.categories:
                category_id = await self.categories.find_id_by_name(item.name)
                if category_id is None:
                    missing.append(item.name)
                else:
                    resolved.append((item, category_id))

            if missing:
                return ServiceResult(
                    success=False,
                    error=f"Categories not found: {', '.join(missing)}",
                    error_code="CATEGORY_NOT_FOUND",
                    details={"names": missing},
                )

            added = removed = 0
            for item, category_id in resolved:
                link = CategoryLink(product_id=product_id, category_id=category_id)
                row = await self.products.get_link(link)
                if row is None and item.selected:
                    await self.products.add_link(link)
                    added += 1
                elif row is not None and not item.selected:
                    await self.products.remove_link(row)
                    removed += 1

        logger.info(
            "Product categories assigned",
            product_id=product_id,
            added=added,
            removed=removed,
        )
        return ServiceResult(success=True, data=True)

    async def delete(self, product_id: int) -> None:
        """Delete a product, its rows and its image files.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        pending = self.storage.pending_deletion()
        try:
            async with transaction(self.session):
                product = await self.products.get_by_id(product_id, include_children=True)
                if product is None:
                    raise ProductNotFoundError(product_id)

                for image in product.images:
                    if image.image_path:
                        await pending.stage(image.image_path)
                await self.products.delete(product)
        except Exception:
            await pending.rollback()
            raise
        await pending.commit()

        logger.info("Product deleted", product_id=product_id)

    # ------------------------------------------------------------------
    # Image writes
    # ------------------------------------------------------------------

    async def add_image(self, product_id: int, request: ProductImageCreateRequest) -> int:
        """Attach an image to a product.

        A default image replaces the product's previous default.

        Returns:
            ID of the new image.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        async with self._write_scope() as saved:
            await self._require_product(product_id)

            if request.is_default:
                await self.images.clear_default(product_id)

            image = ProductImage(
                product_id=product_id,
                caption=request.caption,
                is_default=request.is_default,
                sort_order=request.sort_order,
            )
            if request.image_file is not None:
                stored = await self._store(request.image_file, saved)
                image.image_path = stored.file_name
                image.file_size = stored.size

            await self.images.add(image)

        logger.info("Product image added", product_id=product_id, image_id=image.id, is_default=image.is_default)
        return image.id

    async def update_image(self, image_id: int, request: ProductImageUpdateRequest) -> ProductImageView:
        """Change an image's metadata and optionally its file.

        Raises:
            ImageNotFoundError: If the image does not exist.
        """
        replaced: str | None = None

        async with self._write_scope() as saved:
            image = await self.images.get_by_id(image_id)
            if image is None:
                raise ImageNotFoundError(image_id)

            if request.caption is not None:
                image.caption = request.caption
            if request.sort_order is not None:
                image.sort_order = request.sort_order
            if request.is_default is True:
                await self.images.clear_default(image.product_id, keep_image_id=image.id)
                image.is_default = True
            elif request.is_default is False:
                image.is_default = False

            if request.image_file is not None:
                stored = await self._store(request.image_file, saved)
                replaced = image.image_path or None
                image.image_path = stored.file_name
                image.file_size = stored.size

        if replaced:
            await self.storage.delete_file(replaced)

        logger.info("Product image updated", image_id=image_id, product_id=image.product_id)
        return to_image_view(image)

    async def remove_image(self, image_id: int) -> None:
        """Delete an image row and its file.

        Raises:
            ImageNotFoundError: If the image does not exist.
        """
        pending = self.storage.pending_deletion()
        try:
            async with transaction(self.session):
                image = await self.images.get_by_id(image_id)
                if image is None:
                    raise ImageNotFoundError(image_id)
                if image.image_path:
                    await pending.stage(image.image_path)
                await self.images.delete(image)
        except Exception:
            await pending.rollback()
            raise
        await pending.commit()

        logger.info("Product image removed", image_id=image_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require_product(self, product_id: int) -> Product:
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @asynccontextmanager
    async def _write_scope(self) -> AsyncIterator[list[str]]:
        """Transaction that removes files it stored if it fails.

        Yields:
            List collecting the names of files stored in the scope.
        """
        saved: list[str] = []
        try:
            async with transaction(self.session):
                yield saved
        except Exception:
            for file_name in saved:
                await self.storage.delete_file(file_name)
            raise

    async def _store(self, upload: UploadedFile, saved: list[str]) -> StoredFile:
        """Save an upload under a fresh name keeping its extension."""
        file_name = f"{uuid4()}{PurePath(upload.filename or '').suffix}"
        size = await self.storage.save_file(upload.stream, file_name)
        saved.append(file_name)
        return StoredFile(file_name=file_name, size=size)


def get_product_service(
    session: AsyncSession,
    storage: StorageService | None = None,
) -> ProductService:
    """Get product service instance.

    Args:
        session: Async SQLAlchemy session.
        storage: File storage, defaults to the configured one.

    Returns:
        ProductService instance.
    """
    return ProductService(session, storage=storage)
