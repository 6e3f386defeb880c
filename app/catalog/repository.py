"""SQLAlchemy repositories for the product catalog.

Implements the repository contracts of app.domain.repositories on
top of an async session.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import Select, and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.catalog.models import (
    Category,
    CategoryTranslation,
    Product,
    ProductImage,
    ProductInCategory,
    ProductTranslation,
)
from app.domain import repositories
from app.domain.value_objects import CategoryLink, TranslationKey


class SqlProductRepository(repositories.ProductRepository):
    """Repository for Product database operations.

    Handles products, their translations and category links,
    including the joined paging query used by catalog listings.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlProductRepository(session)
            rows = await repo.find_page(
                language_id="vi",
                keyword="shirt",
                category_id=3,
                limit=10,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def add(self, product: Product) -> Product:
        """Save a product to database.

        Args:
            product: Product to save, with any translations and images attached.

        Returns:
            Saved product with its id assigned.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def get_by_id(
        self,
        product_id: int,
        include_children: bool = False,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            include_children: Whether to eagerly load translations, images and links.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if include_children:
            query = query.options(
                selectinload(Product.translations),
                selectinload(Product.images),
                selectinload(Product.category_links),
            ).execution_options(populate_existing=True)

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_translation(self, key: TranslationKey) -> ProductTranslation | None:
        """Get a translation by its composite key."""
        return await self.session.get(ProductTranslation, key.as_tuple())

    async def find_page(
        self,
        language_id: str,
        keyword: str | None = None,
        category_id: int | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Any]:
        """Find products with their translation and default image.

        Args:
            language_id: Language of the joined translation.
            keyword: Case-insensitive substring of the product name.
            category_id: Only products linked to this category.
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Rows of (Product, ProductTranslation, ProductImage | None).
        """
        query = (
            self._filtered(language_id, keyword, category_id)
            .order_by(Product.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(query)
        return result.all()

    async def count(
        self,
        language_id: str,
        keyword: str | None = None,
        category_id: int | None = None,
    ) -> int:
        """Count products matching the same filters as find_page."""
        subquery = self._filtered(language_id, keyword, category_id).subquery()
        result = await self.session.execute(select(func.count()).select_from(subquery))
        return result.scalar_one()

    async def get_category_names(self, product_id: int, language_id: str) -> list[str]:
        """Get names of a product's categories in one language."""
        query = (
            select(CategoryTranslation.name)
            .join(
                ProductInCategory,
                ProductInCategory.category_id == CategoryTranslation.category_id,
            )
            .where(
                and_(
                    ProductInCategory.product_id == product_id,
                    CategoryTranslation.language_id == language_id,
                )
            )
            .order_by(CategoryTranslation.category_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_link(self, link: CategoryLink) -> ProductInCategory | None:
        """Get a product-category association row."""
        return await self.session.get(ProductInCategory, link.as_tuple())

    async def add_link(self, link: CategoryLink) -> ProductInCategory:
        """Insert a product-category association row."""
        row = ProductInCategory(product_id=link.product_id, category_id=link.category_id)
        self.session.add(row)
        await self.session.flush()
        return row

    async def remove_link(self, row: ProductInCategory) -> None:
        """Delete a product-category association row."""
        await self.session.delete(row)
        await self.session.flush()

    async def delete(self, product: Product) -> None:
        """Delete a product; translations, images and links cascade."""
        await self.session.delete(product)
        await self.session.flush()

    def _filtered(
        self,
        language_id: str,
        keyword: str | None,
        category_id: int | None,
    ) -> Select:
        """Build the joined, filtered product query without paging."""
        query = (
            select(Product, ProductTranslation, ProductImage)
            .join(
                ProductTranslation,
                and_(
                    ProductTranslation.product_id == Product.id,
                    ProductTranslation.language_id == language_id,
                ),
            )
            .outerjoin(
                ProductImage,
                and_(
                    ProductImage.product_id == Product.id,
                    ProductImage.is_default.is_(True),
                ),
            )
        )

        if keyword:
            query = query.where(ProductTranslation.name.icontains(keyword, autoescape=True))

        # 0 means "any category"
        if category_id:
            query = query.join(
                ProductInCategory,
                and_(
                    ProductInCategory.product_id == Product.id,
                    ProductInCategory.category_id == category_id,
                ),
            )

        return query


class SqlProductImageRepository(repositories.ProductImageRepository):
    """Repository for ProductImage database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, image: ProductImage) -> ProductImage:
        """Save an image row and assign its id."""
        self.session.add(image)
        await self.session.flush()
        return image

    async def get_by_id(self, image_id: int) -> ProductImage | None:
        """Get image by ID."""
        return await self.session.get(ProductImage, image_id)

    async def get_default(self, product_id: int) -> ProductImage | None:
        """Get the default image of a product."""
        query = (
            select(ProductImage)
            .where(
                and_(
                    ProductImage.product_id == product_id,
                    ProductImage.is_default.is_(True),
                )
            )
            .order_by(ProductImage.id)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_by_product(self, product_id: int) -> list[ProductImage]:
        """Get images of a product ordered by sort order."""
        query = (
            select(ProductImage)
            .where(ProductImage.product_id == product_id)
            .order_by(ProductImage.sort_order, ProductImage.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def clear_default(self, product_id: int, keep_image_id: int | None = None) -> int:
        """Unset the default flag on a product's images.

        Args:
            product_id: Owning product.
            keep_image_id: Image to leave untouched.

        Returns:
            Number of images changed.
        """
        conditions = [
            ProductImage.product_id == product_id,
            ProductImage.is_default.is_(True),
        ]
        if keep_image_id is not None:
            conditions.append(ProductImage.id != keep_image_id)

        result = await self.session.execute(
            update(ProductImage)
            .where(and_(*conditions))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    async def delete(self, image: ProductImage) -> None:
        """Delete an image row."""
        await self.session.delete(image)
        await self.session.flush()


class SqlCategoryRepository(repositories.CategoryRepository):
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, category: Category) -> Category:
        """Save a category and assign its id."""
        self.session.add(category)
        await self.session.flush()
        return category

    async def get_by_id(self, category_id: int) -> Category | None:
        """Get category by ID."""
        return await self.session.get(Category, category_id)

    async def get_translation(self, category_id: int, language_id: str) -> CategoryTranslation | None:
        """Get a category translation by its composite key."""
        return await self.session.get(CategoryTranslation, (category_id, language_id))

    async def find_id_by_name(self, name: str) -> int | None:
        """Resolve a category name to its id.

        Names are matched exactly in any language; the lowest id wins
        when several categories share a name.
        """
        query = (
            select(CategoryTranslation.category_id)
            .where(CategoryTranslation.name == name)
            .order_by(CategoryTranslation.category_id)
            .limit(1)
        )
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list_with_names(
        self, language_id: str
    ) -> Sequence[tuple[Category, CategoryTranslation | None]]:
        """Get all categories with their translation in one language."""
        query = (
            select(Category, CategoryTranslation)
            .outerjoin(
                CategoryTranslation,
                and_(
                    CategoryTranslation.category_id == Category.id,
                    CategoryTranslation.language_id == language_id,
                ),
            )
            .order_by(Category.sort_order, Category.id)
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]
