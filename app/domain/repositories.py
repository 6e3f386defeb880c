"""Repository contracts.

Services depend on these capabilities rather than on a concrete
store. The SQLAlchemy implementations live in app.catalog.repository.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from app.domain.value_objects import CategoryLink, TranslationKey

if TYPE_CHECKING:
    from app.catalog.models import (
        Category,
        CategoryTranslation,
        Product,
        ProductImage,
        ProductInCategory,
        ProductTranslation,
    )

    ProductRow = tuple[Product, ProductTranslation, ProductImage | None]


class ProductRepository(ABC):
    """Persistence operations for products, translations and category links."""

    @abstractmethod
    async def add(self, product: "Product") -> "Product":
        """Insert a product together with any attached children."""

    @abstractmethod
    async def get_by_id(self, product_id: int, include_children: bool = False) -> "Product | None":
        """Load a product, optionally with translations, images and links."""

    @abstractmethod
    async def get_translation(self, key: TranslationKey) -> "ProductTranslation | None":
        """Load one translation by its composite key."""

    @abstractmethod
    async def find_page(
        self,
        language_id: str,
        keyword: str | None = None,
        category_id: int | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence["ProductRow"]:
        """Product rows joined with translation and default image."""

    @abstractmethod
    async def count(
        self,
        language_id: str,
        keyword: str | None = None,
        category_id: int | None = None,
    ) -> int:
        """Count rows matched by find_page with the same filters."""

    @abstractmethod
    async def get_category_names(self, product_id: int, language_id: str) -> list[str]:
        """Names, in one language, of the categories a product belongs to."""

    @abstractmethod
    async def get_link(self, link: CategoryLink) -> "ProductInCategory | None":
        """Load one association row."""

    @abstractmethod
    async def add_link(self, link: CategoryLink) -> "ProductInCategory":
        """Insert an association row."""

    @abstractmethod
    async def remove_link(self, row: "ProductInCategory") -> None:
        """Delete an association row."""

    @abstractmethod
    async def delete(self, product: "Product") -> None:
        """Delete a product and its children."""


class ProductImageRepository(ABC):
    """Persistence operations for product images."""

    @abstractmethod
    async def add(self, image: "ProductImage") -> "ProductImage":
        """Insert an image row."""

    @abstractmethod
    async def get_by_id(self, image_id: int) -> "ProductImage | None":
        """Load an image by id."""

    @abstractmethod
    async def get_default(self, product_id: int) -> "ProductImage | None":
        """Load the default image of a product."""

    @abstractmethod
    async def list_by_product(self, product_id: int) -> list["ProductImage"]:
        """Images of a product ordered by sort order."""

    @abstractmethod
    async def clear_default(self, product_id: int, keep_image_id: int | None = None) -> int:
        """Unset is_default on a product's images except keep_image_id."""

    @abstractmethod
    async def delete(self, image: "ProductImage") -> None:
        """Delete an image row."""


class CategoryRepository(ABC):
    """Persistence operations for categories."""

    @abstractmethod
    async def add(self, category: "Category") -> "Category":
        """Insert a category with its translations."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> "Category | None":
        """Load a category by id."""

    @abstractmethod
    async def get_translation(self, category_id: int, language_id: str) -> "CategoryTranslation | None":
        """Load one category translation."""

    @abstractmethod
    async def find_id_by_name(self, name: str) -> int | None:
        """Resolve a category name, in any language, to its id."""

    @abstractmethod
    async def list_with_names(
        self, language_id: str
    ) -> Sequence[tuple["Category", "CategoryTranslation | None"]]:
        """All categories with their translation in one language."""
