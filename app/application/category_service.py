"""Category application service.

Creates categories with their first translation and lists them
in one language.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import Category, CategoryTranslation
from app.catalog.repository import SqlCategoryRepository
from app.catalog.service import check_language
from app.domain.exceptions import CategoryNotFoundError
from app.domain.repositories import CategoryRepository
from app.infrastructure.database import transaction

logger = structlog.get_logger()


@dataclass
class CategoryCreateRequest:
    """Fields of a new category and its first translation."""

    name: str
    language_id: str
    sort_order: int = 0
    is_show_on_home: bool = False
    parent_id: int | None = None
    seo_description: str | None = None
    seo_title: str | None = None
    seo_alias: str | None = None


@dataclass
class CategoryView:
    """Category as seen in one language."""

    id: int
    name: str | None
    language_id: str
    sort_order: int
    is_show_on_home: bool
    parent_id: int | None
    status: str


class CategoryService:
    """Application service for categories."""

    def __init__(
        self,
        session: AsyncSession,
        category_repo: CategoryRepository | None = None,
    ) -> None:
        self.session = session
        self.categories = category_repo or SqlCategoryRepository(session)

    async def create(self, request: CategoryCreateRequest) -> int:
        """Create a category.

        Returns:
            ID of the new category.
        """
        language_id = check_language(request.language_id)

        category = Category(
            sort_order=request.sort_order,
            is_show_on_home=request.is_show_on_home,
            parent_id=request.parent_id,
            status="active",
            translations=[
                CategoryTranslation(
                    language_id=language_id,
                    name=request.name,
                    seo_description=request.seo_description,
                    seo_title=request.seo_title,
                    seo_alias=request.seo_alias,
                )
            ],
        )
        async with transaction(self.session):
            await self.categories.add(category)

        logger.info("Category created", category_id=category.id, name=request.name)
        return category.id

    async def get_all(self, language_id: str) -> list[CategoryView]:
        """List categories with their names in one language."""
        language_id = check_language(language_id)
        rows = await self.categories.list_with_names(language_id)
        return [self._to_view(category, translation, language_id) for category, translation in rows]

    async def get_by_id(self, category_id: int, language_id: str) -> CategoryView:
        """Get a category in one language.

        Raises:
            CategoryNotFoundError: If the category does not exist.
        """
        language_id = check_language(language_id)
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        translation = await self.categories.get_translation(category_id, language_id)
        return self._to_view(category, translation, language_id)

    @staticmethod
    def _to_view(
        category: Category,
        translation: CategoryTranslation | None,
        language_id: str,
    ) -> CategoryView:
        return CategoryView(
            id=category.id,
            name=translation.name if translation else None,
            language_id=language_id,
            sort_order=category.sort_order,
            is_show_on_home=category.is_show_on_home,
            parent_id=category.parent_id,
            status=category.status,
        )
