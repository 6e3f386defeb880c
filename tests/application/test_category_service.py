"""Tests for the category service."""

import pytest

from app.application.category_service import CategoryCreateRequest, CategoryService
from app.domain.exceptions import CategoryNotFoundError, UnsupportedLanguageError
from tests.factories import make_category_request


class TestCategoryService:
    """Tests for creating and reading categories."""

    async def test_create_and_get(self, category_service: CategoryService) -> None:
        """A category is readable in the language it was created in."""
        category_id = await category_service.create(
            CategoryCreateRequest(name="Giày", language_id="vi", sort_order=2, is_show_on_home=True)
        )

        category = await category_service.get_by_id(category_id, "vi")

        assert category.id == category_id
        assert category.name == "Giày"
        assert category.sort_order == 2
        assert category.is_show_on_home is True
        assert category.status == "active"

    async def test_get_in_other_language_has_no_name(self, category_service: CategoryService) -> None:
        """Missing translations leave the name empty."""
        category_id = await category_service.create(make_category_request("Giày"))

        category = await category_service.get_by_id(category_id, "en")

        assert category.name is None
        assert category.language_id == "en"

    async def test_get_missing_category(self, category_service: CategoryService) -> None:
        """Unknown ids raise CategoryNotFoundError."""
        with pytest.raises(CategoryNotFoundError):
            await category_service.get_by_id(999, "vi")

    async def test_get_all_ordered_by_sort_order(self, category_service: CategoryService) -> None:
        """Categories are listed by sort order, then id."""
        await category_service.create(CategoryCreateRequest(name="B", language_id="en", sort_order=2))
        await category_service.create(CategoryCreateRequest(name="A", language_id="en", sort_order=1))
        await category_service.create(CategoryCreateRequest(name="C", language_id="en", sort_order=2))

        categories = await category_service.get_all("en")

        assert [c.name for c in categories] == ["A", "B", "C"]

    async def test_unsupported_language(self, category_service: CategoryService) -> None:
        """Categories cannot be created in unknown languages."""
        with pytest.raises(UnsupportedLanguageError):
            await category_service.create(make_category_request("Shoes", language_id="jp"))
