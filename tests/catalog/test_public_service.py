"""Tests for public catalog browsing and paging helpers."""

import pytest

from app.application.category_service import CategoryService
from app.application.product_service import (
    CategoryAssignItem,
    CategoryAssignRequest,
    ProductService,
)
from app.catalog.service import (
    PaginatedResult,
    PaginationParams,
    PublicProductPagingRequest,
    PublicProductService,
    check_language,
)
from app.domain.exceptions import UnsupportedLanguageError
from tests.factories import make_category_request, make_product_request, make_upload


class TestPagination:
    """Tests for paging parameters and results."""

    def test_offset_and_limit(self) -> None:
        """Offset skips the earlier pages."""
        params = PaginationParams(page=3, page_size=20)
        assert params.offset == 40
        assert params.limit == 20

    def test_result_page_counts(self) -> None:
        """Total pages round up; next/prev follow the page number."""
        result = PaginatedResult(items=[], total=21, page=2, page_size=10)
        assert result.total_pages == 3
        assert result.has_next is True
        assert result.has_prev is True

    def test_empty_result(self) -> None:
        """An empty listing has no pages."""
        result = PaginatedResult(items=[], total=0, page=1, page_size=10)
        assert result.total_pages == 0
        assert result.has_next is False
        assert result.has_prev is False


class TestCheckLanguage:
    """Tests for language validation."""

    def test_normalizes(self) -> None:
        """Accepted ids are trimmed and lowercased."""
        assert check_language(" EN ") == "en"

    def test_rejects_unknown(self) -> None:
        """Ids outside the configured list are rejected."""
        with pytest.raises(UnsupportedLanguageError):
            check_language("fr")


class TestPublicProductService:
    """Tests for browsing products by category."""

    @pytest.fixture
    async def catalog(
        self,
        product_service: ProductService,
        category_service: CategoryService,
    ) -> dict[str, int]:
        """Two categorized products and one without category."""
        shoes = await category_service.create(make_category_request("Giày"))
        hats = await category_service.create(make_category_request("Mũ"))
        sneaker = await product_service.create(
            make_product_request("Sneaker", thumbnail_image=make_upload())
        )
        cap = await product_service.create(make_product_request("Cap"))
        sock = await product_service.create(make_product_request("Sock"))
        await product_service.category_assign(sneaker, CategoryAssignRequest([CategoryAssignItem("Giày", True)]))
        await product_service.category_assign(cap, CategoryAssignRequest([CategoryAssignItem("Mũ", True)]))
        return {"shoes": shoes, "hats": hats, "sneaker": sneaker, "cap": cap, "sock": sock}

    async def test_filters_by_category(self, session, catalog: dict[str, int]) -> None:
        """Only products of the category are returned."""
        service = PublicProductService(session)

        page = await service.get_all_by_category_id(
            "vi", PublicProductPagingRequest(category_id=catalog["shoes"])
        )

        assert [p.id for p in page.items] == [catalog["sneaker"]]
        assert page.total == 1
        assert page.items[0].thumbnail_image is not None

    async def test_no_category_lists_everything(self, session, catalog: dict[str, int]) -> None:
        """Without a category every translated product is listed."""
        service = PublicProductService(session)

        page = await service.get_all_by_category_id("vi", PublicProductPagingRequest(page_size=2))

        assert page.total == 3
        assert [p.id for p in page.items] == [catalog["sneaker"], catalog["cap"]]
        assert page.has_next is True

    async def test_product_without_image_has_no_thumbnail(self, session, catalog: dict[str, int]) -> None:
        """Listings do not substitute a placeholder image."""
        service = PublicProductService(session)

        page = await service.get_all_by_category_id(
            "vi", PublicProductPagingRequest(category_id=catalog["hats"])
        )

        assert page.items[0].thumbnail_image is None

    async def test_unsupported_language(self, session) -> None:
        """Unknown languages are rejected."""
        service = PublicProductService(session)

        with pytest.raises(UnsupportedLanguageError):
            await service.get_all_by_category_id("xx", PublicProductPagingRequest())
