"""Tests for product management API endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient

from app.infrastructure.storage import FileStorageService


class TestCreateProduct:
    """Tests for POST /products."""

    def test_create_product(self, create_product) -> None:
        """Creating a product returns it in its language."""
        data = create_product("Áo sơ mi", description="Cotton")

        assert data["id"] > 0
        assert data["name"] == "Áo sơ mi"
        assert data["description"] == "Cotton"
        assert data["language_id"] == "vi"
        assert Decimal(data["price"]) == Decimal("100")
        assert data["stock"] == 10
        assert data["view_count"] == 0
        assert data["thumbnail_image"] == "no-image.jpg"

    def test_create_with_thumbnail(self, create_product, storage: FileStorageService) -> None:
        """The uploaded thumbnail is stored and exposed by URL."""
        data = create_product(with_thumbnail=True)

        assert data["thumbnail_image"].endswith(".jpg")
        assert data["thumbnail_url"] == f"/user-content/{data['thumbnail_image']}"
        assert storage.path_of(data["thumbnail_image"]).read_bytes() == b"jpeg-bytes"

    def test_create_missing_name(self, client: TestClient) -> None:
        """Required form fields are validated."""
        response = client.post("/products", data={"price": "1", "original_price": "1", "stock": "1"})
        assert response.status_code == 422

    def test_create_unsupported_language(self, client: TestClient) -> None:
        """Unknown languages are a bad request."""
        response = client.post(
            "/products",
            data={"price": "1", "original_price": "1", "stock": "1", "name": "x", "language_id": "fr"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "UNSUPPORTED_LANGUAGE"
        assert "request_id" in body


class TestGetProducts:
    """Tests for GET /products and GET /products/{id}."""

    def test_get_product(self, client: TestClient, create_product) -> None:
        """A product can be fetched by id."""
        created = create_product("Mũ")

        response = client.get(f"/products/{created['id']}", params={"language_id": "vi"})

        assert response.status_code == 200
        assert response.json()["name"] == "Mũ"

    def test_get_product_in_missing_language(self, client: TestClient, create_product) -> None:
        """Missing translations come back as empty fields."""
        created = create_product()

        response = client.get(f"/products/{created['id']}", params={"language_id": "en"})

        assert response.status_code == 200
        assert response.json()["name"] is None

    def test_get_missing_product(self, client: TestClient) -> None:
        """Unknown products are 404 with an error body."""
        response = client.get("/products/999")

        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PRODUCT_NOT_FOUND"
        assert {"field": "entity_id", "message": "999"} in body["details"]

    def test_list_products_paged(self, client: TestClient, create_product) -> None:
        """Listing honors page and page_size."""
        for i in range(3):
            create_product(f"Item {i}")

        response = client.get("/products", params={"language_id": "vi", "page": 2, "page_size": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["total_pages"] == 2
        assert data["has_more"] is False
        assert [p["name"] for p in data["items"]] == ["Item 2"]

    def test_list_products_keyword(self, client: TestClient, create_product) -> None:
        """Listing filters by keyword."""
        create_product("Blue Shirt")
        create_product("Hat")

        response = client.get("/products", params={"keyword": "shirt"})

        assert [p["name"] for p in response.json()["items"]] == ["Blue Shirt"]

    def test_list_rejects_bad_page(self, client: TestClient) -> None:
        """Page numbers start at 1."""
        response = client.get("/products", params={"page": 0})
        assert response.status_code == 422


class TestUpdateProduct:
    """Tests for PUT /products/{id}."""

    def test_update_product(self, client: TestClient, create_product) -> None:
        """The translation is overwritten."""
        created = create_product("Cũ")

        response = client.put(
            f"/products/{created['id']}",
            data={"name": "Mới", "language_id": "vi", "seo_title": "Moi"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Mới"
        assert data["seo_title"] == "Moi"

    def test_update_missing_translation(self, client: TestClient, create_product) -> None:
        """Updating a language the product lacks is 404."""
        created = create_product()

        response = client.put(f"/products/{created['id']}", data={"name": "Shirt", "language_id": "en"})

        assert response.status_code == 404


class TestPriceStockViews:
    """Tests for price, stock and view endpoints."""

    def test_update_price(self, client: TestClient, create_product) -> None:
        """Price changes report whether anything changed."""
        created = create_product()

        first = client.patch(f"/products/{created['id']}/price/80.5")
        second = client.patch(f"/products/{created['id']}/price/80.5")

        assert first.json() == {"changed": True}
        assert second.json() == {"changed": False}
        product = client.get(f"/products/{created['id']}").json()
        assert Decimal(product["price"]) == Decimal("80.5")

    def test_negative_price_rejected(self, client: TestClient, create_product) -> None:
        """Negative prices are a bad request."""
        created = create_product()

        response = client.patch(f"/products/{created['id']}/price/-1")

        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PRICE"

    def test_update_stock(self, client: TestClient, create_product) -> None:
        """Stock deltas accumulate."""
        created = create_product()

        client.patch(f"/products/{created['id']}/stock/5")
        response = client.patch(f"/products/{created['id']}/stock/-3")

        assert response.json() == {"changed": True}
        assert client.get(f"/products/{created['id']}").json()["stock"] == 12

    def test_update_stock_missing_product(self, client: TestClient) -> None:
        """Unknown products are 404."""
        response = client.patch("/products/999/stock/1")
        assert response.status_code == 404

    def test_add_view(self, client: TestClient, create_product) -> None:
        """Each view increments the counter."""
        created = create_product()

        client.post(f"/products/{created['id']}/views")
        response = client.post(f"/products/{created['id']}/views")

        assert response.json() == {"view_count": 2}


class TestCategoryAssign:
    """Tests for PUT /products/{id}/categories."""

    def test_assign_categories(self, client: TestClient, create_product, create_category) -> None:
        """Selected categories show up on the product."""
        create_category("Áo nam")
        create_category("Áo nữ")
        created = create_product()

        response = client.put(
            f"/products/{created['id']}/categories",
            json={"categories": [{"name": "Áo nam", "selected": True}, {"name": "Áo nữ", "selected": False}]},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "product_id": created["id"]}
        product = client.get(f"/products/{created['id']}").json()
        assert product["categories"] == ["Áo nam"]

    def test_unknown_category(self, client: TestClient, create_product) -> None:
        """Unknown category names are a bad request."""
        created = create_product()

        response = client.put(
            f"/products/{created['id']}/categories",
            json={"categories": [{"name": "Nope", "selected": True}]},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    def test_missing_product(self, client: TestClient) -> None:
        """Unknown products are 404."""
        response = client.put("/products/999/categories", json={"categories": []})

        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestDeleteProduct:
    """Tests for DELETE /products/{id}."""

    def test_delete_product(self, client: TestClient, create_product, storage: FileStorageService) -> None:
        """Deleting removes the product and its files."""
        created = create_product(with_thumbnail=True)

        response = client.delete(f"/products/{created['id']}")

        assert response.status_code == 204
        assert client.get(f"/products/{created['id']}").status_code == 404
        assert not storage.path_of(created["thumbnail_image"]).exists()

    def test_delete_missing_product(self, client: TestClient) -> None:
        """Deleting an unknown product is 404."""
        response = client.delete("/products/999")
        assert response.status_code == 404


class TestProductImages:
    """Tests for /products/{id}/images."""

    def test_image_lifecycle(self, client: TestClient, create_product, storage: FileStorageService) -> None:
        """Images can be added, listed, updated and removed."""
        product_id = create_product()["id"]

        added = client.post(
            f"/products/{product_id}/images",
            data={"caption": "Front", "is_default": "true", "sort_order": "1"},
            files={"image_file": ("front.png", b"png-bytes", "image/png")},
        )
        assert added.status_code == 201
        image = added.json()
        assert image["is_default"] is True
        assert image["file_size"] == len(b"png-bytes")
        assert image["url"] == f"/user-content/{image['image_path']}"

        listed = client.get(f"/products/{product_id}/images").json()
        assert listed["total"] == 1
        assert listed["items"][0]["id"] == image["id"]

        updated = client.put(
            f"/products/{product_id}/images/{image['id']}",
            data={"caption": "Back"},
        )
        assert updated.status_code == 200
        assert updated.json()["caption"] == "Back"
        assert updated.json()["is_default"] is True

        removed = client.delete(f"/products/{product_id}/images/{image['id']}")
        assert removed.status_code == 204
        assert client.get(f"/products/{product_id}/images/{image['id']}").status_code == 404
        assert not storage.path_of(image["image_path"]).exists()

    def test_image_of_other_product_is_not_found(self, client: TestClient, create_product) -> None:
        """Images are only reachable through their own product."""
        owner = create_product(with_thumbnail=True)
        other = create_product()
        image_id = client.get(f"/products/{owner['id']}/images").json()["items"][0]["id"]

        response = client.get(f"/products/{other['id']}/images/{image_id}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "IMAGE_NOT_FOUND"

    def test_add_image_missing_product(self, client: TestClient) -> None:
        """Images cannot be added to unknown products."""
        response = client.post(
            "/products/999/images",
            files={"image_file": ("a.jpg", b"x", "image/jpeg")},
        )
        assert response.status_code == 404
