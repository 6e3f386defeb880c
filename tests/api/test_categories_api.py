"""Tests for category API endpoints."""

from fastapi.testclient import TestClient


class TestCategoriesApi:
    """Tests for /categories."""

    def test_create_category(self, client: TestClient) -> None:
        """Creating a category returns it."""
        response = client.post(
            "/categories",
            json={"name": "Giày", "language_id": "vi", "sort_order": 3, "is_show_on_home": True},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Giày"
        assert data["sort_order"] == 3
        assert data["is_show_on_home"] is True
        assert data["status"] == "active"

    def test_list_categories(self, client: TestClient, create_category) -> None:
        """Categories are listed with names in the requested language."""
        create_category("Shoes", language_id="en")
        create_category("Hats", language_id="en")

        data = client.get("/categories", params={"language_id": "en"}).json()

        assert data["total"] == 2
        assert [c["name"] for c in data["items"]] == ["Shoes", "Hats"]

    def test_get_category(self, client: TestClient, create_category) -> None:
        """A category can be fetched by id."""
        created = create_category("Giày")

        response = client.get(f"/categories/{created['id']}")

        assert response.status_code == 200
        assert response.json()["name"] == "Giày"

    def test_get_missing_category(self, client: TestClient) -> None:
        """Unknown categories are 404."""
        response = client.get("/categories/999")

        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"

    def test_create_unsupported_language(self, client: TestClient) -> None:
        """Unknown languages are a bad request."""
        response = client.post("/categories", json={"name": "Shoes", "language_id": "fr"})
        assert response.status_code == 400
