"""Tests for domain value objects."""

from dataclasses import FrozenInstanceError

import pytest

from app.domain import CategoryLink, StoredFile, TranslationKey


class TestTranslationKey:
    """Tests for TranslationKey value object."""

    def test_language_normalized_to_lowercase(self) -> None:
        """Language id is trimmed and lowercased."""
        key = TranslationKey(product_id=1, language_id=" EN ")
        assert key.language_id == "en"

    def test_of_builds_equal_keys(self) -> None:
        """Keys with the same parts are equal and hash alike."""
        a = TranslationKey.of(5, "vi")
        b = TranslationKey(product_id=5, language_id="VI")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_language_is_different_key(self) -> None:
        """Same product in another language is another row."""
        assert TranslationKey.of(5, "vi") != TranslationKey.of(5, "en")

    def test_as_tuple_matches_primary_key_order(self) -> None:
        """as_tuple returns (product_id, language_id)."""
        assert TranslationKey.of(7, "en").as_tuple() == (7, "en")

    def test_str(self) -> None:
        """String form joins the parts."""
        assert str(TranslationKey.of(7, "en")) == "7:en"

    def test_immutable(self) -> None:
        """Keys cannot be changed after creation."""
        key = TranslationKey.of(1, "vi")
        with pytest.raises(FrozenInstanceError):
            key.product_id = 2  # type: ignore[misc]


class TestCategoryLink:
    """Tests for CategoryLink value object."""

    def test_as_tuple(self) -> None:
        """as_tuple returns (product_id, category_id)."""
        assert CategoryLink(product_id=3, category_id=9).as_tuple() == (3, 9)

    def test_equality(self) -> None:
        """Links are compared by value."""
        assert CategoryLink(3, 9) == CategoryLink(product_id=3, category_id=9)
        assert CategoryLink(3, 9) != CategoryLink(9, 3)

    def test_usable_in_sets(self) -> None:
        """Duplicate links collapse in a set."""
        links = {CategoryLink(1, 2), CategoryLink(1, 2), CategoryLink(1, 3)}
        assert len(links) == 2


class TestStoredFile:
    """Tests for StoredFile value object."""

    def test_fields(self) -> None:
        """StoredFile keeps name and size."""
        stored = StoredFile(file_name="a.jpg", size=12)
        assert stored.file_name == "a.jpg"
        assert stored.size == 12
