"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from dataclasses import dataclass
from typing import Self

from app.domain.base import ValueObject


# ============================================================================
# Composite Keys
# ============================================================================


@dataclass(frozen=True)
class TranslationKey(ValueObject):
    """Identity of a product translation row.

    A product has at most one translation per language, so the pair
    (product_id, language_id) addresses exactly one row.
    """

    product_id: int
    language_id: str

    def __post_init__(self) -> None:
        """Normalize the language id."""
        object.__setattr__(self, "language_id", self.language_id.strip().lower())

    @classmethod
    def of(cls, product_id: int, language_id: str) -> Self:
        """Create a key from its parts.

        Args:
            product_id: Owning product id.
            language_id: Language code (e.g. "vi", "en").

        Returns:
            TranslationKey instance.
        """
        return cls(product_id=product_id, language_id=language_id)

    def as_tuple(self) -> tuple[int, str]:
        """Return the key in primary-key column order."""
        return (self.product_id, self.language_id)

    def __str__(self) -> str:
        return f"{self.product_id}:{self.language_id}"


@dataclass(frozen=True)
class CategoryLink(ValueObject):
    """Identity of a product-in-category association row."""

    product_id: int
    category_id: int

    def as_tuple(self) -> tuple[int, int]:
        """Return the key in primary-key column order."""
        return (self.product_id, self.category_id)


# ============================================================================
# Uploads
# ============================================================================


@dataclass(frozen=True)
class StoredFile(ValueObject):
    """A file written to storage.

    Attributes:
        file_name: Name under the storage folder.
        size: Bytes written.
    """

    file_name: str
    size: int
