"""Domain layer.

Value objects, domain errors and repository contracts for the catalog.
"""

from app.domain.base import ValueObject
from app.domain.exceptions import (
    CategoryNotFoundError,
    DomainError,
    EntityNotFoundError,
    ImageNotFoundError,
    ProductNotFoundError,
    UnsupportedLanguageError,
)
from app.domain.value_objects import CategoryLink, StoredFile, TranslationKey

__all__ = [
    # Base
    "ValueObject",
    # Value objects
    "CategoryLink",
    "StoredFile",
    "TranslationKey",
    # Exceptions
    "CategoryNotFoundError",
    "DomainError",
    "EntityNotFoundError",
    "ImageNotFoundError",
    "ProductNotFoundError",
    "UnsupportedLanguageError",
]
