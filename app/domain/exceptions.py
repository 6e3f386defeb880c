"""Domain exceptions.

All domain-level errors that represent business rule violations.
These exceptions are raised by services when an addressed entity
does not exist or an operation is given invalid input.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the API layer.
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Not Found Errors
# ============================================================================


class EntityNotFoundError(DomainError):
    """Raised when an entity addressed by id does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: int | str) -> None:
        """Initialize entity not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "ProductImage").
            entity_id: ID that did not resolve.
        """
        super().__init__(
            f"Cannot find {entity_type} with id {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ProductNotFoundError(EntityNotFoundError):
    """Raised when a product (or its translation) is not found."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int) -> None:
        super().__init__("Product", product_id)


class ImageNotFoundError(EntityNotFoundError):
    """Raised when a product image is not found."""

    error_code = "IMAGE_NOT_FOUND"

    def __init__(self, image_id: int) -> None:
        super().__init__("ProductImage", image_id)


class CategoryNotFoundError(EntityNotFoundError):
    """Raised when a category is not found."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: int | str) -> None:
        super().__init__("Category", category_id)


# ============================================================================
# Validation Errors
# ============================================================================


class UnsupportedLanguageError(DomainError):
    """Raised when a language id is not one of the configured languages."""

    error_code = "UNSUPPORTED_LANGUAGE"

    def __init__(self, language_id: str, supported: list[str]) -> None:
        """Initialize unsupported language error.

        Args:
            language_id: The rejected language id.
            supported: Language ids that are accepted.
        """
        super().__init__(
            f"Language '{language_id}' is not supported. Supported languages: {supported}",
            details={"language_id": language_id, "supported": supported},
        )
