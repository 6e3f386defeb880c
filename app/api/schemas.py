"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(BaseModel):
    """Base paginated response."""

    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages")
    has_more: bool = Field(..., description="Whether there are more pages")


class ChangedResponse(BaseModel):
    """Outcome of an update that may be a no-op."""

    changed: bool = Field(..., description="Whether any stored value changed")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product in one language."""

    id: int = Field(..., description="Product identifier")
    price: Decimal = Field(..., description="Current selling price")
    original_price: Decimal = Field(..., description="Price before discounts")
    stock: int = Field(..., description="Units in stock")
    view_count: int = Field(..., description="Number of views")
    date_created: datetime = Field(..., description="When the product was created")
    language_id: str = Field(..., description="Language of the text fields")
    name: str | None = Field(default=None, description="Product name")
    description: str | None = Field(default=None, description="Short description")
    details: str | None = Field(default=None, description="Long description")
    seo_description: str | None = Field(default=None, description="SEO description")
    seo_title: str | None = Field(default=None, description="SEO title")
    seo_alias: str | None = Field(default=None, description="SEO URL alias")
    thumbnail_image: str | None = Field(default=None, description="Default image file name")
    thumbnail_url: str | None = Field(default=None, description="Default image URL")
    categories: list[str] = Field(default_factory=list, description="Category names")


class ProductsListResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductSchema] = Field(..., description="List of products")


class ViewCountResponse(BaseModel):
    """View count after recording a view."""

    view_count: int = Field(..., description="Updated view count")


class CategoryAssignItemSchema(BaseModel):
    """Desired membership in one category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    selected: bool = Field(..., description="Whether the product belongs to it")


class CategoryAssignRequestSchema(BaseModel):
    """Desired category selection of a product."""

    categories: list[CategoryAssignItemSchema] = Field(
        default_factory=list, description="Categories to select or deselect"
    )


class CategoryAssignResponse(BaseModel):
    """Result of a category assignment."""

    success: bool = Field(..., description="Whether the assignment was applied")
    product_id: int = Field(..., description="Product identifier")


# ============================================================================
# Product Image Schemas
# ============================================================================


class ProductImageSchema(BaseModel):
    """Product image metadata."""

    id: int = Field(..., description="Image identifier")
    product_id: int = Field(..., description="Owning product")
    image_path: str = Field(..., description="Stored file name")
    url: str | None = Field(default=None, description="Public URL of the file")
    caption: str | None = Field(default=None, description="Caption")
    is_default: bool = Field(..., description="Whether this is the product thumbnail")
    date_created: datetime = Field(..., description="When the image was added")
    sort_order: int = Field(..., description="Display order")
    file_size: int = Field(..., description="File size in bytes")


class ProductImagesResponse(BaseModel):
    """Images of a product."""

    items: list[ProductImageSchema] = Field(..., description="List of images")
    total: int = Field(..., description="Number of images")


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequestSchema(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    language_id: str = Field(..., min_length=2, max_length=5, description="Language of the name")
    sort_order: int = Field(default=0, description="Display order")
    is_show_on_home: bool = Field(default=False, description="Show on the home page")
    parent_id: int | None = Field(default=None, description="Parent category")
    seo_description: str | None = Field(default=None, description="SEO description")
    seo_title: str | None = Field(default=None, description="SEO title")
    seo_alias: str | None = Field(default=None, description="SEO URL alias")


class CategorySchema(BaseModel):
    """Category in one language."""

    id: int = Field(..., description="Category identifier")
    name: str | None = Field(default=None, description="Category name")
    language_id: str = Field(..., description="Language of the name")
    sort_order: int = Field(..., description="Display order")
    is_show_on_home: bool = Field(..., description="Show on the home page")
    parent_id: int | None = Field(default=None, description="Parent category")
    status: str = Field(..., description="active or inactive")


class CategoryListResponse(BaseModel):
    """All categories in one language."""

    items: list[CategorySchema] = Field(..., description="List of categories")
    total: int = Field(..., description="Number of categories")
