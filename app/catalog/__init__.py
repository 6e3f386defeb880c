"""Product Catalog.

Relational mapping, repositories and read models for products,
their translations, images and categories.
"""

from app.catalog.models import (
    Category,
    CategoryTranslation,
    Product,
    ProductImage,
    ProductInCategory,
    ProductTranslation,
)
from app.catalog.repository import (
    SqlCategoryRepository,
    SqlProductImageRepository,
    SqlProductRepository,
)
from app.catalog.service import (
    PaginatedResult,
    PaginationParams,
    ProductPagingRequest,
    ProductView,
    PublicProductPagingRequest,
    PublicProductService,
)

__all__ = [
    # Models
    "Category",
    "CategoryTranslation",
    "Product",
    "ProductImage",
    "ProductInCategory",
    "ProductTranslation",
    # Repositories
    "SqlCategoryRepository",
    "SqlProductImageRepository",
    "SqlProductRepository",
    # Service
    "PaginatedResult",
    "PaginationParams",
    "ProductPagingRequest",
    "ProductView",
    "PublicProductPagingRequest",
    "PublicProductService",
]
