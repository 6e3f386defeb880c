"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and infrastructure.
"""

from app.application.category_service import CategoryService
from app.application.product_service import (
    ProductService,
    ServiceResult,
    get_product_service,
)

__all__ = [
    "CategoryService",
    "ProductService",
    "ServiceResult",
    "get_product_service",
]
