#!/usr/bin/env python3
"""Seed catalog script.

Creates the database tables and seeds a starter set of categories,
optionally with a few sample products assigned to them.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --language en --with-products
"""

import argparse
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.application.category_service import CategoryCreateRequest, CategoryService
from app.application.product_service import (
    CategoryAssignItem,
    CategoryAssignRequest,
    ProductCreateRequest,
    ProductService,
)
from app.infrastructure.database import async_session_factory, create_tables

CATEGORY_NAMES = {
    "vi": ["Áo nam", "Áo nữ", "Phụ kiện"],
    "en": ["Men's shirts", "Women's shirts", "Accessories"],
}

SAMPLE_PRODUCTS = [
    ("Classic Oxford Shirt", Decimal("250000"), Decimal("300000"), 0),
    ("Linen Blouse", Decimal("320000"), Decimal("320000"), 1),
    ("Leather Belt", Decimal("150000"), Decimal("180000"), 2),
]


async def seed(language_id: str, with_products: bool) -> dict:
    """Seed categories and sample products.

    Args:
        language_id: Language of the seeded names.
        with_products: Whether to create sample products.

    Returns:
        Seeding result.
    """
    names = CATEGORY_NAMES.get(language_id, CATEGORY_NAMES["en"])

    async with async_session_factory() as session:
        categories = CategoryService(session)
        for position, name in enumerate(names):
            await categories.create(
                CategoryCreateRequest(name=name, language_id=language_id, sort_order=position)
            )

        created_products = 0
        if with_products:
            products = ProductService(session)
            for title, price, original_price, category_index in SAMPLE_PRODUCTS:
                product_id = await products.create(
                    ProductCreateRequest(
                        price=price,
                        original_price=original_price,
                        stock=10,
                        name=title,
                        language_id=language_id,
                    )
                )
                await products.category_assign(
                    product_id,
                    CategoryAssignRequest(
                        categories=[CategoryAssignItem(name=names[category_index], selected=True)]
                    ),
                )
                created_products += 1

    return {"categories_created": len(names), "products_created": created_products}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed catalog categories and sample products",
    )
    parser.add_argument(
        "--language",
        default="vi",
        help="Language of the seeded names (default: vi)",
    )
    parser.add_argument(
        "--with-products",
        action="store_true",
        help="Also create sample products",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("EShop Catalog Seeder")
    print("=" * 60)
    print(f"Language: {args.language}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(args.language, args.with_products)
    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Products: {result['products_created']}")

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
