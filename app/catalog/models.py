"""SQLAlchemy models for the product catalog.

Defines products, their per-language translations, images,
categories and the product/category association.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.domain.value_objects import CategoryLink, TranslationKey
from app.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Product entity in the catalog.

    Textual fields live on ProductTranslation, one row per language.

    Attributes:
        id: Auto-incremented product identifier.
        price: Current selling price.
        original_price: Price before discounts.
        stock: Units available.
        view_count: Number of times the product was viewed.
        date_created: Creation timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    original_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    # Relationships
    translations: Mapped[list["ProductTranslation"]] = relationship(
        "ProductTranslation",
        back_populates="product",
        cascade="all, delete-orphan",
    )
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductImage.sort_order",
    )
    category_links: Mapped[list["ProductInCategory"]] = relationship(
        "ProductInCategory",
        back_populates="product",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, price={self.price}, stock={self.stock})>"


class ProductTranslation(Base):
    """Language-specific textual fields of a product.

    Keyed by (product_id, language_id).
    """

    __tablename__ = "product_translations"

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    language_id: Mapped[str] = mapped_column(String(5), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    seo_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seo_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    seo_alias: Mapped[str | None] = mapped_column(String(200), nullable=True)

    product: Mapped["Product"] = relationship("Product", back_populates="translations")

    @property
    def key(self) -> TranslationKey:
        """Composite identity of this row."""
        return TranslationKey(product_id=self.product_id, language_id=self.language_id)

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductTranslation(key={self.product_id}:{self.language_id}, name={self.name})>"


class ProductImage(Base):
    """Image attached to a product.

    The file itself lives in storage; image_path is its file name there.
    At most one image per product has is_default set.
    """

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    image_path: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    caption: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    product: Mapped["Product"] = relationship("Product", back_populates="images")

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductImage(id={self.id}, product_id={self.product_id}, default={self.is_default})>"


class Category(Base):
    """Catalog category.

    Names live on CategoryTranslation, one row per language.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_show_on_home: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parent_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    translations: Mapped[list["CategoryTranslation"]] = relationship(
        "CategoryTranslation",
        back_populates="category",
        cascade="all, delete-orphan",
    )
    product_links: Mapped[list["ProductInCategory"]] = relationship(
        "ProductInCategory",
        back_populates="category",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, status={self.status})>"


class CategoryTranslation(Base):
    """Language-specific naming of a category."""

    __tablename__ = "category_translations"

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    )
    language_id: Mapped[str] = mapped_column(String(5), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    seo_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seo_title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    seo_alias: Mapped[str | None] = mapped_column(String(200), nullable=True)

    category: Mapped["Category"] = relationship("Category", back_populates="translations")


class ProductInCategory(Base):
    """Association row linking a product to a category."""

    __tablename__ = "product_in_categories"

    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    )

    product: Mapped["Product"] = relationship("Product", back_populates="category_links")
    category: Mapped["Category"] = relationship("Category", back_populates="product_links")

    @property
    def link(self) -> CategoryLink:
        """Composite identity of this row."""
        return CategoryLink(product_id=self.product_id, category_id=self.category_id)
