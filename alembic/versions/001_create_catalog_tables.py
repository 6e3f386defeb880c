"""Create catalog tables.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create product, category and association tables."""
    # Products table
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('price', sa.Numeric(18, 2), nullable=False),
        sa.Column('original_price', sa.Numeric(18, 2), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    # Product translations, one per (product, language)
    op.create_table(
        'product_translations',
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('language_id', sa.String(5), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('seo_description', sa.String(500), nullable=True),
        sa.Column('seo_title', sa.String(200), nullable=True),
        sa.Column('seo_alias', sa.String(200), nullable=True),
    )

    # Product images
    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('image_path', sa.String(200), nullable=False, server_default=''),
        sa.Column('caption', sa.String(200), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('file_size', sa.Integer(), nullable=False, server_default='0'),
    )

    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_show_on_home', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
    )

    op.create_table(
        'category_translations',
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('language_id', sa.String(5), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, index=True),
        sa.Column('seo_description', sa.String(500), nullable=True),
        sa.Column('seo_title', sa.String(200), nullable=True),
        sa.Column('seo_alias', sa.String(200), nullable=True),
    )

    # Product <-> category association
    op.create_table(
        'product_in_categories',
        sa.Column('product_id', sa.Integer(),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('category_id', sa.Integer(),
                  sa.ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
    )


def downgrade() -> None:
    """Drop catalog tables."""
    op.drop_table('product_in_categories')
    op.drop_table('category_translations')
    op.drop_table('categories')
    op.drop_table('product_images')
    op.drop_table('product_translations')
    op.drop_table('products')
