"""Create identity tables.

Revision ID: 002
Revises: 001
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user, role and satellite tables."""
    op.create_table(
        'AppUsers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_name', sa.String(256), nullable=False, unique=True),
        sa.Column('email', sa.String(256), nullable=True, index=True),
        sa.Column('email_confirmed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('password_hash', sa.Text(), nullable=True),
        sa.Column('first_name', sa.String(200), nullable=True),
        sa.Column('last_name', sa.String(200), nullable=True),
        sa.Column('dob', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )

    op.create_table(
        'AppRoles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(256), nullable=False, unique=True),
        sa.Column('description', sa.String(200), nullable=True),
    )

    # Composite key on user + role
    op.create_table(
        'AppUserRoles',
        sa.Column('user_id', sa.String(36),
                  sa.ForeignKey('AppUsers.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('role_id', sa.String(36),
                  sa.ForeignKey('AppRoles.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'AppUserClaims',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(36),
                  sa.ForeignKey('AppUsers.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('claim_type', sa.String(256), nullable=True),
        sa.Column('claim_value', sa.Text(), nullable=True),
    )

    op.create_table(
        'AppRoleClaims',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('role_id', sa.String(36),
                  sa.ForeignKey('AppRoles.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('claim_type', sa.String(256), nullable=True),
        sa.Column('claim_value', sa.Text(), nullable=True),
    )

    # Keyed on user only
    op.create_table(
        'AppUserLogins',
        sa.Column('user_id', sa.String(36),
                  sa.ForeignKey('AppUsers.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('login_provider', sa.String(128), nullable=False),
        sa.Column('provider_key', sa.String(128), nullable=False),
        sa.Column('provider_display_name', sa.String(256), nullable=True),
    )

    op.create_table(
        'AppUserTokens',
        sa.Column('user_id', sa.String(36),
                  sa.ForeignKey('AppUsers.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('login_provider', sa.String(128), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
    )


def downgrade() -> None:
    """Drop identity tables."""
    op.drop_table('AppUserTokens')
    op.drop_table('AppUserLogins')
    op.drop_table('AppRoleClaims')
    op.drop_table('AppUserClaims')
    op.drop_table('AppUserRoles')
    op.drop_table('AppRoles')
    op.drop_table('AppUsers')
