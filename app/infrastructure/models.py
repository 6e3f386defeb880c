"""SQLAlchemy models for the identity schema.

Users, roles and their claims, logins and tokens. The tables use the
App* naming and live on their own metadata so they can be created in
a separate database from the catalog.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship

IdentityBase = declarative_base()


# ============================================================================
# Users and Roles
# ============================================================================


class AppUser(IdentityBase):
    """Application user account."""

    __tablename__ = "AppUsers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_name = Column(String(256), nullable=False, unique=True)
    email = Column(String(256), nullable=True, index=True)
    email_confirmed = Column(Boolean, nullable=False, default=False)
    password_hash = Column(Text, nullable=True)
    first_name = Column(String(200), nullable=True)
    last_name = Column(String(200), nullable=True)
    dob = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    roles = relationship("AppUserRole", back_populates="user", cascade="all, delete-orphan")
    claims = relationship("AppUserClaim", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<AppUser(id={self.id}, user_name={self.user_name})>"


class AppRole(IdentityBase):
    """Named role granted to users."""

    __tablename__ = "AppRoles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(256), nullable=False, unique=True)
    description = Column(String(200), nullable=True)

    users = relationship("AppUserRole", back_populates="role", cascade="all, delete-orphan")
    claims = relationship("AppRoleClaim", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<AppRole(id={self.id}, name={self.name})>"


# ============================================================================
# Association and Satellite Tables
# ============================================================================


class AppUserRole(IdentityBase):
    """User-role membership keyed on (user_id, role_id)."""

    __tablename__ = "AppUserRoles"

    user_id = Column(String(36), ForeignKey("AppUsers.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(String(36), ForeignKey("AppRoles.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("AppUser", back_populates="roles")
    role = relationship("AppRole", back_populates="users")


class AppUserClaim(IdentityBase):
    """Claim attached to a user."""

    __tablename__ = "AppUserClaims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("AppUsers.id", ondelete="CASCADE"), nullable=False, index=True)
    claim_type = Column(String(256), nullable=True)
    claim_value = Column(Text, nullable=True)


class AppRoleClaim(IdentityBase):
    """Claim attached to a role."""

    __tablename__ = "AppRoleClaims"

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(String(36), ForeignKey("AppRoles.id", ondelete="CASCADE"), nullable=False, index=True)
    claim_type = Column(String(256), nullable=True)
    claim_value = Column(Text, nullable=True)


class AppUserLogin(IdentityBase):
    """External login of a user, one per user."""

    __tablename__ = "AppUserLogins"

    user_id = Column(String(36), ForeignKey("AppUsers.id", ondelete="CASCADE"), primary_key=True)
    login_provider = Column(String(128), nullable=False)
    provider_key = Column(String(128), nullable=False)
    provider_display_name = Column(String(256), nullable=True)


class AppUserToken(IdentityBase):
    """Authentication token of a user, one per user."""

    __tablename__ = "AppUserTokens"

    user_id = Column(String(36), ForeignKey("AppUsers.id", ondelete="CASCADE"), primary_key=True)
    login_provider = Column(String(128), nullable=False)
    name = Column(String(128), nullable=False)
    value = Column(Text, nullable=True)
