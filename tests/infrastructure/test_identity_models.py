"""Tests for the identity schema."""

from sqlalchemy import inspect, select

from app.infrastructure.models import (
    AppRole,
    AppUser,
    AppUserClaim,
    AppUserLogin,
    AppUserRole,
    AppUserToken,
)


class TestIdentityKeys:
    """Tests for identity table keys."""

    def test_user_roles_keyed_on_user_and_role(self) -> None:
        """AppUserRoles has a composite key."""
        keys = [column.name for column in inspect(AppUserRole).primary_key]
        assert keys == ["user_id", "role_id"]

    def test_logins_and_tokens_keyed_on_user(self) -> None:
        """AppUserLogins and AppUserTokens are keyed by user only."""
        assert [c.name for c in inspect(AppUserLogin).primary_key] == ["user_id"]
        assert [c.name for c in inspect(AppUserToken).primary_key] == ["user_id"]

    def test_table_names(self) -> None:
        """Tables use the App* naming."""
        assert AppUser.__tablename__ == "AppUsers"
        assert AppRole.__tablename__ == "AppRoles"


class TestIdentityPersistence:
    """Tests for storing users and roles."""

    async def test_user_with_role_and_claim(self, session_factory) -> None:
        """A user can be granted a role and a claim."""
        async with session_factory() as session:
            user = AppUser(user_name="admin", email="admin@example.com")
            role = AppRole(name="admin", description="Administrator")
            session.add_all([user, role])
            await session.flush()
            session.add(AppUserRole(user_id=user.id, role_id=role.id))
            session.add(AppUserClaim(user_id=user.id, claim_type="scope", claim_value="catalog"))
            await session.commit()
            user_id = user.id

        async with session_factory() as session:
            memberships = (await session.execute(select(AppUserRole))).scalars().all()
            claims = (await session.execute(select(AppUserClaim))).scalars().all()

        assert len(user_id) == 36
        assert [m.user_id for m in memberships] == [user_id]
        assert [(c.claim_type, c.claim_value) for c in claims] == [("scope", "catalog")]
