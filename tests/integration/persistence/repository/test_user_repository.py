"""Integration tests for PostgresUserRepository.

These tests verify the SQL statements against a real database engine:
the live-email unique index, the role join and pagination.
"""

from datetime import timezone

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from usermgmt.domain.model.common import utc_now
from usermgmt.domain.value import RoleId, UserId
from usermgmt.persistence.repository import PostgresUserRepository
from usermgmt.persistence.tables import roles_table
from tests.conftest import make_user


class TestUserRepositoryIntegration:
    """Integration tests for PostgresUserRepository."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_round_trips(self, db_session):
        """Stored users come back with an ID and UTC timestamps."""
        # Arrange
        repo = PostgresUserRepository(db_session)

        # Act
        created = await repo.create(make_user())
        found = await repo.find_by_id(created.id)

        # Assert
        assert created.id == UserId(1)
        assert found.email == "ada@example.com"
        assert found.password == "opaque-hash"
        assert found.created_at.tzinfo == timezone.utc

    @pytest.mark.asyncio
    async def test_live_email_is_unique(self, db_session):
        """A second live user with the same email is rejected."""
        repo = PostgresUserRepository(db_session)
        await repo.create(make_user())

        with pytest.raises(IntegrityError) as exc_info:
            await repo.create(make_user())

        assert "email" in str(exc_info.value.orig).lower()

    @pytest.mark.asyncio
    async def test_deleted_user_frees_email(self, db_session):
        """Soft-deleted rows do not hold their email."""
        # Arrange
        repo = PostgresUserRepository(db_session)
        first = await repo.create(make_user())
        await repo.save(first.model_copy(update={"deleted_at": utc_now()}))

        # Act
        second = await repo.create(make_user())

        # Assert
        assert second.id != first.id
        assert (await repo.find_active_by_email("ada@example.com")).id == second.id
        assert await repo.find_active_by_id(first.id) is None
        assert (await repo.find_by_id(first.id, for_update=True)).is_deleted

    @pytest.mark.asyncio
    async def test_email_lookup_loads_role(self, db_session):
        """Email lookup joins the referenced role."""
        # Arrange
        await db_session.execute(insert(roles_table).values(id=3, name="admin"))
        repo = PostgresUserRepository(db_session)
        await repo.create(make_user(role_id=RoleId(3)))

        # Act
        found = await repo.find_active_by_email("ada@example.com")

        # Assert
        assert found.role_id == RoleId(3)
        assert found.role.name == "admin"

    @pytest.mark.asyncio
    async def test_user_without_role(self, db_session):
        repo = PostgresUserRepository(db_session)
        await repo.create(make_user())

        found = await repo.find_active_by_email("ada@example.com")

        assert found.role_id is None
        assert found.role is None

    @pytest.mark.asyncio
    async def test_list_and_count_skip_deleted(self, db_session):
        """Listing pages through live users by ID."""
        # Arrange
        repo = PostgresUserRepository(db_session)
        users = [await repo.create(make_user(f"u{i}@example.com")) for i in range(5)]
        await repo.save(users[1].model_copy(update={"deleted_at": utc_now()}))

        # Act
        first_page = await repo.list_active(offset=0, limit=2)
        second_page = await repo.list_active(offset=2, limit=2)

        # Assert
        assert [u.email for u in first_page] == ["u0@example.com", "u2@example.com"]
        assert [u.email for u in second_page] == ["u3@example.com", "u4@example.com"]
        assert await repo.count_active() == 4

    @pytest.mark.asyncio
    async def test_touch_vote_timestamp(self, db_session):
        repo = PostgresUserRepository(db_session)
        created = await repo.create(make_user())
        at = utc_now()

        await repo.touch_vote_timestamp(created.id, at)

        found = await repo.find_by_id(created.id)
        assert found.vote_updated_at == at
        assert found.updated_at == created.updated_at
