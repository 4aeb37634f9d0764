"""PostgreSQL implementation of User repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.domain.model import User
from usermgmt.domain.repository import UserRepository
from usermgmt.domain.value import UserId
from usermgmt.persistence.mappers import row_to_user, user_to_dict
from usermgmt.persistence.tables import roles_table, users_table


def _select_with_role():
    """Select users together with the name of their role, if any."""
    return select(users_table, roles_table.c.name.label("role_name")).select_from(
        users_table.outerjoin(roles_table, users_table.c.role_id == roles_table.c.id)
    )


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, user: User) -> User:
        """Insert a new user and return it with its assigned ID."""
        stmt = insert(users_table).values(**user_to_dict(user))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return user.model_copy(update={"id": UserId(result.inserted_primary_key[0])})

    async def find_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID, including soft-deleted users.

        Args:
            user_id: User ID to look up
            for_update: Lock the row until the transaction ends

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_active_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a live user by ID."""
        stmt = select(users_table).where(
            users_table.c.id == user_id, users_table.c.deleted_at.is_(None)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_active_by_email(self, email: str) -> Optional[User]:
        """Find a live user by email, with their role loaded.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = _select_with_role().where(
            users_table.c.email == email, users_table.c.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def save(self, user: User) -> User:
        """Persist all fields of an existing user."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user.id)
            .values(**user_to_dict(user))
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return user

    async def list_active(self, offset: int, limit: int) -> list[User]:
        """List live users ordered by ID, with their roles loaded."""
        stmt = (
            _select_with_role()
            .where(users_table.c.deleted_at.is_(None))
            .order_by(users_table.c.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def count_active(self) -> int:
        """Count live users."""
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(users_table.c.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def touch_vote_timestamp(self, user_id: UserId, at: datetime) -> None:
        """Set ``vote_updated_at`` in a single UPDATE statement."""
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(vote_updated_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
