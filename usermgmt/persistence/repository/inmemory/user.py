"""In-memory user repository for testing."""

from datetime import datetime
from itertools import count
from typing import Optional

from sqlalchemy.exc import IntegrityError

from usermgmt.domain.model.role import Role
from usermgmt.domain.model.user import User
from usermgmt.domain.repository.user import UserRepository
from usermgmt.domain.value import RoleId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Mirrors the live-email unique index: inserting or saving a user whose
    email is held by another live user raises ``IntegrityError``.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._roles: dict[RoleId, Role] = {}
        self._ids = count(1)

    def add_role(self, role: Role) -> None:
        """Register a role so lookups can attach it to users."""
        self._roles[role.id] = role

    def _with_role(self, user: User) -> User:
        role = self._roles.get(user.role_id) if user.role_id is not None else None
        return user.model_copy(update={"role": role})

    def _check_email(self, user: User) -> None:
        if user.is_deleted:
            return
        for other in self._users.values():
            if other.id != user.id and not other.is_deleted and other.email == user.email:
                raise IntegrityError(
                    "Duplicate live user",
                    None,
                    Exception("duplicate key violates uq_users_email_live (email)"),
                )

    async def create(self, user: User) -> User:
        """Insert a new user with the next free ID."""
        self._check_email(user)
        stored = user.model_copy(update={"id": UserId(next(self._ids)), "role": None})
        self._users[stored.id] = stored
        return stored

    async def find_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID, including soft-deleted users."""
        return self._users.get(user_id)

    async def find_active_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a live user by ID."""
        user = self._users.get(user_id)
        if user is None or user.is_deleted:
            return None
        return user

    async def find_active_by_email(self, email: str) -> Optional[User]:
        """Find a live user by email, with their role loaded."""
        for user in self._users.values():
            if user.email == email and not user.is_deleted:
                return self._with_role(user)
        return None

    async def save(self, user: User) -> User:
        """Overwrite a stored user."""
        self._check_email(user)
        self._users[user.id] = user.model_copy(update={"role": None})
        return user

    async def list_active(self, offset: int, limit: int) -> list[User]:
        """List live users ordered by ID."""
        live = sorted(
            (u for u in self._users.values() if not u.is_deleted),
            key=lambda u: u.id,
        )
        return [self._with_role(u) for u in live[offset : offset + limit]]

    async def count_active(self) -> int:
        """Count live users."""
        return sum(1 for u in self._users.values() if not u.is_deleted)

    async def touch_vote_timestamp(self, user_id: UserId, at: datetime) -> None:
        """Set the user's ``vote_updated_at``."""
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(update={"vote_updated_at": at})
