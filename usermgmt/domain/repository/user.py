"""User repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from usermgmt.domain.model.user import User
from usermgmt.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer. "Active" lookups skip
    soft-deleted rows; plain lookups do not.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert (``id`` is ignored)

        Returns:
            The stored user with its assigned ID

        Raises:
            IntegrityError: If a live user already holds the email
        """
        pass

    @abstractmethod
    async def find_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a user by ID, including soft-deleted users.

        Args:
            user_id: The user's unique identifier
            for_update: Lock the row until the current transaction ends

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_id(
        self, user_id: UserId, *, for_update: bool = False
    ) -> Optional[User]:
        """Find a live (not soft-deleted) user by ID.

        Args:
            user_id: The user's unique identifier
            for_update: Lock the row until the current transaction ends

        Returns:
            The user if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_by_email(self, email: str) -> Optional[User]:
        """Find a live user by email, with their role loaded.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist all fields of an existing user.

        Args:
            user: The user to save

        Returns:
            The saved user

        Raises:
            IntegrityError: If the new email collides with another live user
        """
        pass

    @abstractmethod
    async def list_active(self, offset: int, limit: int) -> list[User]:
        """List live users in storage order, with their roles loaded.

        Args:
            offset: Number of users to skip
            limit: Maximum number of users to return

        Returns:
            Page of users ordered by ID
        """
        pass

    @abstractmethod
    async def count_active(self) -> int:
        """Count live users."""
        pass

    @abstractmethod
    async def touch_vote_timestamp(self, user_id: UserId, at: datetime) -> None:
        """Atomically set the user's ``vote_updated_at``.

        Args:
            user_id: The user's unique identifier
            at: Time of the vote
        """
        pass
