"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from usermgmt.domain.model.vote import Vote
from usermgmt.domain.value import ProfileId, UserId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Defines the contract for vote persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> Optional[Vote]:
        """Find a user's vote on a profile.

        Args:
            user_id: The voter's ID
            profile_id: The rated profile's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Args:
            vote: The vote to insert (``id`` is ignored)

        Returns:
            The stored vote with its assigned ID

        Raises:
            IntegrityError: If a vote already exists for this user/profile pair
        """
        pass

    @abstractmethod
    async def update(self, vote: Vote) -> Vote:
        """Overwrite the value of an existing vote.

        Args:
            vote: The vote to update, identified by its ID

        Returns:
            The updated vote
        """
        pass

    @abstractmethod
    async def delete_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> bool:
        """Delete a user's vote on a profile.

        Args:
            user_id: The voter's ID
            profile_id: The rated profile's ID

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass
