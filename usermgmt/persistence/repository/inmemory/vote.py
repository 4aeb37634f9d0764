"""In-memory vote repository for testing."""

from itertools import count
from typing import Optional

from sqlalchemy.exc import IntegrityError

from usermgmt.domain.model.vote import Vote
from usermgmt.domain.repository.vote import VoteRepository
from usermgmt.domain.value import ProfileId, UserId, VoteId


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self) -> None:
        self._votes: dict[VoteId, Vote] = {}
        self._ids = count(1)

    def _find(self, user_id: UserId, profile_id: ProfileId) -> Optional[Vote]:
        for vote in self._votes.values():
            if vote.user_id == user_id and vote.profile_id == profile_id:
                return vote
        return None

    async def find_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> Optional[Vote]:
        """Find a vote by user and profile."""
        return self._find(user_id, profile_id)

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            IntegrityError: If vote already exists (duplicate)
        """
        existing = self._find(vote.user_id, vote.profile_id)
        if existing:
            raise IntegrityError(
                "Duplicate vote",
                None,
                Exception("duplicate key violates uq_votes_user_profile"),
            )

        stored = vote.model_copy(update={"id": VoteId(next(self._ids))})
        self._votes[stored.id] = stored
        return stored

    async def update(self, vote: Vote) -> Vote:
        """Overwrite a stored vote."""
        self._votes[vote.id] = vote
        return vote

    async def delete_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> bool:
        """Delete a vote by user and profile."""
        existing = self._find(user_id, profile_id)
        if existing is None:
            return False
        del self._votes[existing.id]
        return True
