"""Vote domain service."""

from datetime import datetime, timedelta

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from usermgmt.domain.error import (
    InsertionFailedError,
    StorageError,
    ValidationError,
    VoteCooldownError,
)
from usermgmt.domain.model import User, Vote
from usermgmt.domain.model.common import utc_now
from usermgmt.domain.repository import UserRepository, VoteRepository
from usermgmt.domain.value import ProfileId, UserId, VoteId
from usermgmt.domain.value.types import SMALLINT_MAX, SMALLINT_MIN

from .base import Service

DEFAULT_VOTE_COOLDOWN = timedelta(hours=1)


class VoteService(Service):
    """Domain service for vote operations.

    Enforces a per-user cooldown between votes and keeps at most one vote
    per (user, profile) pair: voting again on the same profile overwrites
    the stored value instead of adding a row.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        user_repository: UserRepository,
        cooldown: timedelta = DEFAULT_VOTE_COOLDOWN,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            user_repository: User repository (voter lookup and cooldown stamp)
            cooldown: Minimum time between two votes by the same user
        """
        self.vote_repository = vote_repository
        self.user_repository = user_repository
        self.cooldown = cooldown

    async def vote(self, user_id: UserId, profile_id: ProfileId, value: int) -> VoteId:
        """Cast or change a vote on a profile.

        Steps:
        1. Load the voter
        2. Reject if the voter is still inside the cooldown window
        3. Create the (user, profile) vote, or update it in place if it exists
        4. Stamp the voter's ``vote_updated_at``

        Args:
            user_id: Voter ID
            profile_id: Rated profile ID
            value: Vote value (signed small integer)

        Returns:
            ID of the created vote, or of the existing vote that was updated

        Raises:
            ValidationError: If value is outside the small integer range
            InsertionFailedError: If the voter cannot be loaded or the write fails
            VoteCooldownError: If the voter voted less than ``cooldown`` ago
        """
        with logfire.span(
            "vote_service.vote", user_id=user_id, profile_id=profile_id, value=value
        ):
            if not SMALLINT_MIN <= value <= SMALLINT_MAX:
                raise ValidationError(
                    f"Vote value must be between {SMALLINT_MIN} and {SMALLINT_MAX}"
                )

            voter = await self._load_voter(user_id)
            now = utc_now()
            self._check_cooldown(voter, now)

            try:
                vote_id = await self._create_or_update(user_id, profile_id, value, now)
                await self.user_repository.touch_vote_timestamp(user_id, now)
            except SQLAlchemyError as e:
                logfire.error(
                    "Vote write failed",
                    user_id=user_id,
                    profile_id=profile_id,
                    error=str(e),
                )
                raise InsertionFailedError(f"Failed to record vote: {e}") from e

            return vote_id

    async def revoke_vote(self, user_id: UserId, profile_id: ProfileId) -> bool:
        """Remove a user's vote on a profile.

        Revoking a vote that does not exist is a no-op.

        Args:
            user_id: Voter ID
            profile_id: Rated profile ID

        Returns:
            True if a vote was removed, False if no vote existed

        Raises:
            StorageError: If the delete fails
        """
        with logfire.span(
            "vote_service.revoke_vote", user_id=user_id, profile_id=profile_id
        ):
            try:
                deleted = await self.vote_repository.delete_by_user_and_profile(
                    user_id, profile_id
                )
            except SQLAlchemyError as e:
                logfire.error(
                    "Vote delete failed",
                    user_id=user_id,
                    profile_id=profile_id,
                    error=str(e),
                )
                raise StorageError(f"Failed to revoke vote: {e}") from e

            if deleted:
                logfire.info("Vote revoked", user_id=user_id, profile_id=profile_id)
            else:
                logfire.info(
                    "No vote to revoke", user_id=user_id, profile_id=profile_id
                )
            return deleted

    async def get_vote(self, user_id: UserId, profile_id: ProfileId) -> Vote | None:
        """Get a user's current vote on a profile, if any.

        Raises:
            StorageError: If the lookup fails
        """
        try:
            return await self.vote_repository.find_by_user_and_profile(
                user_id, profile_id
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load vote: {e}") from e

    async def _load_voter(self, user_id: UserId) -> User:
        try:
            voter = await self.user_repository.find_by_id(user_id)
        except SQLAlchemyError as e:
            logfire.error("Voter lookup failed", user_id=user_id, error=str(e))
            raise InsertionFailedError(f"Failed to load voter {user_id}: {e}") from e
        if voter is None:
            logfire.warn("Vote by non-existent user", user_id=user_id)
            raise InsertionFailedError(f"Failed to load voter {user_id}: not found")
        return voter

    def _check_cooldown(self, voter: User, now: datetime) -> None:
        if voter.vote_updated_at is None:
            return

        elapsed = now - voter.vote_updated_at
        if elapsed < self.cooldown:
            retry_after = self.cooldown - elapsed
            logfire.warn(
                "Vote cooldown active",
                user_id=voter.id,
                retry_after_seconds=retry_after.total_seconds(),
            )
            raise VoteCooldownError(retry_after)

    async def _create_or_update(
        self, user_id: UserId, profile_id: ProfileId, value: int, now: datetime
    ) -> VoteId:
        existing = await self.vote_repository.find_by_user_and_profile(
            user_id, profile_id
        )

        if existing is None:
            vote = Vote(
                user_id=user_id,
                profile_id=profile_id,
                value=value,
                created_at=now,
                updated_at=now,
            )
            try:
                created = await self.vote_repository.create(vote)
            except IntegrityError:
                # Lost an insert race for this pair; update the winner instead
                logfire.warn(
                    "Concurrent vote insert", user_id=user_id, profile_id=profile_id
                )
                existing = await self.vote_repository.find_by_user_and_profile(
                    user_id, profile_id
                )
                if existing is None:
                    raise
            else:
                logfire.info(
                    "Vote created",
                    vote_id=created.id,
                    user_id=user_id,
                    profile_id=profile_id,
                )
                return VoteId(created.id)

        await self.vote_repository.update(
            existing.model_copy(update={"value": value, "updated_at": now})
        )
        logfire.info(
            "Vote updated", vote_id=existing.id, user_id=user_id, profile_id=profile_id
        )
        return VoteId(existing.id)
