"""PostgreSQL implementation of Vote repository."""

from typing import Optional

from sqlalchemy import and_, delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from usermgmt.domain.model import Vote
from usermgmt.domain.repository import VoteRepository
from usermgmt.domain.value import ProfileId, UserId, VoteId
from usermgmt.persistence.mappers import row_to_vote, vote_to_dict
from usermgmt.persistence.tables import votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> Optional[Vote]:
        """Find a user's vote on a profile."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.profile_id == profile_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote.

        Runs inside a savepoint so a duplicate-key failure leaves the
        surrounding transaction usable for a follow-up read.
        """
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
        return vote.model_copy(update={"id": VoteId(result.inserted_primary_key[0])})

    async def update(self, vote: Vote) -> Vote:
        """Overwrite the value of an existing vote."""
        stmt = (
            update(votes_table)
            .where(votes_table.c.id == vote.id)
            .values(value=vote.value, updated_at=vote.updated_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def delete_by_user_and_profile(
        self, user_id: UserId, profile_id: ProfileId
    ) -> bool:
        """Delete a vote by user and profile."""
        stmt = delete(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.profile_id == profile_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
