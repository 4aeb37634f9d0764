"""Integration tests for PostgresVoteRepository."""

import pytest
from sqlalchemy.exc import IntegrityError

from usermgmt.domain.model import Vote
from usermgmt.domain.value import ProfileId
from usermgmt.persistence.repository import (
    PostgresUserRepository,
    PostgresVoteRepository,
)
from tests.conftest import make_user


@pytest.fixture
def vote_repo(db_session):
    return PostgresVoteRepository(db_session)


async def _voter(db_session):
    return await PostgresUserRepository(db_session).create(make_user())


class TestVoteRepositoryIntegration:
    """Integration tests for PostgresVoteRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find(self, db_session, vote_repo):
        # Arrange
        voter = await _voter(db_session)

        # Act
        created = await vote_repo.create(
            Vote(user_id=voter.id, profile_id=ProfileId(7), value=-1)
        )
        found = await vote_repo.find_by_user_and_profile(voter.id, ProfileId(7))

        # Assert
        assert created.id is not None
        assert found.id == created.id
        assert found.value == -1

    @pytest.mark.asyncio
    async def test_duplicate_keeps_session_usable(self, db_session, vote_repo):
        """A duplicate insert fails alone; the transaction carries on."""
        # Arrange
        voter = await _voter(db_session)
        first = await vote_repo.create(
            Vote(user_id=voter.id, profile_id=ProfileId(7), value=1)
        )

        # Act
        with pytest.raises(IntegrityError):
            await vote_repo.create(
                Vote(user_id=voter.id, profile_id=ProfileId(7), value=-1)
            )

        # Assert
        found = await vote_repo.find_by_user_and_profile(voter.id, ProfileId(7))
        assert found.id == first.id
        assert found.value == 1

    @pytest.mark.asyncio
    async def test_update_overwrites_value(self, db_session, vote_repo):
        voter = await _voter(db_session)
        created = await vote_repo.create(
            Vote(user_id=voter.id, profile_id=ProfileId(7), value=1)
        )

        await vote_repo.update(created.model_copy(update={"value": -1}))

        found = await vote_repo.find_by_user_and_profile(voter.id, ProfileId(7))
        assert found.value == -1

    @pytest.mark.asyncio
    async def test_delete_reports_whether_a_row_was_removed(
        self, db_session, vote_repo
    ):
        # Arrange
        voter = await _voter(db_session)
        await vote_repo.create(Vote(user_id=voter.id, profile_id=ProfileId(7), value=1))

        # Act / Assert
        assert await vote_repo.delete_by_user_and_profile(voter.id, ProfileId(7))
        assert not await vote_repo.delete_by_user_and_profile(voter.id, ProfileId(7))
        assert await vote_repo.find_by_user_and_profile(voter.id, ProfileId(7)) is None
