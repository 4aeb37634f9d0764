"""Unit tests for VoteService."""

from datetime import timedelta

import pytest

from usermgmt.domain.error import (
    ErrorCode,
    InsertionFailedError,
    StorageError,
    ValidationError,
    VoteCooldownError,
)
from usermgmt.domain.model import Vote
from usermgmt.domain.repository import UserRepository, VoteRepository
from usermgmt.domain.service import DEFAULT_VOTE_COOLDOWN, UserService, VoteService
from usermgmt.domain.value import ProfileId, UserId, VoteId
from usermgmt.persistence.repository.inmemory import (
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from tests.conftest import make_user, minutes_ago, storage_failure
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

PROFILE = ProfileId(501)


class RecordingVoteRepository(InMemoryVoteRepository):
    """In-memory vote repository that records every call and can fail."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise storage_failure(name)

    async def find_by_user_and_profile(self, user_id, profile_id):
        self._record("find")
        return await super().find_by_user_and_profile(user_id, profile_id)

    async def create(self, vote):
        self._record("create")
        return await super().create(vote)

    async def update(self, vote):
        self._record("update")
        return await super().update(vote)

    async def delete_by_user_and_profile(self, user_id, profile_id):
        self._record("delete")
        return await super().delete_by_user_and_profile(user_id, profile_id)


class RecordingUserRepository(InMemoryUserRepository):
    """In-memory user repository that counts vote timestamp refreshes."""

    def __init__(self) -> None:
        super().__init__()
        self.touches = 0
        self.fail_lookup = False

    async def find_by_id(self, user_id, *, for_update=False):
        if self.fail_lookup:
            raise storage_failure()
        return await super().find_by_id(user_id, for_update=for_update)

    async def touch_vote_timestamp(self, user_id, at):
        self.touches += 1
        await super().touch_vote_timestamp(user_id, at)


async def _voter(user_repo: UserRepository, voted_minutes_ago: float | None = None):
    user = await user_repo.create(make_user())
    if voted_minutes_ago is not None:
        await user_repo.touch_vote_timestamp(user.id, minutes_ago(voted_minutes_ago))
    return user


@pytest.fixture
def repos():
    return RecordingUserRepository(), RecordingVoteRepository()


@pytest.fixture
def vote_service(repos):
    user_repo, vote_repo = repos
    return VoteService(vote_repository=vote_repo, user_repository=user_repo)


class TestVote:
    """Tests for vote."""

    @pytest.mark.asyncio
    async def test_first_vote_creates_vote(self, unit_env):
        """A voter who never voted creates a new vote."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        vote_repo = await unit_env.get(VoteRepository)
        voter = await _voter(user_repo)

        vote_id = await vote_service.vote(voter.id, PROFILE, 1)

        stored = await vote_repo.find_by_user_and_profile(voter.id, PROFILE)
        assert stored.id == vote_id
        assert stored.value == 1

    @pytest.mark.asyncio
    async def test_vote_after_cooldown_without_existing_vote_creates(
        self, repos, vote_service
    ):
        """Voted two hours ago, no vote on this profile: create and return new ID."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo, voted_minutes_ago=120)

        vote_id = await vote_service.vote(voter.id, PROFILE, 1)

        assert vote_repo.calls == ["find", "create"]
        stored = await vote_repo.find_by_user_and_profile(voter.id, PROFILE)
        assert stored.id == vote_id

    @pytest.mark.asyncio
    async def test_vote_after_cooldown_with_existing_vote_updates_in_place(
        self, repos, vote_service
    ):
        """Existing vote is overwritten and its ID is returned."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo)
        first_id = await vote_service.vote(voter.id, PROFILE, 1)
        await user_repo.touch_vote_timestamp(voter.id, minutes_ago(120))
        vote_repo.calls.clear()

        second_id = await vote_service.vote(voter.id, PROFILE, -1)

        assert second_id == first_id
        assert vote_repo.calls == ["find", "update"]
        stored = await vote_repo.find_by_user_and_profile(voter.id, PROFILE)
        assert stored.id == first_id
        assert stored.value == -1

    @pytest.mark.asyncio
    async def test_vote_inside_cooldown_fails_without_storage_access(
        self, repos, vote_service
    ):
        """Voted 30 minutes ago with a 60 minute window: rejected, nothing touched."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo, voted_minutes_ago=30)
        touches_before = user_repo.touches

        with pytest.raises(VoteCooldownError) as exc_info:
            await vote_service.vote(voter.id, PROFILE, 1)

        assert exc_info.value.code == ErrorCode.VOTE_COOLDOWN
        assert timedelta(minutes=29) < exc_info.value.retry_after <= timedelta(
            minutes=30
        )
        assert vote_repo.calls == []
        assert user_repo.touches == touches_before

    @pytest.mark.asyncio
    async def test_cooldown_applies_across_profiles(self, repos, vote_service):
        """The window is per voter, not per profile."""
        user_repo, _ = repos
        voter = await _voter(user_repo)
        await vote_service.vote(voter.id, PROFILE, 1)

        with pytest.raises(VoteCooldownError):
            await vote_service.vote(voter.id, ProfileId(502), 1)

    @pytest.mark.asyncio
    async def test_successful_vote_refreshes_timestamp_once(self, repos, vote_service):
        """vote_updated_at is stamped exactly once per successful vote."""
        user_repo, _ = repos
        voter = await _voter(user_repo)
        touches_before = user_repo.touches

        await vote_service.vote(voter.id, PROFILE, 1)

        assert user_repo.touches == touches_before + 1
        refreshed = await user_repo.find_by_id(voter.id)
        assert refreshed.vote_updated_at is not None
        assert refreshed.vote_updated_at > minutes_ago(1)

    @pytest.mark.asyncio
    async def test_configured_cooldown_is_honoured(self, repos):
        """A shorter window lets the voter vote again sooner."""
        user_repo, vote_repo = repos
        vote_service = VoteService(
            vote_repository=vote_repo,
            user_repository=user_repo,
            cooldown=timedelta(minutes=10),
        )
        voter = await _voter(user_repo, voted_minutes_ago=30)

        vote_id = await vote_service.vote(voter.id, PROFILE, 1)

        assert vote_id is not None
        assert DEFAULT_VOTE_COOLDOWN == timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_unknown_voter_raises_insertion_failed(self, repos, vote_service):
        """A missing voter is reported with the insertion failure code."""
        _, vote_repo = repos

        with pytest.raises(InsertionFailedError):
            await vote_service.vote(UserId(404), PROFILE, 1)

        assert vote_repo.calls == []

    @pytest.mark.asyncio
    async def test_voter_lookup_failure_raises_insertion_failed(
        self, repos, vote_service
    ):
        """A failing voter lookup is reported with the insertion failure code."""
        user_repo, _ = repos
        voter = await _voter(user_repo)
        user_repo.fail_lookup = True

        with pytest.raises(InsertionFailedError) as exc_info:
            await vote_service.vote(voter.id, PROFILE, 1)

        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_soft_deleted_voter_can_still_be_loaded(self, unit_env):
        """The voter lookup ignores the soft-delete marker."""
        vote_service = await unit_env.get(VoteService)
        user_service = await unit_env.get(UserService)
        voter = await user_service.create_user(make_user())
        await user_service.delete_user(voter.id)

        vote_id = await vote_service.vote(voter.id, PROFILE, 1)

        assert vote_id is not None

    @pytest.mark.asyncio
    async def test_write_failure_raises_insertion_failed(self, repos, vote_service):
        """Failures while writing the vote are insertion failures."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo)
        vote_repo.fail_on.add("create")

        with pytest.raises(InsertionFailedError):
            await vote_service.vote(voter.id, PROFILE, 1)

        assert user_repo.touches == 0

    @pytest.mark.asyncio
    async def test_lost_insert_race_updates_winner(self, repos, vote_service):
        """A duplicate-key create falls back to updating the concurrent vote."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo)
        winner = await vote_repo.create(
            Vote(user_id=voter.id, profile_id=PROFILE, value=1)
        )

        # First lookup misses the row, as if it were inserted right after
        original_find = vote_repo.find_by_user_and_profile
        misses = iter([None])

        async def find_once_stale(user_id, profile_id):
            stale = next(misses, "fresh")
            if stale is None:
                vote_repo.calls.append("find")
                return None
            return await original_find(user_id, profile_id)

        vote_repo.find_by_user_and_profile = find_once_stale
        vote_repo.calls.clear()

        vote_id = await vote_service.vote(voter.id, PROFILE, -1)

        assert vote_id == winner.id
        assert vote_repo.calls == ["find", "create", "find", "update"]
        stored = await original_find(voter.id, PROFILE)
        assert stored.value == -1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", [-32769, 32768])
    async def test_out_of_range_value_is_rejected(self, repos, vote_service, value):
        """Values must fit a signed small integer."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo)

        with pytest.raises(ValidationError):
            await vote_service.vote(voter.id, PROFILE, value)

        assert vote_repo.calls == []


class TestRevokeVote:
    """Tests for revoke_vote and get_vote."""

    @pytest.mark.asyncio
    async def test_revoke_removes_vote(self, unit_env):
        """After revoking, the pair has no vote."""
        vote_service = await unit_env.get(VoteService)
        user_repo = await unit_env.get(UserRepository)
        voter = await _voter(user_repo)
        await vote_service.vote(voter.id, PROFILE, 1)

        removed = await vote_service.revoke_vote(voter.id, PROFILE)

        assert removed is True
        assert await vote_service.get_vote(voter.id, PROFILE) is None

    @pytest.mark.asyncio
    async def test_revoke_absent_vote_is_noop(self, unit_env):
        """Revoking a vote that does not exist succeeds and reports False."""
        vote_service = await unit_env.get(VoteService)

        removed = await vote_service.revoke_vote(UserId(1), PROFILE)

        assert removed is False

    @pytest.mark.asyncio
    async def test_revoke_failure_propagates_as_storage_error(
        self, repos, vote_service
    ):
        """A failing delete is surfaced, with the storage error chained."""
        _, vote_repo = repos
        vote_repo.fail_on.add("delete")

        with pytest.raises(StorageError) as exc_info:
            await vote_service.revoke_vote(UserId(1), PROFILE)

        assert exc_info.value.code == ErrorCode.STORAGE_FAILED
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_vote_again_after_revoke_creates_new_vote(self, repos, vote_service):
        """live -> absent -> live creates a fresh record."""
        user_repo, vote_repo = repos
        voter = await _voter(user_repo)
        first_id = await vote_service.vote(voter.id, PROFILE, 1)
        await vote_service.revoke_vote(voter.id, PROFILE)
        await user_repo.touch_vote_timestamp(voter.id, minutes_ago(61))

        second_id = await vote_service.vote(voter.id, PROFILE, 1)

        assert second_id != first_id
        assert isinstance(second_id, int)
        assert VoteId(second_id) == (await vote_service.get_vote(voter.id, PROFILE)).id
