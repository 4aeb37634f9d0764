"""Cast vote use case."""

from pydantic import BaseModel

from usermgmt.domain.service import VoteService
from usermgmt.domain.value import ProfileId, UserId


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    user_id: int
    profile_id: int
    value: int


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    vote_id: int
    user_id: int
    profile_id: int
    value: int


class CastVoteUseCase:
    """Use case for voting on a profile, or changing an earlier vote."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Voter, rated profile and vote value

        Returns:
            ID of the created or updated vote

        Raises:
            VoteCooldownError: If the voter voted too recently
            InsertionFailedError: If the voter is unknown or the write fails
        """
        vote_id = await self.vote_service.vote(
            UserId(request.user_id), ProfileId(request.profile_id), request.value
        )
        return CastVoteResponse(
            vote_id=vote_id,
            user_id=request.user_id,
            profile_id=request.profile_id,
            value=request.value,
        )
