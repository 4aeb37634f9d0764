"""Get vote use case."""

from datetime import datetime

from pydantic import BaseModel

from usermgmt.domain.service import VoteService
from usermgmt.domain.value import ProfileId, UserId


class GetVoteRequest(BaseModel):
    """Get vote request."""

    user_id: int
    profile_id: int


class VoteResponse(BaseModel):
    """A user's current vote on a profile."""

    vote_id: int
    user_id: int
    profile_id: int
    value: int
    created_at: datetime
    updated_at: datetime


class GetVoteUseCase:
    """Use case for reading a user's current vote on a profile."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: GetVoteRequest) -> VoteResponse | None:
        vote = await self.vote_service.get_vote(
            UserId(request.user_id), ProfileId(request.profile_id)
        )
        if vote is None:
            return None
        return VoteResponse(
            vote_id=vote.id,
            user_id=vote.user_id,
            profile_id=vote.profile_id,
            value=vote.value,
            created_at=vote.created_at,
            updated_at=vote.updated_at,
        )
