"""Revoke vote use case."""

from pydantic import BaseModel

from usermgmt.domain.service import VoteService
from usermgmt.domain.value import ProfileId, UserId


class RevokeVoteRequest(BaseModel):
    """Revoke vote request."""

    user_id: int
    profile_id: int


class RevokeVoteResponse(BaseModel):
    """Revoke vote response."""

    success: bool
    message: str


class RevokeVoteUseCase:
    """Use case for withdrawing a vote on a profile."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize revoke vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: RevokeVoteRequest) -> RevokeVoteResponse:
        """Execute revoke vote flow.

        Revoking a vote that does not exist succeeds as a no-op and is
        reported with ``success=False``.

        Raises:
            StorageError: If the delete fails
        """
        removed = await self.vote_service.revoke_vote(
            UserId(request.user_id), ProfileId(request.profile_id)
        )

        if removed:
            return RevokeVoteResponse(
                success=True,
                message="Vote revoked successfully",
            )
        else:
            return RevokeVoteResponse(
                success=False,
                message="No vote found to revoke",
            )
