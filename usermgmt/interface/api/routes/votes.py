"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from usermgmt.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetVoteRequest,
    GetVoteUseCase,
    RevokeVoteRequest,
    RevokeVoteResponse,
    RevokeVoteUseCase,
    VoteResponse,
)
from usermgmt.domain.error import NotFoundError

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


@router.post("", response_model=CastVoteResponse)
async def cast_vote(
    request: CastVoteRequest,
    use_case: FromDishka[CastVoteUseCase],
) -> CastVoteResponse:
    """Vote on a profile, or replace an earlier vote on it.

    Args:
        request: Voter, rated profile and value
        use_case: Cast vote use case from DI

    Returns:
        ID of the created or updated vote
    """
    return await use_case.execute(request)


@router.get("/{user_id}/{profile_id}", response_model=VoteResponse)
async def get_vote(
    user_id: int,
    profile_id: int,
    use_case: FromDishka[GetVoteUseCase],
) -> VoteResponse:
    """Show a user's current vote on a profile."""
    vote = await use_case.execute(
        GetVoteRequest(user_id=user_id, profile_id=profile_id)
    )
    if vote is None:
        raise NotFoundError("Vote", f"{user_id}/{profile_id}")
    return vote


@router.delete("/{user_id}/{profile_id}", response_model=RevokeVoteResponse)
async def revoke_vote(
    user_id: int,
    profile_id: int,
    use_case: FromDishka[RevokeVoteUseCase],
) -> RevokeVoteResponse:
    """Withdraw a user's vote on a profile."""
    return await use_case.execute(
        RevokeVoteRequest(user_id=user_id, profile_id=profile_id)
    )
