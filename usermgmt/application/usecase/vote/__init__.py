"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_vote import GetVoteRequest, GetVoteUseCase, VoteResponse
from .revoke_vote import RevokeVoteRequest, RevokeVoteResponse, RevokeVoteUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetVoteRequest",
    "GetVoteUseCase",
    "RevokeVoteRequest",
    "RevokeVoteResponse",
    "RevokeVoteUseCase",
    "VoteResponse",
]
