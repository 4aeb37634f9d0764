"""Domain services."""

from .base import Service
from .user_service import UserService
from .vote_service import DEFAULT_VOTE_COOLDOWN, VoteService

__all__ = [
    "DEFAULT_VOTE_COOLDOWN",
    "Service",
    "UserService",
    "VoteService",
]
