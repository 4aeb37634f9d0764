"""In-memory repository implementations for testing."""

from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
