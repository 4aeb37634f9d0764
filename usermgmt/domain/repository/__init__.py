"""Repository interfaces for the domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from usermgmt.domain.repository.user import UserRepository
from usermgmt.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "VoteRepository",
]
