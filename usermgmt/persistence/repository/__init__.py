"""PostgreSQL repository implementations."""

from usermgmt.persistence.repository.user import PostgresUserRepository
from usermgmt.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresVoteRepository",
]
