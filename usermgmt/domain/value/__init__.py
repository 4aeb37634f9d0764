"""Domain value objects."""

from usermgmt.domain.value.identifiers import ProfileId, RoleId, UserId, VoteId
from usermgmt.domain.value.types import VoteValue

__all__ = [
    # Identifiers
    "UserId",
    "ProfileId",
    "RoleId",
    "VoteId",
    # Types
    "VoteValue",
]
