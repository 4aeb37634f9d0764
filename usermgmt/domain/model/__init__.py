"""Domain model entities."""

from usermgmt.domain.model.role import Role
from usermgmt.domain.model.user import User, UserPatch
from usermgmt.domain.model.vote import Vote

__all__ = [
    "Role",
    "User",
    "UserPatch",
    "Vote",
]
