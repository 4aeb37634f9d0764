"""User response models shared by the user use cases."""

from datetime import datetime

from pydantic import BaseModel

from usermgmt.domain.model import User


class RoleResponse(BaseModel):
    """Role as returned to clients."""

    role_id: int
    name: str


class UserResponse(BaseModel):
    """User as returned to clients. The password is never included."""

    user_id: int
    email: str
    first_name: str
    last_name: str
    role_id: int | None
    role: RoleResponse | None
    vote_updated_at: datetime | None
    deleted_at: datetime | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Build a response from a domain user."""
        return cls(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role_id=user.role_id,
            role=RoleResponse(role_id=user.role.id, name=user.role.name)
            if user.role
            else None,
            vote_updated_at=user.vote_updated_at,
            deleted_at=user.deleted_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
