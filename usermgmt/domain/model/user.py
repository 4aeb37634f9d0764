"""User aggregate root.

Users are soft-deleted: a set ``deleted_at`` marks the row as logically
removed, and every "live" lookup treats it as absent. ``vote_updated_at``
records the last successful vote and gates the voting cooldown.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from usermgmt.domain.model.common import DomainModel, utc_now
from usermgmt.domain.model.role import Role
from usermgmt.domain.value import RoleId, UserId


class User(DomainModel):
    """User aggregate root.

    Business rules:
    - At most one live (not deleted) user per email
    - ``id`` is assigned by storage and never changes afterwards
    """

    id: Optional[UserId] = None
    email: str
    first_name: str = ""
    last_name: str = ""
    password: str = ""  # Opaque; hashing happens outside this service
    role_id: Optional[RoleId] = None
    role: Optional[Role] = None  # Loaded alongside by listings and email lookup
    vote_updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_deleted(self) -> bool:
        """Whether the user has been soft-deleted."""
        return self.deleted_at is not None


class UserPatch(DomainModel):
    """Partial update payload for a user.

    Only populated fields overwrite stored values: empty strings, a
    non-positive ``role_id`` and a ``None`` ``deleted_at`` all mean
    "leave unchanged".
    """

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[RoleId] = None
    deleted_at: Optional[datetime] = None

    def changes(self) -> dict[str, object]:
        """Return the populated fields other than email.

        Email is excluded because changing it requires a uniqueness check.
        """
        updates: dict[str, object] = {}
        if self.first_name:
            updates["first_name"] = self.first_name
        if self.last_name:
            updates["last_name"] = self.last_name
        if self.password:
            updates["password"] = self.password
        if self.role_id is not None and self.role_id > 0:
            updates["role_id"] = self.role_id
        if self.deleted_at is not None:
            updates["deleted_at"] = self.deleted_at
        return updates
