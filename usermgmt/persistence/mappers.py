"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from usermgmt.domain.model import Role, User, Vote
from usermgmt.domain.value import ProfileId, RoleId, UserId, VoteId


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps (SQLite drops the offset)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    A row selected together with the roles table carries ``role_name``;
    when present (and the role exists) the role is attached.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    role_id = row.get("role_id")
    role = None
    if role_id is not None and row.get("role_name") is not None:
        role = Role(id=RoleId(role_id), name=row["role_name"])

    return User(
        id=UserId(row["id"]),
        email=row["email"],
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        password=row.get("password") or "",
        role_id=RoleId(role_id) if role_id is not None else None,
        role=role,
        vote_updated_at=_as_utc(row.get("vote_updated_at")),
        deleted_at=_as_utc(row.get("deleted_at")),
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    The loaded role and an unassigned ID are not columns and are left out.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return user.model_dump(exclude={"role", "id"} if user.id is None else {"role"})


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(row["id"]),
        user_id=UserId(row["user_id"]),
        profile_id=ProfileId(row["profile_id"]),
        value=row["value"],
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row["updated_at"]),
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return vote.model_dump(exclude={"id"} if vote.id is None else None)
