"""User domain service."""

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from usermgmt.domain.error import (
    EmailConflictError,
    InsertionFailedError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from usermgmt.domain.model import User, UserPatch
from usermgmt.domain.model.common import utc_now
from usermgmt.domain.repository import UserRepository
from usermgmt.domain.value import UserId

from .base import Service


EMAIL_CONSTRAINT = "uq_users_email_live"


def _constraint_name(error: IntegrityError) -> str | None:
    """Name of the violated constraint, where the driver reports one.

    asyncpg exposes ``constraint_name``; SQLAlchemy's adapter keeps the
    asyncpg exception as the cause of ``error.orig``.
    """
    for candidate in (error.orig, getattr(error.orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    return None


def _is_email_violation(error: IntegrityError) -> bool:
    """Whether a unique violation was raised by the live-email index."""
    name = _constraint_name(error)
    if name is not None:
        return name == EMAIL_CONSTRAINT
    # SQLite names only the columns in its message
    return "email" in str(error.orig).lower()


class UserService(Service):
    """Domain service for user lifecycle operations."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def create_user(self, user: User) -> User:
        """Store a new user as given.

        Args:
            user: User to create

        Returns:
            Stored user with its assigned ID

        Raises:
            InsertionFailedError: If storage rejects the write
        """
        with logfire.span("user_service.create_user", email=user.email):
            try:
                created = await self.user_repository.create(user)
            except SQLAlchemyError as e:
                logfire.error("User insertion failed", email=user.email, error=str(e))
                raise InsertionFailedError(f"Failed to create user: {e}") from e
            logfire.info("User created", user_id=created.id, email=created.email)
            return created

    async def get_user(self, user_id: UserId) -> User:
        """Get a live user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found or soft-deleted
            StorageError: If the lookup itself fails
        """
        with logfire.span("user_service.get_user", user_id=user_id):
            return await self._fetch_active(user_id)

    async def update_user(self, user_id: UserId, patch: UserPatch) -> User:
        """Apply a partial update to a live user.

        Steps, each completing before the next:
        1. Fetch the current user (row-locked)
        2. Merge populated patch fields, checking email uniqueness first
        3. Persist the merged user

        Args:
            user_id: User ID
            patch: Fields to overwrite; empty fields are left unchanged

        Returns:
            The merged, persisted user

        Raises:
            NotFoundError: If user not found or soft-deleted
            EmailConflictError: If another live user holds the new email
            StorageError: If a lookup or the save fails
        """
        with logfire.span("user_service.update_user", user_id=user_id):
            user = await self._fetch_active(user_id, for_update=True)
            merged = await self._apply_patch(user, patch)
            saved = await self._save(merged)
            logfire.info("User updated", user_id=user_id)
            return saved

    async def delete_user(self, user_id: UserId) -> User:
        """Soft-delete a user by stamping ``deleted_at``.

        Runs the update pipeline with a deletion patch. Already-deleted
        users are accepted so repeated deletes end in the same state.

        Args:
            user_id: User ID

        Returns:
            The deleted user

        Raises:
            NotFoundError: If no user with this ID exists at all
            StorageError: If the lookup or the save fails
        """
        with logfire.span("user_service.delete_user", user_id=user_id):
            try:
                user = await self.user_repository.find_by_id(user_id, for_update=True)
            except SQLAlchemyError as e:
                logfire.error("User lookup failed", user_id=user_id, error=str(e))
                raise StorageError(f"Failed to load user {user_id}: {e}") from e
            if user is None:
                logfire.warn("No user found with the given ID", user_id=user_id)
                raise NotFoundError("User", str(user_id))

            merged = await self._apply_patch(user, UserPatch(deleted_at=utc_now()))
            deleted = await self._save(merged)
            logfire.info("User soft-deleted", user_id=user_id)
            return deleted

    async def list_users(self, page: int, page_size: int) -> list[User]:
        """List a page of live users.

        Args:
            page: 1-based page number
            page_size: Users per page

        Returns:
            Users at offset ``(page - 1) * page_size``, at most ``page_size``

        Raises:
            ValidationError: If page or page_size is below 1
            StorageError: If the query fails
        """
        with logfire.span("user_service.list_users", page=page, page_size=page_size):
            if page < 1 or page_size < 1:
                logfire.warn("Invalid pagination", page=page, page_size=page_size)
                raise ValidationError("page and page_size must be at least 1")

            offset = (page - 1) * page_size
            try:
                users = await self.user_repository.list_active(
                    offset=offset, limit=page_size
                )
            except SQLAlchemyError as e:
                logfire.error("User listing failed", error=str(e))
                raise StorageError(f"Failed to list users: {e}") from e
            logfire.info("Users listed", count=len(users), offset=offset)
            return users

    async def count_users(self) -> int:
        """Count live users.

        Raises:
            StorageError: If the query fails
        """
        with logfire.span("user_service.count_users"):
            try:
                return await self.user_repository.count_active()
            except SQLAlchemyError as e:
                logfire.error("User count failed", error=str(e))
                raise StorageError(f"Failed to count users: {e}") from e

    async def get_user_by_email(self, email: str) -> User | None:
        """Get a live user by email.

        Absence is not an error here, unlike ``get_user``.

        Args:
            email: User email

        Returns:
            User if found, None otherwise

        Raises:
            StorageError: If the lookup fails
        """
        with logfire.span("user_service.get_user_by_email", email=email):
            user = await self._find_by_email(email)
            if user:
                logfire.info("User found", email=email, user_id=user.id)
            else:
                logfire.info("No user with email", email=email)
            return user

    async def get_user_by_id(self, user_id: UserId) -> User:
        """Get a user by ID regardless of soft-deletion.

        Args:
            user_id: User ID

        Returns:
            User entity, possibly soft-deleted

        Raises:
            NotFoundError: If no user with this ID exists
            StorageError: If the lookup fails
        """
        with logfire.span("user_service.get_user_by_id", user_id=user_id):
            try:
                user = await self.user_repository.find_by_id(user_id)
            except SQLAlchemyError as e:
                logfire.error("User lookup failed", user_id=user_id, error=str(e))
                raise StorageError(f"Failed to load user {user_id}: {e}") from e
            if user is None:
                logfire.warn("User not found", user_id=user_id)
                raise NotFoundError("User", str(user_id))
            return user

    async def _fetch_active(self, user_id: UserId, for_update: bool = False) -> User:
        try:
            user = await self.user_repository.find_active_by_id(
                user_id, for_update=for_update
            )
        except SQLAlchemyError as e:
            logfire.error("User lookup failed", user_id=user_id, error=str(e))
            raise StorageError(f"Failed to load user {user_id}: {e}") from e
        if user is None:
            logfire.warn("No user found with the given ID", user_id=user_id)
            raise NotFoundError("User", str(user_id))
        return user

    async def _find_by_email(self, email: str) -> User | None:
        try:
            return await self.user_repository.find_active_by_email(email)
        except SQLAlchemyError as e:
            logfire.error("User email lookup failed", email=email, error=str(e))
            raise StorageError(f"Failed to look up email: {e}") from e

    async def _apply_patch(self, user: User, patch: UserPatch) -> User:
        """Merge populated patch fields onto a copy of the user."""
        updates = patch.changes()

        if patch.email and patch.email != user.email:
            holder = await self._find_by_email(patch.email)
            if holder is not None and holder.id != user.id:
                logfire.warn(
                    "The email is already occupied by another user",
                    user_id=user.id,
                    email=patch.email,
                )
                raise EmailConflictError(patch.email)
            updates["email"] = patch.email

        if updates.get("role_id", user.role_id) != user.role_id:
            updates["role"] = None  # stale once the reference changes
        if updates:
            updates["updated_at"] = utc_now()
        return user.model_copy(update=updates)

    async def _save(self, user: User) -> User:
        try:
            return await self.user_repository.save(user)
        except IntegrityError as e:
            if _is_email_violation(e):
                logfire.warn(
                    "Email taken concurrently", user_id=user.id, email=user.email
                )
                raise EmailConflictError(user.email) from e
            logfire.error("User save failed", user_id=user.id, error=str(e))
            raise StorageError(f"Failed to save user {user.id}: {e}") from e
        except SQLAlchemyError as e:
            logfire.error("User save failed", user_id=user.id, error=str(e))
            raise StorageError(f"Failed to save user {user.id}: {e}") from e
