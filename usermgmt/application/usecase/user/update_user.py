"""Update user use case."""

from pydantic import BaseModel, Field

from usermgmt.domain.model import UserPatch
from usermgmt.domain.service import UserService
from usermgmt.domain.value import RoleId, UserId

from .response import UserResponse


class UpdateUserRequest(BaseModel):
    """Update user request.

    Omitted or empty fields are left unchanged.
    """

    user_id: int
    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=255)
    role_id: int | None = None


class UpdateUserUseCase:
    """Use case for partially updating a live user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize update user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: UpdateUserRequest) -> UserResponse:
        """Execute update user flow.

        Args:
            request: User ID and fields to overwrite

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist or is soft-deleted
            EmailConflictError: If the new email belongs to another live user
        """
        patch = UserPatch(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            password=request.password,
            role_id=RoleId(request.role_id) if request.role_id is not None else None,
        )
        updated = await self.user_service.update_user(UserId(request.user_id), patch)
        return UserResponse.from_user(updated)
