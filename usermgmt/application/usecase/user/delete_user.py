"""Delete user use case."""

from pydantic import BaseModel

from usermgmt.domain.service import UserService
from usermgmt.domain.value import UserId

from .response import UserResponse


class DeleteUserRequest(BaseModel):
    """Delete user request."""

    user_id: int


class DeleteUserUseCase:
    """Use case for soft-deleting a user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize delete user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: DeleteUserRequest) -> UserResponse:
        """Execute delete user flow.

        Returns:
            The user with ``deleted_at`` set

        Raises:
            NotFoundError: If no user with this ID exists
        """
        deleted = await self.user_service.delete_user(UserId(request.user_id))
        return UserResponse.from_user(deleted)
