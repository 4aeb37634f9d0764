"""Get user use case."""

from pydantic import BaseModel

from usermgmt.domain.service import UserService
from usermgmt.domain.value import UserId

from .response import UserResponse


class GetUserRequest(BaseModel):
    """Get user request."""

    user_id: int


class GetUserUseCase:
    """Use case for reading one live user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetUserRequest) -> UserResponse:
        """Execute get user flow.

        Raises:
            NotFoundError: If the user does not exist or is soft-deleted
        """
        user = await self.user_service.get_user(UserId(request.user_id))
        return UserResponse.from_user(user)
