"""Create user use case."""

from pydantic import BaseModel, Field

from usermgmt.domain.model import User
from usermgmt.domain.service import UserService
from usermgmt.domain.value import RoleId

from .response import UserResponse


class CreateUserRequest(BaseModel):
    """Create user request."""

    email: str = Field(min_length=1, max_length=255)
    first_name: str = Field(default="", max_length=255)
    last_name: str = Field(default="", max_length=255)
    password: str = Field(default="", max_length=255)
    role_id: int | None = Field(default=None, gt=0)


class CreateUserUseCase:
    """Use case for registering a new user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize create user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: CreateUserRequest) -> UserResponse:
        """Execute create user flow.

        Args:
            request: New user fields

        Returns:
            The stored user

        Raises:
            InsertionFailedError: If storage rejects the user
        """
        user = User(
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            password=request.password,
            role_id=RoleId(request.role_id) if request.role_id else None,
        )
        created = await self.user_service.create_user(user)
        return UserResponse.from_user(created)
