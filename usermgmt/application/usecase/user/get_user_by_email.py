"""Get user by email use case."""

from pydantic import BaseModel

from usermgmt.domain.service import UserService

from .response import UserResponse


class GetUserByEmailRequest(BaseModel):
    """Get user by email request."""

    email: str


class GetUserByEmailUseCase:
    """Use case for looking up a live user by email.

    Absence is a normal outcome and yields ``None``.
    """

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetUserByEmailRequest) -> UserResponse | None:
        user = await self.user_service.get_user_by_email(request.email)
        return UserResponse.from_user(user) if user else None
