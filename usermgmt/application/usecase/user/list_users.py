"""List users use case."""

import logfire
from pydantic import BaseModel

from usermgmt.config import Settings
from usermgmt.domain.error import ValidationError
from usermgmt.domain.service import UserService

from .response import UserResponse


class ListUsersRequest(BaseModel):
    """List users request.

    Bounds are checked by the use case and service, not by the model, so
    bad input surfaces as a domain validation error.
    """

    page: int = 1
    page_size: int | None = None  # Falls back to api.default_page_size


class ListUsersResponse(BaseModel):
    """List users response."""

    items: list[UserResponse]
    page: int
    page_size: int
    total: int


class ListUsersUseCase:
    """Use case for paging through live users."""

    def __init__(self, user_service: UserService, settings: Settings) -> None:
        """Initialize list users use case.

        Args:
            user_service: User domain service
            settings: Application settings (page size bounds)
        """
        self.user_service = user_service
        self.settings = settings

    async def execute(self, request: ListUsersRequest) -> ListUsersResponse:
        """Execute list users flow.

        Args:
            request: Page number and size

        Returns:
            One page of live users plus the total live count

        Raises:
            ValidationError: If page or page_size is out of bounds
        """
        page_size = request.page_size
        if page_size is None:
            page_size = self.settings.api.default_page_size
        if page_size > self.settings.api.max_page_size:
            logfire.warn(
                "Page size above maximum",
                page_size=page_size,
                max_page_size=self.settings.api.max_page_size,
            )
            raise ValidationError(
                f"page_size must be at most {self.settings.api.max_page_size}"
            )

        users = await self.user_service.list_users(request.page, page_size)
        total = await self.user_service.count_users()

        return ListUsersResponse(
            items=[UserResponse.from_user(u) for u in users],
            page=request.page,
            page_size=page_size,
            total=total,
        )
