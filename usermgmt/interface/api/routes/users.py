"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from usermgmt.application.usecase.user import (
    CreateUserRequest,
    CreateUserUseCase,
    DeleteUserRequest,
    DeleteUserUseCase,
    GetUserByEmailRequest,
    GetUserByEmailUseCase,
    GetUserRequest,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersResponse,
    ListUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
    UserResponse,
)
from usermgmt.domain.error import NotFoundError

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


class UpdateUserBody(BaseModel):
    """Fields accepted by PATCH /users/{user_id}."""

    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=255)
    role_id: int | None = None


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    use_case: FromDishka[CreateUserUseCase],
) -> UserResponse:
    """Register a new user."""
    return await use_case.execute(request)


@router.get("", response_model=ListUsersResponse)
async def list_users(
    use_case: FromDishka[ListUsersUseCase],
    page: int = Query(default=1),
    page_size: int | None = Query(default=None),
) -> ListUsersResponse:
    """List live users, one page at a time.

    Args:
        use_case: List users use case from DI
        page: 1-based page number
        page_size: Users per page (defaults to the configured page size)

    Returns:
        Page of users with the total live user count
    """
    return await use_case.execute(ListUsersRequest(page=page, page_size=page_size))


@router.get("/by-email", response_model=UserResponse)
async def get_user_by_email(
    use_case: FromDishka[GetUserByEmailUseCase],
    email: str = Query(min_length=1),
) -> UserResponse:
    """Look up a live user by email.

    Raises:
        NotFoundError: If no live user holds the email
    """
    user = await use_case.execute(GetUserByEmailRequest(email=email))
    if user is None:
        raise NotFoundError("User", email)
    return user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    use_case: FromDishka[GetUserUseCase],
) -> UserResponse:
    """Get a live user by ID."""
    return await use_case.execute(GetUserRequest(user_id=user_id))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    body: UpdateUserBody,
    use_case: FromDishka[UpdateUserUseCase],
) -> UserResponse:
    """Partially update a live user.

    Omitted or empty fields keep their stored values.
    """
    request = UpdateUserRequest(user_id=user_id, **body.model_dump())
    return await use_case.execute(request)


@router.delete("/{user_id}", response_model=UserResponse)
async def delete_user(
    user_id: int,
    use_case: FromDishka[DeleteUserUseCase],
) -> UserResponse:
    """Soft-delete a user. Deleting twice returns the deleted user again."""
    return await use_case.execute(DeleteUserRequest(user_id=user_id))
