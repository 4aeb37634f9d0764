"""User use cases."""

from .create_user import CreateUserRequest, CreateUserUseCase
from .delete_user import DeleteUserRequest, DeleteUserUseCase
from .get_user import GetUserRequest, GetUserUseCase
from .get_user_by_email import GetUserByEmailRequest, GetUserByEmailUseCase
from .list_users import ListUsersRequest, ListUsersResponse, ListUsersUseCase
from .response import RoleResponse, UserResponse
from .update_user import UpdateUserRequest, UpdateUserUseCase

__all__ = [
    "CreateUserRequest",
    "CreateUserUseCase",
    "DeleteUserRequest",
    "DeleteUserUseCase",
    "GetUserByEmailRequest",
    "GetUserByEmailUseCase",
    "GetUserRequest",
    "GetUserUseCase",
    "ListUsersRequest",
    "ListUsersResponse",
    "ListUsersUseCase",
    "RoleResponse",
    "UpdateUserRequest",
    "UpdateUserUseCase",
    "UserResponse",
]
