"""Application layer DI providers."""

from dishka import Scope, provide

from usermgmt.application.usecase.user import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserByEmailUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from usermgmt.application.usecase.vote import (
    CastVoteUseCase,
    GetVoteUseCase,
    RevokeVoteUseCase,
)
from usermgmt.config import Settings
from usermgmt.domain.service import UserService, VoteService
from usermgmt.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_create_user_use_case(self, user_service: UserService) -> CreateUserUseCase:
        """Provide create user use case."""
        return CreateUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_use_case(self, user_service: UserService) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_get_user_by_email_use_case(
        self, user_service: UserService
    ) -> GetUserByEmailUseCase:
        """Provide get user by email use case."""
        return GetUserByEmailUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(self, user_service: UserService) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_user_use_case(self, user_service: UserService) -> DeleteUserUseCase:
        """Provide delete user use case."""
        return DeleteUserUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self, user_service: UserService, settings: Settings
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(user_service=user_service, settings=settings)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_get_vote_use_case(self, vote_service: VoteService) -> GetVoteUseCase:
        """Provide get vote use case."""
        return GetVoteUseCase(vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_revoke_vote_use_case(self, vote_service: VoteService) -> RevokeVoteUseCase:
        """Provide revoke vote use case."""
        return RevokeVoteUseCase(vote_service=vote_service)
