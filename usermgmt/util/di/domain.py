"""Domain layer DI providers."""

from dishka import Scope, provide

from usermgmt.config import VotingSettings
from usermgmt.domain.repository import UserRepository, VoteRepository
from usermgmt.domain.service import UserService, VoteService
from usermgmt.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        user_repository: UserRepository,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            user_repository=user_repository,
            cooldown=voting_settings.cooldown,
        )
