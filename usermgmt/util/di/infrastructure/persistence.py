"""Persistence infrastructure providers."""

from collections.abc import AsyncGenerator, AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from usermgmt.config import Settings
from usermgmt.domain.repository import UserRepository, VoteRepository
from usermgmt.persistence.database import create_engine, create_session_factory
from usermgmt.persistence.repository import (
    PostgresUserRepository,
    PostgresVoteRepository,
)
from usermgmt.util.di.base import ProviderBase
from usermgmt.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncGenerator[AsyncSession, BaseException | None]:
        """Provide database session for request scope.

        dishka finalizes the scope by sending the exception that ended it
        (``None`` on success) back into this generator. Any exception,
        including ``CancelledError`` from a request timeout, rolls back.
        Only a cleanly finished request commits.
        """
        async with session_factory() as session:
            exc = yield session
            if exc is not None:
                logfire.warn("Session rollback", error=repr(exc))
                await session.rollback()
                return

            try:
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session commit failed", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        """Provide Vote repository."""
        return PostgresVoteRepository(session)
