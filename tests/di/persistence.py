"""Mock persistence providers for testing."""

from dishka import Scope, provide

from invitegate.domain.repository import (
    InviteRepository,
    InviteUseRepository,
    UserRepository,
)
from invitegate.persistence.repository.inmemory import (
    InMemoryInviteRepository,
    InMemoryInviteUseRepository,
    InMemoryUserRepository,
)
from invitegate.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Repositories are APP-scoped so state survives across requests made by
    one test client. Every test builds its own container, which keeps tests
    isolated from each other.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_invite_repository(self) -> InviteRepository:
        """Provide in-memory invite repository."""
        return InMemoryInviteRepository()

    @provide(scope=Scope.APP)
    def get_invite_use_repository(self) -> InviteUseRepository:
        """Provide in-memory invite usage ledger."""
        return InMemoryInviteUseRepository()
