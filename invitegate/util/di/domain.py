"""Domain layer DI providers."""

from dishka import Scope, provide

from invitegate.config import AuthSettings
from invitegate.domain.repository import (
    InviteRepository,
    InviteUseRepository,
    UserRepository,
)
from invitegate.domain.service import (
    InvitePolicy,
    InviteService,
    InviteValidator,
    JWTService,
    RoleTransitionService,
    UserService,
)
from invitegate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_role_transition_service(
        self, user_repository: UserRepository
    ) -> RoleTransitionService:
        """Provide role transition service."""
        return RoleTransitionService(user_repository=user_repository)

    @provide
    def get_invite_validator(
        self,
        invite_repository: InviteRepository,
        invite_use_repository: InviteUseRepository,
    ) -> InviteValidator:
        """Provide invite validator."""
        return InviteValidator(
            invite_repository=invite_repository,
            invite_use_repository=invite_use_repository,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        invite_use_repository: InviteUseRepository,
        policy: InvitePolicy,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            invite_use_repository=invite_use_repository,
            policy=policy,
        )
