"""Application layer DI providers."""

from dishka import Scope, provide

from invitegate.application.usecase.auth import (
    GetCurrentUserUseCase,
    SignInUseCase,
    SignUpUseCase,
)
from invitegate.application.usecase.invite import (
    CreateInviteUseCase,
    GetInvitesUseCase,
    InviteLifecycleUseCase,
    RedeemInviteUseCase,
)
from invitegate.config import InvitationSettings
from invitegate.domain.service import (
    EligibilityEvaluator,
    InvitePolicy,
    InviteService,
    InviteValidator,
    JWTService,
    RoleTransitionService,
    UserService,
)
from invitegate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_signup_use_case(
        self,
        user_service: UserService,
        jwt_service: JWTService,
        settings: InvitationSettings,
    ) -> SignUpUseCase:
        """Provide signup use case."""
        return SignUpUseCase(
            user_service=user_service, jwt_service=jwt_service, settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_signin_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> SignInUseCase:
        """Provide signin use case."""
        return SignInUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_service: UserService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(jwt_service=jwt_service, user_service=user_service)

    # Invite use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self,
        invite_service: InviteService,
        user_service: UserService,
        eligibility: EligibilityEvaluator,
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(
            invite_service=invite_service,
            user_service=user_service,
            eligibility=eligibility,
        )

    @provide(scope=Scope.REQUEST)
    def get_redeem_invite_use_case(
        self, invite_validator: InviteValidator, policy: InvitePolicy
    ) -> RedeemInviteUseCase:
        """Provide redeem invite use case."""
        return RedeemInviteUseCase(invite_validator=invite_validator, policy=policy)

    @provide(scope=Scope.REQUEST)
    def get_get_invites_use_case(
        self, invite_service: InviteService, user_service: UserService
    ) -> GetInvitesUseCase:
        """Provide get invites use case."""
        return GetInvitesUseCase(
            invite_service=invite_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_invite_lifecycle_use_case(
        self,
        invite_validator: InviteValidator,
        invite_service: InviteService,
        role_transition: RoleTransitionService,
        user_service: UserService,
        policy: InvitePolicy,
        settings: InvitationSettings,
    ) -> InviteLifecycleUseCase:
        """Provide invite lifecycle hooks."""
        return InviteLifecycleUseCase(
            invite_validator=invite_validator,
            invite_service=invite_service,
            role_transition=role_transition,
            user_service=user_service,
            policy=policy,
            settings=settings,
        )
