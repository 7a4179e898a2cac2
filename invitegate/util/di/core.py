"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from invitegate.config import AuthSettings, InvitationSettings, Settings
from invitegate.domain.service import EligibilityEvaluator, InvitePolicy
from invitegate.util.cookie import InviteCookieCodec
from invitegate.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    The invite policy is built here so a missing duration fails at startup.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_invite_policy(self, settings: InvitationSettings) -> InvitePolicy:
        """Provide code generation and expiry policy."""
        return InvitePolicy.from_settings(settings)

    @provide(scope=Scope.APP)
    def provide_eligibility(self, settings: InvitationSettings) -> EligibilityEvaluator:
        """Provide invite creation eligibility evaluator."""
        return EligibilityEvaluator(settings.role_for_signup_without_invite)

    @provide(scope=Scope.APP)
    def provide_cookie_codec(self, auth_settings: AuthSettings) -> InviteCookieCodec:
        """Provide signed invite cookie codec."""
        return InviteCookieCodec(auth_settings.cookie_secret)
