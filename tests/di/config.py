"""Config overrides for testing."""

from dishka import Provider, Scope, provide

from invitegate.config import InvitationSettings, Settings
from invitegate.domain.service import (
    CanCreateInvite,
    EligibilityEvaluator,
    InvitePolicy,
)
from invitegate.domain.service.policy import Clock, CodeGenerator


def make_settings(**invitations) -> Settings:
    """Test settings with a one hour invite duration unless overridden."""
    invitations.setdefault("duration_seconds", 3600)
    return Settings(
        environment="test",
        invitations=InvitationSettings(**invitations),
    )


class ConfigOverrideProvider(Provider):
    """Pins settings, code generator, clock and eligibility rule.

    Registered after the production providers so its factories win.
    """

    scope = Scope.APP

    def __init__(
        self,
        settings: Settings | None = None,
        generate_code: CodeGenerator | None = None,
        get_date: Clock | None = None,
        can_create_invite: CanCreateInvite | None = None,
    ) -> None:
        super().__init__()
        self.settings = settings or make_settings()
        self.generate_code = generate_code
        self.get_date = get_date
        self.can_create_invite = can_create_invite

    @provide
    def provide_settings(self) -> Settings:
        return self.settings

    @provide
    def provide_invite_policy(self, settings: InvitationSettings) -> InvitePolicy:
        return InvitePolicy.from_settings(
            settings, generate_code=self.generate_code, get_date=self.get_date
        )

    @provide
    def provide_eligibility(self, settings: InvitationSettings) -> EligibilityEvaluator:
        return EligibilityEvaluator(
            settings.role_for_signup_without_invite, self.can_create_invite
        )
