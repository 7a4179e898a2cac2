"""Redeem invite use case.

Checks that a code is redeemable right now so the interface layer can stage
it in the invite cookie. Nothing is consumed here; consumption happens in the
signup hook.
"""

from datetime import datetime

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from invitegate.application.usecase.base import BaseUseCase
from invitegate.domain.error import InvalidOrExpiredInviteError
from invitegate.domain.service import InvitePolicy, InviteValidator
from invitegate.domain.value import InviteCode


class RedeemInviteRequest(BaseModel):
    """Redeem (or activate) invite request."""

    code: str


class RedeemInviteResponse(BaseModel):
    """Code accepted for staging."""

    code: str
    expires_at: datetime


class RedeemInviteUseCase(BaseUseCase):
    """Use case for validating a code before it is staged."""

    def __init__(self, invite_validator: InviteValidator, policy: InvitePolicy) -> None:
        """Initialize redeem invite use case.

        Args:
            invite_validator: Invite validator
            policy: Code and expiry policy (provides the clock)
        """
        self.invite_validator = invite_validator
        self.policy = policy

    async def execute(self, request: RedeemInviteRequest) -> RedeemInviteResponse:
        """Execute redeem flow.

        Raises:
            InvalidOrExpiredInviteError: Code unknown or expired
            NoUsesLeftError: Code has no uses left
        """
        with logfire.span("redeem_invite.execute"):
            try:
                code = InviteCode(request.code)
            except PydanticValidationError:
                raise InvalidOrExpiredInviteError()

            outcome = await self.invite_validator.validate(code, self.policy.now())
            error = outcome.to_error()
            if error is not None:
                raise error

            logfire.info(
                "Invite code accepted for staging", invite_id=str(outcome.invite.id)
            )
            return RedeemInviteResponse(
                code=outcome.invite.code.root, expires_at=outcome.invite.expires_at
            )
