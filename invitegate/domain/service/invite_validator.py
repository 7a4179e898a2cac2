"""Invite validity evaluation."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

import logfire

from invitegate.domain.error import (
    InvalidOrExpiredInviteError,
    InviteValidationError,
    NoUsesLeftError,
)
from invitegate.domain.model import Invite
from invitegate.domain.repository import InviteRepository, InviteUseRepository
from invitegate.domain.value import InviteCode

from .base import Service


class OutcomeKind(str, Enum):
    """Result of validating an invite code."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ValidationOutcome:
    """Outcome of InviteValidator.validate.

    NOT_FOUND and EXPIRED are kept apart for logging but map to the same
    public error, so clients cannot probe which codes ever existed.
    """

    kind: OutcomeKind
    invite: Invite | None = None
    times_used: int = 0

    @property
    def is_valid(self) -> bool:
        return self.kind == OutcomeKind.VALID

    def to_error(self) -> InviteValidationError | None:
        """Public error for a failed outcome, None when valid."""
        if self.kind == OutcomeKind.VALID:
            return None
        if self.kind == OutcomeKind.EXHAUSTED:
            return NoUsesLeftError()
        return InvalidOrExpiredInviteError()


class InviteValidator(Service):
    """Decides whether a code is currently redeemable."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        invite_use_repository: InviteUseRepository,
    ) -> None:
        """Initialize invite validator.

        Args:
            invite_repository: Invite repository
            invite_use_repository: Invite usage ledger repository
        """
        self.invite_repository = invite_repository
        self.invite_use_repository = invite_use_repository

    async def validate(
        self, code: InviteCode, now: datetime, lock: bool = False
    ) -> ValidationOutcome:
        """Validate an invite code at instant ``now``.

        Counted invites report exhaustion before expiry, so a code that is
        both used up and expired always surfaces as "no uses left". For
        single-use invites either condition disqualifies on its own.

        Args:
            code: Code to look up (exact match)
            now: Instant to evaluate expiry against
            lock: Lock the invite row for the rest of the transaction

        Returns:
            Validation outcome
        """
        with logfire.span("invite_validator.validate", code=code.redacted()):
            invite = await self.invite_repository.find_by_code(code, lock=lock)
            if invite is None:
                logfire.info("Invite code not found", code=code.redacted())
                return ValidationOutcome(kind=OutcomeKind.NOT_FOUND)

            times_used = await self.times_used(invite)

            if times_used >= invite.max_uses:
                logfire.info(
                    "Invite has no uses left",
                    invite_id=str(invite.id),
                    times_used=times_used,
                    max_uses=invite.max_uses,
                )
                return ValidationOutcome(
                    kind=OutcomeKind.EXHAUSTED, invite=invite, times_used=times_used
                )

            if invite.is_expired(now):
                logfire.info(
                    "Invite expired",
                    invite_id=str(invite.id),
                    expires_at=invite.expires_at.isoformat(),
                    now=now.isoformat(),
                )
                return ValidationOutcome(
                    kind=OutcomeKind.EXPIRED, invite=invite, times_used=times_used
                )

            return ValidationOutcome(
                kind=OutcomeKind.VALID, invite=invite, times_used=times_used
            )

    async def times_used(self, invite: Invite) -> int:
        """Number of consumptions recorded for ``invite``."""
        if invite.is_counted:
            return await self.invite_use_repository.count_by_invite(invite.id)
        return 1 if invite.is_used else 0
