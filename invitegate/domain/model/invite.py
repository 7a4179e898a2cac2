"""Invite entity.

Invites gate role escalation at signup. A code is created by an eligible
user, staged by the invitee in a cookie, and consumed by the signup hook.
"""

from datetime import datetime
from typing import Optional

from pydantic import model_validator

from invitegate.domain.model.common import DomainModel
from invitegate.domain.value import (
    ConsumptionStrategy,
    Counted,
    InviteCode,
    InviteId,
    SingleUse,
    UserId,
)


class Invite(DomainModel):
    """Invite entity - one code, one expiry, one consumption strategy.

    Business rules:
    - Codes are unique across all time and never recycled
    - expires_at is the last instant at which the code is redeemable
    - Single-use invites carry used_by_user_id and used_at together or not at all
    - Counted invites are never updated after creation; uses live in InviteUse
    """

    id: InviteId
    code: InviteCode
    created_by_user_id: Optional[UserId] = None  # Nulled when the creator is deleted
    created_at: datetime
    expires_at: datetime
    consumption: ConsumptionStrategy = SingleUse()
    used_by_user_id: Optional[UserId] = None
    used_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_invariants(self) -> "Invite":
        """Validate expiry ordering and the used-marker pairing."""
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be later than created_at")
        if (self.used_by_user_id is None) != (self.used_at is None):
            raise ValueError("used_by_user_id and used_at must be set together")
        if isinstance(self.consumption, Counted) and self.used_at is not None:
            raise ValueError("Counted invites track uses in the usage ledger")
        return self

    @property
    def is_counted(self) -> bool:
        """Whether uses are tracked in the usage ledger."""
        return isinstance(self.consumption, Counted)

    @property
    def max_uses(self) -> int:
        """Number of consumptions this invite allows."""
        if isinstance(self.consumption, Counted):
            return self.consumption.max_uses
        return 1

    @property
    def is_used(self) -> bool:
        """Whether a single-use invite has been consumed."""
        return self.used_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Whether the code is past its expiry at ``now``.

        Equality still counts as valid.
        """
        return now > self.expires_at
