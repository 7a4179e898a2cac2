"""Code generation and expiry policy."""

import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Callable

from invitegate.config import InvitationSettings
from invitegate.domain.value import ConsumptionStrategy, Counted, SingleUse, StrategyKind
from invitegate.util.error import ConfigurationError

CODE_ALPHABET = string.digits + string.ascii_uppercase
CODE_LENGTH = 6

CodeGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def generate_code() -> str:
    """Generate a 6 character code from digits and uppercase letters.

    36^6 (about 2.1e9) codes is enough for short-lived, low-volume invites.
    Pass a different generator to InvitePolicy when that is not the case.
    """
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


_default_generate_code = generate_code


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def compute_expiry(now: datetime, duration_seconds: int | None) -> datetime:
    """Return ``now + duration_seconds``.

    Raises:
        ConfigurationError: If the duration is missing or not positive
    """
    if duration_seconds is None:
        raise ConfigurationError("Invite duration is not configured")
    if duration_seconds <= 0:
        raise ConfigurationError(
            f"Invite duration must be positive, got {duration_seconds}"
        )
    return now + timedelta(seconds=duration_seconds)


class InvitePolicy:
    """Everything needed to mint a new invite.

    The code generator and clock are injectable so tests can pin them.
    """

    def __init__(
        self,
        duration_seconds: int | None,
        strategy: StrategyKind = StrategyKind.COUNTED,
        max_uses: int = 1,
        generate_code: CodeGenerator | None = None,
        get_date: Clock | None = None,
    ) -> None:
        # Fail at startup rather than on the first create call
        compute_expiry(utc_now(), duration_seconds)
        if max_uses < 1:
            raise ConfigurationError(f"max_uses must be at least 1, got {max_uses}")

        self.duration_seconds = duration_seconds
        self.strategy = StrategyKind(strategy)
        self.max_uses = max_uses
        self.generate_code = generate_code or _default_generate_code
        self.get_date = get_date or utc_now

    @classmethod
    def from_settings(
        cls,
        settings: InvitationSettings,
        generate_code: CodeGenerator | None = None,
        get_date: Clock | None = None,
    ) -> "InvitePolicy":
        """Build the policy from invitation settings."""
        return cls(
            duration_seconds=settings.duration_seconds,
            strategy=StrategyKind(settings.strategy),
            max_uses=settings.max_uses,
            generate_code=generate_code,
            get_date=get_date,
        )

    def now(self) -> datetime:
        return self.get_date()

    def expiry_for(self, created_at: datetime) -> datetime:
        return compute_expiry(created_at, self.duration_seconds)

    def new_consumption(self) -> ConsumptionStrategy:
        """Consumption strategy stamped on newly created invites."""
        if self.strategy == StrategyKind.COUNTED:
            return Counted(max_uses=self.max_uses)
        return SingleUse()
