"""User entity.

Users are owned by the host authentication layer. This service reads them
and overwrites a single field, ``role``.
"""

from datetime import datetime, timezone

from pydantic import Field

from invitegate.domain.model.common import DomainModel
from invitegate.domain.value import UserId


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """User record as exposed by the host."""

    id: UserId
    email: str
    name: str
    role: str
    password_hash: str | None = None
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)
