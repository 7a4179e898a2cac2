"""InviteUse entity - one row per consumption of a counted invite."""

from datetime import datetime
from typing import Optional

from invitegate.domain.model.common import DomainModel
from invitegate.domain.value import InviteId, InviteUseId, UserId


class InviteUse(DomainModel):
    """Append-only usage ledger entry.

    The number of rows for an invite is the authoritative "times used" value.
    Rows outlive their invite: invite_id is nulled if the invite is deleted.
    """

    id: InviteUseId
    invite_id: Optional[InviteId]
    used_by_user_id: Optional[UserId] = None
    used_at: datetime
