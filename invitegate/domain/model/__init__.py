"""Domain model entities for invitegate."""

from invitegate.domain.model.invite import Invite
from invitegate.domain.model.invite_use import InviteUse
from invitegate.domain.model.user import User

__all__ = [
    "User",
    "Invite",
    "InviteUse",
]
