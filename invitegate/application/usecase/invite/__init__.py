"""Invite use cases."""

from invitegate.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from invitegate.application.usecase.invite.get_invites import (
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
)
from invitegate.application.usecase.invite.lifecycle import (
    HookMatcher,
    HookResult,
    InviteLifecycleUseCase,
    LifecycleState,
)
from invitegate.application.usecase.invite.redeem_invite import (
    RedeemInviteRequest,
    RedeemInviteResponse,
    RedeemInviteUseCase,
)

__all__ = [
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "GetInvitesRequest",
    "GetInvitesResponse",
    "GetInvitesUseCase",
    "HookMatcher",
    "HookResult",
    "InviteLifecycleUseCase",
    "LifecycleState",
    "RedeemInviteRequest",
    "RedeemInviteResponse",
    "RedeemInviteUseCase",
]
