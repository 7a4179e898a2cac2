"""Get invites use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from invitegate.domain.error import NoSuchUserError, NotAuthenticatedError
from invitegate.domain.service import InviteService, UserService
from invitegate.domain.value import StrategyKind, UserId


class InviteItem(BaseModel):
    """Invite item in response."""

    invite_id: str
    code: str
    strategy: StrategyKind
    created_at: datetime
    expires_at: datetime
    max_uses: int
    times_used: int
    remaining_uses: int
    used_at: datetime | None = None


class GetInvitesRequest(BaseModel):
    """Get invites request."""

    user_id: str | None = None  # User ID from the session
    limit: int = Field(default=50, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class GetInvitesResponse(BaseModel):
    """Get invites response."""

    invites: list[InviteItem]
    total: int


class GetInvitesUseCase:
    """Use case for listing invites created by the session user."""

    def __init__(self, invite_service: InviteService, user_service: UserService) -> None:
        """Initialize get invites use case.

        Args:
            invite_service: Invite service
            user_service: User service
        """
        self.invite_service = invite_service
        self.user_service = user_service

    async def execute(self, request: GetInvitesRequest) -> GetInvitesResponse:
        """Execute get invites flow.

        Args:
            request: Get invites request

        Returns:
            Invites created by the user, newest first
        """
        if not request.user_id:
            raise NotAuthenticatedError()

        try:
            user_id = UserId(UUID(request.user_id))
        except ValueError:
            raise NoSuchUserError()

        user = await self.user_service.find_by_id(user_id)
        if user is None:
            raise NoSuchUserError()

        pairs = await self.invite_service.list_created_by(
            user.id, limit=request.limit, offset=request.offset
        )

        invite_items = [
            InviteItem(
                invite_id=str(invite.id),
                code=invite.code.root,
                strategy=invite.consumption.kind,
                created_at=invite.created_at,
                expires_at=invite.expires_at,
                max_uses=invite.max_uses,
                times_used=times_used,
                remaining_uses=max(invite.max_uses - times_used, 0),
                used_at=invite.used_at,
            )
            for invite, times_used in pairs
        ]

        return GetInvitesResponse(invites=invite_items, total=len(invite_items))
