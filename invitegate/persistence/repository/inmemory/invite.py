"""In-memory invite repository for testing."""

from datetime import datetime
from typing import Optional

from invitegate.domain.error import DuplicateInviteCodeError
from invitegate.domain.model.invite import Invite
from invitegate.domain.repository.invite import InviteRepository
from invitegate.domain.value import InviteCode, InviteId, UserId


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing.

    Single-threaded event loop access means ``lock`` has nothing to guard.
    """

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._invites.get(invite_id)

    async def find_by_code(
        self, code: InviteCode, lock: bool = False
    ) -> Optional[Invite]:
        """Find an invite by exact code match."""
        for invite in self._invites.values():
            if invite.code == code:
                return invite
        return None

    async def create(self, invite: Invite) -> Invite:
        """Store a new invite.

        Raises:
            DuplicateInviteCodeError: If the code already exists
        """
        if await self.find_by_code(invite.code) is not None:
            raise DuplicateInviteCodeError(
                f"Invite code already exists: {invite.code.redacted()}"
            )
        self._invites[invite.id] = invite
        return invite

    async def mark_used(
        self, invite_id: InviteId, user_id: UserId, used_at: datetime
    ) -> bool:
        """Set the used fields if they are still empty."""
        invite = self._invites.get(invite_id)
        if invite is None or invite.used_at is not None:
            return False
        self._invites[invite_id] = invite.model_copy(
            update={"used_by_user_id": user_id, "used_at": used_at}
        )
        return True

    async def find_by_creator(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        """Find invites by creator with pagination."""
        matches = [
            invite
            for invite in self._invites.values()
            if invite.created_by_user_id == user_id
        ]

        # Sort by created_at descending
        matches.sort(key=lambda inv: inv.created_at, reverse=True)

        return matches[offset : offset + limit]
