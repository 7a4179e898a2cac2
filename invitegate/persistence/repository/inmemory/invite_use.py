"""In-memory invite usage ledger for testing."""

from invitegate.domain.model.invite_use import InviteUse
from invitegate.domain.repository.invite_use import InviteUseRepository
from invitegate.domain.value import InviteId, UserId


class InMemoryInviteUseRepository(InviteUseRepository):
    """In-memory implementation of InviteUseRepository for testing."""

    def __init__(self) -> None:
        self._uses: list[InviteUse] = []

    async def create(self, invite_use: InviteUse) -> InviteUse:
        """Append a usage record."""
        self._uses.append(invite_use)
        return invite_use

    async def count_by_invite(self, invite_id: InviteId) -> int:
        """Count usage records for an invite."""
        return sum(1 for use in self._uses if use.invite_id == invite_id)

    async def find_by_invite(self, invite_id: InviteId) -> list[InviteUse]:
        """List usage records for an invite, oldest first."""
        uses = [use for use in self._uses if use.invite_id == invite_id]
        return sorted(uses, key=lambda use: use.used_at)

    async def exists_for_user(self, invite_id: InviteId, user_id: UserId) -> bool:
        """Check whether a user already consumed an invite."""
        return any(
            use.invite_id == invite_id and use.used_by_user_id == user_id
            for use in self._uses
        )
