"""InviteUse repository interface."""

from abc import ABC, abstractmethod

from invitegate.domain.model.invite_use import InviteUse
from invitegate.domain.value import InviteId, UserId


class InviteUseRepository(ABC):
    """Repository for the append-only invite usage ledger."""

    @abstractmethod
    async def create(self, invite_use: InviteUse) -> InviteUse:
        """Append a usage record.

        Args:
            invite_use: The usage record

        Returns:
            The created record
        """
        pass

    @abstractmethod
    async def count_by_invite(self, invite_id: InviteId) -> int:
        """Count usage records for an invite.

        This count is the authoritative "times used" value.

        Args:
            invite_id: The invite's ID

        Returns:
            Number of usage records
        """
        pass

    @abstractmethod
    async def find_by_invite(self, invite_id: InviteId) -> list[InviteUse]:
        """List usage records for an invite, oldest first.

        Args:
            invite_id: The invite's ID

        Returns:
            List of usage records
        """
        pass

    @abstractmethod
    async def exists_for_user(self, invite_id: InviteId, user_id: UserId) -> bool:
        """Check whether a user already consumed an invite.

        Args:
            invite_id: The invite's ID
            user_id: The user's ID

        Returns:
            True if a usage record exists for this pair
        """
        pass
