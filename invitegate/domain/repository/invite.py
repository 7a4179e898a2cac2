"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from invitegate.domain.model.invite import Invite
from invitegate.domain.value import InviteCode, InviteId, UserId


class InviteRepository(ABC):
    """Repository for Invite entity.

    Defines the contract for invite persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: InviteCode, lock: bool = False) -> Invite | None:
        """Find an invite by exact code match.

        Args:
            code: The invite code
            lock: Hold a row lock until the surrounding transaction ends, so
                concurrent consumers of the same invite are serialized

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, invite: Invite) -> Invite:
        """Persist a new invite.

        Args:
            invite: The invite to create

        Returns:
            The created invite

        Raises:
            DuplicateInviteCodeError: If the code was ever used before
        """
        pass

    @abstractmethod
    async def mark_used(
        self, invite_id: InviteId, user_id: UserId, used_at: datetime
    ) -> bool:
        """Record the single consumption of a single-use invite.

        Only transitions an invite whose used fields are still empty.

        Args:
            invite_id: The invite to mark
            user_id: The consuming user
            used_at: Consumption time

        Returns:
            True if this call marked the invite, False if it was already used
        """
        pass

    @abstractmethod
    async def find_by_creator(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        """Find invites created by a user, newest first.

        Args:
            user_id: The creator's ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invites
        """
        pass
