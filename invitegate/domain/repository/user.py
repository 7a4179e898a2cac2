"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from invitegate.domain.model.user import User
from invitegate.domain.value import UserId


class UserRepository(ABC):
    """Repository for the host's User records.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email.

        Args:
            email: The user's email address

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update).

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def update_role(self, user_id: UserId, role: str) -> bool:
        """Overwrite the role field of a user.

        Args:
            user_id: The user's unique identifier
            role: New role identifier

        Returns:
            True if a user was updated, False if no such user exists
        """
        pass
