"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from invitegate.domain.model.user import User
from invitegate.domain.repository.user import UserRepository
from invitegate.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def save(self, user: User) -> User:
        """Save or update a user."""
        self._users[user.id] = user
        return user

    async def update_role(self, user_id: UserId, role: str) -> bool:
        """Overwrite a user's role."""
        user = self._users.get(user_id)
        if user is None:
            return False
        self._users[user_id] = user.model_copy(
            update={"role": role, "updated_at": datetime.now(timezone.utc)}
        )
        return True
