"""Role transition on successful invite consumption."""

import logfire

from invitegate.domain.error import NotFoundError
from invitegate.domain.repository import UserRepository
from invitegate.domain.value import UserId

from .base import Service


class RoleTransitionService(Service):
    """Overwrites the role field of a user record."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize role transition service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def upgrade(self, user_id: UserId, new_role: str) -> None:
        """Set ``user_id``'s role to ``new_role``.

        There is no rollback: if a usage record was already written the
        caller owns the resulting inconsistency.

        Raises:
            NotFoundError: If the user no longer exists
        """
        with logfire.span(
            "role_transition.upgrade", user_id=str(user_id), new_role=new_role
        ):
            updated = await self.user_repository.update_role(user_id, new_role)
            if not updated:
                logfire.warn("Role upgrade target missing", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User role upgraded", user_id=str(user_id), role=new_role)
