"""PostgreSQL repository implementations."""

from invitegate.persistence.repository.invite import PostgresInviteRepository
from invitegate.persistence.repository.invite_use import PostgresInviteUseRepository
from invitegate.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresInviteRepository",
    "PostgresInviteUseRepository",
]
