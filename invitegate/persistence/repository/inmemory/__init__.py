"""In-memory repository implementations for testing."""

from .invite import InMemoryInviteRepository
from .invite_use import InMemoryInviteUseRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryInviteRepository",
    "InMemoryInviteUseRepository",
    "InMemoryUserRepository",
]
