"""Repository interfaces for invitegate domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from invitegate.domain.repository.invite import InviteRepository
from invitegate.domain.repository.invite_use import InviteUseRepository
from invitegate.domain.repository.user import UserRepository

__all__ = [
    "InviteRepository",
    "InviteUseRepository",
    "UserRepository",
]
