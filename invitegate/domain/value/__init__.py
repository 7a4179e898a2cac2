"""Domain value objects for invitegate."""

from invitegate.domain.value.identifiers import InviteId, InviteUseId, UserId
from invitegate.domain.value.types import (
    ConsumptionStrategy,
    Counted,
    InviteCode,
    SingleUse,
    StrategyKind,
)

__all__ = [
    # Identifiers
    "UserId",
    "InviteId",
    "InviteUseId",
    # Types
    "InviteCode",
    "StrategyKind",
    "SingleUse",
    "Counted",
    "ConsumptionStrategy",
]
