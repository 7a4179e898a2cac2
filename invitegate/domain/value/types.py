"""Domain value objects for invitegate.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from invitegate.domain.value.common import RootValueObject, ValueObject


class InviteCode(RootValueObject[str]):
    """Invite code as typed by the invitee.

    Matching is exact; the casing policy belongs to the code generator.
    """

    @field_validator("root")
    @classmethod
    def validate_code_format(cls, v: str) -> str:
        """Validate code is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Invite code must be 1-255 characters")
        return v

    def redacted(self) -> str:
        """Prefix of the code that is safe to put in logs."""
        return self.root[:2] + "..."


class StrategyKind(str, Enum):
    """How an invite records its consumption."""

    SINGLE_USE = "single_use"
    COUNTED = "counted"


class SingleUse(ValueObject):
    """Consumption tracked inline on the invite (used_by_user_id + used_at)."""

    kind: Literal[StrategyKind.SINGLE_USE] = StrategyKind.SINGLE_USE


class Counted(ValueObject):
    """Consumption tracked in the invite_uses ledger, up to max_uses rows."""

    kind: Literal[StrategyKind.COUNTED] = StrategyKind.COUNTED
    max_uses: int = Field(ge=1)


ConsumptionStrategy = Annotated[
    Union[SingleUse, Counted], Field(discriminator="kind")
]
