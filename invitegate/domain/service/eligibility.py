"""Invite creation eligibility."""

from typing import Callable

import logfire

from invitegate.domain.model import User

from .base import Service

CanCreateInvite = Callable[[User], bool]


class EligibilityEvaluator(Service):
    """Decides whether a user may mint invites.

    By default every user except those still holding the baseline
    (signup-without-invite) role may create invites. A caller-supplied
    predicate replaces that rule entirely; the two are never combined.
    """

    def __init__(
        self,
        role_for_signup_without_invite: str,
        can_create_invite: CanCreateInvite | None = None,
    ) -> None:
        """Initialize eligibility evaluator.

        Args:
            role_for_signup_without_invite: Baseline role that cannot invite
            can_create_invite: Optional predicate overriding the role check
        """
        self.role_for_signup_without_invite = role_for_signup_without_invite
        self.predicate = can_create_invite

    def can_create_invite(self, user: User) -> bool:
        """Return whether ``user`` may create an invite."""
        if self.predicate is not None:
            allowed = bool(self.predicate(user))
            rule = "custom"
        else:
            allowed = user.role != self.role_for_signup_without_invite
            rule = "default"

        logfire.debug(
            "Invite eligibility evaluated",
            user_id=str(user.id),
            role=user.role,
            rule=rule,
            allowed=allowed,
        )
        return allowed
