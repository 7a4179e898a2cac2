"""Invite lifecycle hooks around the host's signup/signin endpoints.

Per attempt the lifecycle moves NO_CODE -> VALIDATING -> ACCEPTED, REJECTED
or IGNORED.

The before-hook (single_use strategy only) runs ahead of account creation and
may still veto the signup. The after-hook runs once the account and session
exist: it re-validates the staged code, and on success upgrades the role,
records the consumption and asks for the cookie to be cleared. An invalid
code at that point never undoes the signup; the user simply keeps the
baseline role.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

import logfire
from pydantic import ValidationError as PydanticValidationError

from invitegate.config import InvitationSettings
from invitegate.domain.error import InviteRequiredError, NoUsesLeftError
from invitegate.domain.model import Invite
from invitegate.domain.service import (
    InvitePolicy,
    InviteService,
    InviteValidator,
    OutcomeKind,
    RoleTransitionService,
    UserService,
    ValidationOutcome,
)
from invitegate.domain.value import InviteCode, StrategyKind, UserId

SIGNUP_PATH_PREFIX = "/sign-up"

# Paths after which a counted invite may be consumed. Social logins only have
# a new session once the provider callback completes.
COUNTED_AFTER_HOOK_PATHS = (
    "/sign-up/email",
    "/sign-in/email",
    "/sign-in/email-otp",
    "/callback/{id}",
)


class LifecycleState(str, Enum):
    """State of one signup/signin attempt with respect to its invite."""

    NO_CODE = "no_code"
    VALIDATING = "validating"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    IGNORED = "ignored"


@dataclass(frozen=True)
class HookResult:
    """What a hook decided and what the response must do about the cookie."""

    state: LifecycleState
    reason: str | None = None
    clear_cookie: bool = False
    invite: Invite | None = None


class HookMatcher:
    """Matches request paths by prefix or by exact template.

    Templates may contain ``{name}`` placeholders matching one path segment.
    """

    def __init__(
        self, prefixes: Iterable[str] = (), paths: Iterable[str] = ()
    ) -> None:
        self.prefixes = tuple(prefixes)
        self.patterns = tuple(self._compile(path) for path in paths)

    @staticmethod
    def _compile(template: str) -> re.Pattern[str]:
        parts = re.split(r"\{[^/{}]+\}", template)
        return re.compile("[^/]+".join(re.escape(part) for part in parts) + r"\Z")

    def matches(self, path: str) -> bool:
        if any(path.startswith(prefix) for prefix in self.prefixes):
            return True
        return any(pattern.match(path) for pattern in self.patterns)


class InviteLifecycleUseCase:
    """Wires validation, role transition and consumption into signup/signin."""

    def __init__(
        self,
        invite_validator: InviteValidator,
        invite_service: InviteService,
        role_transition: RoleTransitionService,
        user_service: UserService,
        policy: InvitePolicy,
        settings: InvitationSettings,
    ) -> None:
        """Initialize invite lifecycle use case.

        Args:
            invite_validator: Invite validator
            invite_service: Invite domain service
            role_transition: Role transition service
            user_service: User domain service
            policy: Code and expiry policy (provides the clock)
            settings: Invitation settings
        """
        self.invite_validator = invite_validator
        self.invite_service = invite_service
        self.role_transition = role_transition
        self.user_service = user_service
        self.policy = policy
        self.settings = settings

        if policy.strategy == StrategyKind.SINGLE_USE:
            self.before_matcher = HookMatcher(prefixes=[SIGNUP_PATH_PREFIX])
            self.after_matcher = HookMatcher(prefixes=[SIGNUP_PATH_PREFIX])
        else:
            self.before_matcher = HookMatcher()
            self.after_matcher = HookMatcher(paths=COUNTED_AFTER_HOOK_PATHS)

    async def before_signup(self, path: str, staged_code: str | None) -> HookResult:
        """Run ahead of account creation.

        Args:
            path: Host endpoint path, relative to the auth prefix
            staged_code: Code read from the verified invite cookie, if any

        Returns:
            IGNORED when the hook does not apply, VALIDATING when the staged
            code passed the pre-check and consumption is left to the after-hook

        Raises:
            InviteRequiredError: No code staged while invites are mandatory
            InviteValidationError: Staged code is not redeemable
        """
        if not self.before_matcher.matches(path):
            return HookResult(state=LifecycleState.IGNORED)

        with logfire.span("invite_lifecycle.before_signup", path=path):
            if staged_code is None:
                if self.settings.signup_requires_invite:
                    logfire.info("Signup rejected - invite required", path=path)
                    raise InviteRequiredError()
                return HookResult(state=LifecycleState.IGNORED)

            outcome = await self._validate(staged_code, self.policy.now())
            if not outcome.is_valid:
                error = outcome.to_error()
                logfire.info(
                    "Signup rejected - invite not redeemable",
                    path=path,
                    outcome=outcome.kind.value,
                )
                raise error

            return HookResult(state=LifecycleState.VALIDATING, invite=outcome.invite)

    async def after_signup(
        self, path: str, user_id: UserId, staged_code: str | None
    ) -> HookResult:
        """Consume the staged invite for a freshly created session.

        Safe to replay: a user who no longer holds the baseline role, or an
        invite that is already spent, leads to IGNORED without side effects.

        Args:
            path: Host endpoint path, relative to the auth prefix
            user_id: User owning the new session
            staged_code: Code read from the verified invite cookie, if any

        Returns:
            Hook result; ``clear_cookie`` is set only when the invite was consumed
        """
        if not self.after_matcher.matches(path):
            return HookResult(state=LifecycleState.IGNORED)

        with logfire.span(
            "invite_lifecycle.after_signup", path=path, user_id=str(user_id)
        ):
            user = await self.user_service.find_by_id(user_id)
            if user is None:
                logfire.warn("Session user not found", user_id=str(user_id))
                return HookResult(state=LifecycleState.IGNORED)

            if user.role != self.settings.role_for_signup_without_invite:
                return HookResult(state=LifecycleState.IGNORED)

            if staged_code is None:
                return HookResult(state=LifecycleState.NO_CODE)

            now = self.policy.now()
            outcome = await self._validate(staged_code, now, lock=True)
            if not outcome.is_valid:
                error = outcome.to_error()
                logfire.info(
                    "Invite not consumed - signup kept at baseline role",
                    user_id=str(user_id),
                    outcome=outcome.kind.value,
                )
                return HookResult(
                    state=LifecycleState.IGNORED,
                    reason=error.code if error else None,
                    invite=outcome.invite,
                )

            invite = outcome.invite
            try:
                await self._consume(invite, user_id, now)
            except NoUsesLeftError as e:
                # Lost the race for a single-use invite
                return HookResult(
                    state=LifecycleState.IGNORED, reason=e.code, invite=invite
                )

            logfire.info(
                "Invite consumed",
                invite_id=str(invite.id),
                user_id=str(user_id),
                role=self.settings.role_for_signup_with_invite,
            )
            return HookResult(
                state=LifecycleState.ACCEPTED, clear_cookie=True, invite=invite
            )

    async def _validate(
        self, staged_code: str, now: datetime, lock: bool = False
    ) -> ValidationOutcome:
        try:
            code = InviteCode(staged_code)
        except PydanticValidationError:
            return ValidationOutcome(kind=OutcomeKind.NOT_FOUND)
        return await self.invite_validator.validate(code, now, lock=lock)

    async def _consume(self, invite: Invite, user_id: UserId, now: datetime) -> None:
        """Upgrade the role and record the use.

        The two writes are independent; whichever fails second leaves the
        invite and the user out of step, which is logged as a consistency gap.
        """
        new_role = self.settings.role_for_signup_with_invite

        if invite.is_counted:
            await self.role_transition.upgrade(user_id, new_role)
            try:
                await self.invite_service.record_use(invite, user_id, now)
            except Exception as e:
                self._log_consistency_gap(invite, user_id, "record_use", e)
                raise
            return

        # Single-use: claim the invite first so a lost race never upgrades
        await self.invite_service.record_use(invite, user_id, now)
        try:
            await self.role_transition.upgrade(user_id, new_role)
        except Exception as e:
            self._log_consistency_gap(invite, user_id, "upgrade", e)
            raise

    @staticmethod
    def _log_consistency_gap(
        invite: Invite, user_id: UserId, failed_step: str, error: Exception
    ) -> None:
        logfire.error(
            "invite.consistency_gap",
            invite_id=str(invite.id),
            user_id=str(user_id),
            failed_step=failed_step,
            error=str(error),
            error_type=type(error).__name__,
        )
