"""Tests for the invite lifecycle with counted invites."""

from datetime import timedelta
from uuid import uuid4

import pytest

from invitegate.application.usecase.invite import (
    HookMatcher,
    InviteLifecycleUseCase,
    LifecycleState,
)
from invitegate.application.usecase.invite import lifecycle as lifecycle_module
from invitegate.domain.model import InviteUse
from invitegate.domain.repository import (
    InviteRepository,
    InviteUseRepository,
    UserRepository,
)
from invitegate.domain.service import (
    InvitePolicy,
    InviteService,
    InviteValidator,
    RoleTransitionService,
    UserService,
)
from invitegate.domain.value import Counted, UserId
from invitegate.persistence.repository.inmemory import (
    InMemoryInviteRepository,
    InMemoryInviteUseRepository,
    InMemoryUserRepository,
)
from tests.di import make_settings
from tests.factories import T0, fixed_clock, make_invite, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture(
    settings=make_settings(strategy="counted", max_uses=2),
    get_date=fixed_clock(T0 + timedelta(minutes=1)),
)


async def _seed_invite(env, code="MULTI1", max_uses=2, duration=timedelta(hours=1)):
    repo = await env.get(InviteRepository)
    return await repo.create(
        make_invite(code=code, consumption=Counted(max_uses=max_uses), duration=duration)
    )


class TestHookMatcher:
    def test_counted_paths(self):
        matcher = HookMatcher(paths=lifecycle_module.COUNTED_AFTER_HOOK_PATHS)

        assert matcher.matches("/sign-up/email")
        assert matcher.matches("/sign-in/email")
        assert matcher.matches("/sign-in/email-otp")
        assert matcher.matches("/callback/github")
        assert not matcher.matches("/callback/github/extra")
        assert not matcher.matches("/sign-up/email/extra")
        assert not matcher.matches("/sign-out")

    def test_prefix(self):
        matcher = HookMatcher(prefixes=["/sign-up"])

        assert matcher.matches("/sign-up/email")
        assert matcher.matches("/sign-up/social")
        assert not matcher.matches("/sign-in/email")


class TestAfterSignup:
    @pytest.mark.asyncio
    async def test_valid_code_upgrades_and_records_use(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        uses = await unit_env.get(InviteUseRepository)
        invite = await _seed_invite(unit_env)
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-up/email", user.id, "MULTI1")

        assert result.state == LifecycleState.ACCEPTED
        assert result.clear_cookie is True
        assert (await users.find_by_id(user.id)).role == "user"
        recorded = await uses.find_by_invite(invite.id)
        assert len(recorded) == 1
        assert recorded[0].used_by_user_id == user.id
        assert recorded[0].used_at == T0 + timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_no_code_keeps_baseline_role(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-up/email", user.id, None)

        assert result.state == LifecycleState.NO_CODE
        assert result.clear_cookie is False
        assert (await users.find_by_id(user.id)).role == "guest"

    @pytest.mark.asyncio
    async def test_unmatched_path_is_ignored(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        await _seed_invite(unit_env)
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-up/social", user.id, "MULTI1")

        assert result.state == LifecycleState.IGNORED
        assert (await users.find_by_id(user.id)).role == "guest"

    @pytest.mark.asyncio
    async def test_callback_path_consumes(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        await _seed_invite(unit_env)
        user = await make_user(users)

        result = await lifecycle.after_signup("/callback/github", user.id, "MULTI1")

        assert result.state == LifecycleState.ACCEPTED

    @pytest.mark.asyncio
    async def test_expired_code_is_silently_ignored(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        uses = await unit_env.get(InviteUseRepository)
        invite = await _seed_invite(unit_env, duration=timedelta(seconds=30))
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-up/email", user.id, "MULTI1")

        assert result.state == LifecycleState.IGNORED
        assert result.reason == "INVALID_OR_EXPIRED_INVITE"
        assert result.clear_cookie is False
        assert (await users.find_by_id(user.id)).role == "guest"
        assert await uses.count_by_invite(invite.id) == 0

    @pytest.mark.asyncio
    async def test_unknown_code_is_silently_ignored(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-up/email", user.id, "NOPE00")

        assert result.state == LifecycleState.IGNORED
        assert result.reason == "INVALID_OR_EXPIRED_INVITE"

    @pytest.mark.asyncio
    async def test_exhausted_code_second_signup_keeps_baseline(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        uses = await unit_env.get(InviteUseRepository)
        invite = await _seed_invite(unit_env, code="ONCE01", max_uses=1)
        first = await make_user(users)
        second = await make_user(users)

        accepted = await lifecycle.after_signup("/sign-up/email", first.id, "ONCE01")
        rejected = await lifecycle.after_signup("/sign-up/email", second.id, "ONCE01")

        assert accepted.state == LifecycleState.ACCEPTED
        assert rejected.state == LifecycleState.IGNORED
        assert rejected.reason == "NO_USES_LEFT_FOR_INVITE_CODE"
        assert (await users.find_by_id(second.id)).role == "guest"
        assert await uses.count_by_invite(invite.id) == 1

    @pytest.mark.asyncio
    async def test_replay_does_not_double_consume(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        uses = await unit_env.get(InviteUseRepository)
        invite = await _seed_invite(unit_env)
        user = await make_user(users)

        await lifecycle.after_signup("/sign-up/email", user.id, "MULTI1")
        replay = await lifecycle.after_signup("/sign-up/email", user.id, "MULTI1")

        assert replay.state == LifecycleState.IGNORED
        assert replay.clear_cookie is False
        assert await uses.count_by_invite(invite.id) == 1
        assert (await users.find_by_id(user.id)).role == "user"

    @pytest.mark.asyncio
    async def test_signin_upgrades_existing_guest(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        users = await unit_env.get(UserRepository)
        await _seed_invite(unit_env)
        user = await make_user(users)

        result = await lifecycle.after_signup("/sign-in/email", user.id, "MULTI1")

        assert result.state == LifecycleState.ACCEPTED
        assert (await users.find_by_id(user.id)).role == "user"


class TestBeforeSignup:
    @pytest.mark.asyncio
    async def test_counted_has_no_before_hook(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)

        result = await lifecycle.before_signup("/sign-up/email", None)

        assert result.state == LifecycleState.IGNORED


class _FailingInviteUseRepository(InMemoryInviteUseRepository):
    async def create(self, invite_use: InviteUse) -> InviteUse:
        raise RuntimeError("ledger unavailable")


class TestConsistencyGap:
    @pytest.mark.asyncio
    async def test_ledger_failure_after_upgrade_is_logged_and_raised(
        self, monkeypatch
    ):
        settings = make_settings(strategy="counted")
        users = InMemoryUserRepository()
        invites = InMemoryInviteRepository()
        uses = _FailingInviteUseRepository()
        policy = InvitePolicy.from_settings(
            settings.invitations, get_date=fixed_clock()
        )
        lifecycle = InviteLifecycleUseCase(
            invite_validator=InviteValidator(invites, uses),
            invite_service=InviteService(invites, uses, policy),
            role_transition=RoleTransitionService(users),
            user_service=UserService(users),
            policy=policy,
            settings=settings.invitations,
        )
        await invites.create(make_invite(consumption=Counted(max_uses=1)))
        user = await make_user(users)

        logged = []
        monkeypatch.setattr(
            lifecycle_module.logfire,
            "error",
            lambda message, **attrs: logged.append((message, attrs)),
        )

        with pytest.raises(RuntimeError):
            await lifecycle.after_signup("/sign-up/email", user.id, "ABC123")

        assert logged[0][0] == "invite.consistency_gap"
        assert logged[0][1]["failed_step"] == "record_use"
        assert logged[0][1]["user_id"] == str(user.id)
        # Role was already upgraded; nothing compensates
        assert (await users.find_by_id(user.id)).role == "user"

    @pytest.mark.asyncio
    async def test_missing_session_user_is_ignored(self, unit_env):
        lifecycle = await unit_env.get(InviteLifecycleUseCase)
        await _seed_invite(unit_env)

        result = await lifecycle.after_signup(
            "/sign-up/email", UserId(uuid4()), "MULTI1"
        )

        assert result.state == LifecycleState.IGNORED
