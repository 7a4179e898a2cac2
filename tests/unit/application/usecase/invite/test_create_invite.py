"""Tests for CreateInviteUseCase."""

from datetime import timedelta
from uuid import uuid4

import pytest

from invitegate.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteUseCase,
)
from invitegate.domain.error import (
    InsufficientPermissionsError,
    NoSuchUserError,
    NotAuthenticatedError,
)
from invitegate.domain.repository import InviteRepository, UserRepository
from invitegate.domain.value import InviteCode
from tests.di import make_settings
from tests.factories import T0, fixed_clock, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture(
    settings=make_settings(duration_seconds=3600),
    generate_code=lambda: "invite-123",
    get_date=fixed_clock(),
)

staff_only_env = create_env_fixture(
    can_create_invite=lambda user: user.email.endswith("@staff.example.com"),
)


@pytest.mark.asyncio
async def test_user_creates_invite(unit_env):
    use_case = await unit_env.get(CreateInviteUseCase)
    users = await unit_env.get(UserRepository)
    invites = await unit_env.get(InviteRepository)
    creator = await make_user(users, role="user")

    response = await use_case.execute(CreateInviteRequest(user_id=str(creator.id)))

    assert response.code == "invite-123"
    assert response.expires_at == T0 + timedelta(hours=1)
    stored = await invites.find_by_code(InviteCode("invite-123"))
    assert stored.created_by_user_id == creator.id
    assert stored.created_at == T0


@pytest.mark.asyncio
async def test_guest_cannot_create_invite(unit_env):
    use_case = await unit_env.get(CreateInviteUseCase)
    users = await unit_env.get(UserRepository)
    invites = await unit_env.get(InviteRepository)
    guest = await make_user(users, role="guest")

    with pytest.raises(InsufficientPermissionsError) as exc_info:
        await use_case.execute(CreateInviteRequest(user_id=str(guest.id)))

    assert exc_info.value.code == "INSUFFICIENT_PERMISSIONS"
    assert await invites.find_by_code(InviteCode("invite-123")) is None


@pytest.mark.asyncio
async def test_not_logged_in(unit_env):
    use_case = await unit_env.get(CreateInviteUseCase)

    with pytest.raises(NotAuthenticatedError) as exc_info:
        await use_case.execute(CreateInviteRequest())

    assert exc_info.value.code == "USER_NOT_LOGGED_IN"


@pytest.mark.asyncio
async def test_session_user_missing(unit_env):
    use_case = await unit_env.get(CreateInviteUseCase)

    with pytest.raises(NoSuchUserError):
        await use_case.execute(CreateInviteRequest(user_id=str(uuid4())))


@pytest.mark.asyncio
async def test_malformed_session_user_id(unit_env):
    use_case = await unit_env.get(CreateInviteUseCase)

    with pytest.raises(NoSuchUserError):
        await use_case.execute(CreateInviteRequest(user_id="not-a-uuid"))


@pytest.mark.asyncio
async def test_custom_rule_replaces_role_check(staff_only_env):
    use_case = await staff_only_env.get(CreateInviteUseCase)
    users = await staff_only_env.get(UserRepository)
    staff_guest = await make_user(users, role="guest", email="a@staff.example.com")
    outsider = await make_user(users, role="user", email="b@example.com")

    response = await use_case.execute(CreateInviteRequest(user_id=str(staff_guest.id)))
    assert response.code

    with pytest.raises(InsufficientPermissionsError):
        await use_case.execute(CreateInviteRequest(user_id=str(outsider.id)))
