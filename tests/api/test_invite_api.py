"""End-to-end tests through the FastAPI app with in-memory persistence."""

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi.testclient import TestClient

from invitegate.domain.repository import (
    InviteRepository,
    InviteUseRepository,
    UserRepository,
)
from invitegate.domain.value import InviteCode, UserId
from invitegate.interface.api.app import create_app
from invitegate.util.cookie import InviteCookieCodec
from tests.di import ConfigOverrideProvider, build_test_container, make_settings
from tests.factories import T0, SequenceClock, make_invite, make_user

COUNTED = make_settings(strategy="counted", max_uses=1)
SINGLE_USE = make_settings(strategy="single_use")
INVITE_COOKIE = "invitegate.invite-code"


@contextmanager
def running_app(settings, **overrides):
    """Yield a client and its DI container for a fresh app."""
    container = build_test_container(
        config=ConfigOverrideProvider(settings=settings, **overrides)
    )
    with TestClient(create_app(container)) as client:
        yield client, container


def _sign_up(client, email, password="correct-horse"):
    return client.post(
        "/auth/sign-up/email",
        json={"email": email, "password": password, "name": "Test"},
    )


def _repo(client, container, interface):
    return client.portal.call(container.get, interface)


def _promote(client, container, user_id: str, role: str = "user") -> None:
    users = _repo(client, container, UserRepository)
    client.portal.call(users.update_role, UserId(UUID(user_id)), role)


async def _seed_invite(invites, code, creator_id):
    """Single-use invite valid for the next hour of wall-clock time."""
    await invites.create(
        make_invite(
            code=code,
            created_at=datetime.now(timezone.utc),
            created_by_user_id=creator_id,
        )
    )


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _set_cookie_headers(response) -> list[str]:
    return response.headers.get_list("set-cookie")


def test_health():
    with running_app(COUNTED) as (client, _):
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["strategy"] == "counted"


def test_invite_scenario_with_pinned_code_and_clock():
    clock = SequenceClock(T0, T0 + timedelta(minutes=1))
    with running_app(
        COUNTED, generate_code=lambda: "invite-123", get_date=clock
    ) as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])

        created = client.post("/auth/invite/create", json={"_": True})
        assert created.status_code == 201
        assert created.json()["code"] == "invite-123"
        assert _parse(created.json()["expires_at"]) == T0 + timedelta(hours=1)

        client.post("/auth/sign-out")
        codec = InviteCookieCodec(COUNTED.auth.cookie_secret)
        client.cookies.set(INVITE_COOKIE, codec.dumps("invite-123"))

        response = _sign_up(client, "invitee@example.com")

        assert response.status_code == 200
        body = response.json()
        assert body["role"] == "user"
        assert body["invite"] == "accepted"
        cleared = [h for h in _set_cookie_headers(response) if INVITE_COOKIE in h]
        assert cleared and "1970" in cleared[0]

        invites = _repo(client, container, InviteRepository)
        uses = _repo(client, container, InviteUseRepository)
        users = _repo(client, container, UserRepository)
        invite = client.portal.call(invites.find_by_code, InviteCode("invite-123"))
        rows = client.portal.call(uses.find_by_invite, invite.id)
        invitee = client.portal.call(users.find_by_id, UserId(UUID(body["user_id"])))

    assert invite.created_by_user_id == UUID(creator["user_id"])
    assert len(rows) == 1
    assert rows[0].used_by_user_id == invitee.id
    assert rows[0].used_at == T0 + timedelta(minutes=1)
    assert invitee.role == "user"


def test_guest_cannot_create_invite():
    with running_app(COUNTED) as (client, _):
        _sign_up(client, "guest@example.com")

        response = client.post("/auth/invite/create", json={"_": True})

    assert response.status_code == 400
    assert response.json() == {
        "code": "INSUFFICIENT_PERMISSIONS",
        "message": "User does not have sufficient permissions to create invite",
    }


def test_create_requires_session():
    with running_app(COUNTED) as (client, _):
        response = client.post("/auth/invite/create")

    assert response.status_code == 400
    assert response.json()["code"] == "USER_NOT_LOGGED_IN"


def test_code_collision_is_conflict():
    with running_app(COUNTED, generate_code=lambda: "SAME01") as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])

        first = client.post("/auth/invite/create", json={"_": True})
        second = client.post("/auth/invite/create", json={"_": True})

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["code"] == "DUPLICATE_INVITE_CODE"


def test_activate_then_signup_upgrades_role():
    with running_app(COUNTED, generate_code=lambda: "ACT001") as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])
        client.post("/auth/invite/create", json={"_": True})
        client.post("/auth/sign-out")

        activated = client.post("/auth/invite/activate", json={"code": "ACT001"})
        assert activated.status_code == 200
        assert activated.json()["status"] is True
        assert client.cookies.get(INVITE_COOKIE)

        signup = _sign_up(client, "invitee@example.com")
        session = client.get("/auth/session")

    assert signup.json()["role"] == "user"
    assert session.json()["authenticated"] is True
    assert session.json()["user"]["role"] == "user"


def test_activate_exhausted_code_fails():
    with running_app(COUNTED, generate_code=lambda: "ONCE01") as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])
        client.post("/auth/invite/create", json={"_": True})
        client.post("/auth/sign-out")

        client.post("/auth/invite/activate", json={"code": "ONCE01"})
        _sign_up(client, "first@example.com")
        client.post("/auth/sign-out")

        response = client.post("/auth/invite/activate", json={"code": "ONCE01"})

    assert response.status_code == 400
    assert response.json()["code"] == "NO_USES_LEFT_FOR_INVITE_CODE"


def test_signup_with_invalid_counted_code_keeps_guest():
    with running_app(COUNTED) as (client, _):
        codec = InviteCookieCodec(COUNTED.auth.cookie_secret)
        client.cookies.set(INVITE_COOKIE, codec.dumps("NOPE00"))

        response = _sign_up(client, "hopeful@example.com")

    assert response.status_code == 200
    assert response.json()["role"] == "guest"
    assert response.json()["invite"] == "ignored"


def test_unsigned_cookie_is_ignored():
    with running_app(COUNTED) as (client, _):
        client.cookies.set(INVITE_COOKIE, "ABC123")

        response = _sign_up(client, "forger@example.com")

    assert response.json()["invite"] == "no_code"
    assert response.json()["role"] == "guest"


def test_redeem_invalid_code_redirects_to_signin():
    with running_app(SINGLE_USE) as (client, _):
        response = client.post(
            "/auth/invite/redeem", json={"code": "NOPE00"}, follow_redirects=False
        )

    assert response.status_code == 302
    assert response.headers["location"] == "/sign-in?error=INVALID_OR_EXPIRED_INVITE"


def test_single_use_signup_requires_invite():
    with running_app(SINGLE_USE) as (client, container):
        response = _sign_up(client, "nobody@example.com")
        users = _repo(client, container, UserRepository)
        stored = client.portal.call(users.find_by_email, "nobody@example.com")

    assert response.status_code == 400
    assert response.json()["code"] == "INVITE_REQUIRED"
    assert stored is None


def test_single_use_code_works_once():
    with running_app(SINGLE_USE) as (client, container):
        users = _repo(client, container, UserRepository)
        invites = _repo(client, container, InviteRepository)

        # Bootstrap the first inviter directly; signup itself needs an invite
        creator = client.portal.call(make_user, users, "user", "creator@example.com")
        client.portal.call(_seed_invite, invites, "SOLO01", creator.id)

        redeemed = client.post("/auth/invite/redeem", json={"code": "SOLO01"})
        assert redeemed.status_code == 200

        first = _sign_up(client, "first@example.com")
        client.post("/auth/sign-out")

        second_redeem = client.post(
            "/auth/invite/redeem", json={"code": "SOLO01"}, follow_redirects=False
        )
        invite = client.portal.call(invites.find_by_code, InviteCode("SOLO01"))

    assert first.status_code == 200
    assert first.json()["role"] == "user"
    assert first.json()["invite"] == "accepted"
    assert second_redeem.status_code == 302
    assert second_redeem.headers["location"].endswith("error=NO_USES_LEFT_FOR_INVITE_CODE")
    assert invite.used_by_user_id == UUID(first.json()["user_id"])


def test_list_invites():
    with running_app(COUNTED, generate_code=lambda: "LIST01") as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])
        client.post("/auth/invite/create", json={"_": True})

        response = client.get("/auth/invite/list")

    assert response.status_code == 200
    assert response.json()["total"] == 1
    assert response.json()["invites"][0]["code"] == "LIST01"
    assert response.json()["invites"][0]["remaining_uses"] == 1


def test_sign_in_and_session():
    with running_app(COUNTED) as (client, _):
        _sign_up(client, "ada@example.com")
        client.post("/auth/sign-out")

        anonymous = client.get("/auth/session")
        bad = client.post(
            "/auth/sign-in/email",
            json={"email": "ada@example.com", "password": "wrong-horse"},
        )
        good = client.post(
            "/auth/sign-in/email",
            json={"email": "ada@example.com", "password": "correct-horse"},
        )
        session = client.get("/auth/session")

    assert anonymous.json() == {"authenticated": False, "user": None}
    assert bad.status_code == 401
    assert good.status_code == 200
    assert session.json()["user"]["email"] == "ada@example.com"


def test_second_counted_signup_reports_why_invite_was_not_used():
    with running_app(COUNTED, generate_code=lambda: "TWICE1") as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])
        client.post("/auth/invite/create", json={"_": True})
        client.post("/auth/sign-out")

        codec = InviteCookieCodec(COUNTED.auth.cookie_secret)
        client.cookies.set(INVITE_COOKIE, codec.dumps("TWICE1"))
        first = _sign_up(client, "first@example.com")
        client.post("/auth/sign-out")

        client.cookies.set(INVITE_COOKIE, codec.dumps("TWICE1"))
        second = _sign_up(client, "second@example.com")

    assert first.json()["invite"] == "accepted"
    assert first.json()["invite_error"] is None
    assert second.status_code == 200
    assert second.json()["role"] == "guest"
    assert second.json()["invite"] == "ignored"
    assert second.json()["invite_error"] == "NO_USES_LEFT_FOR_INVITE_CODE"


OFFSET_NOON = datetime(2030, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))


def test_activate_with_non_utc_clock_sets_gmt_cookie():
    with running_app(
        COUNTED, generate_code=lambda: "ZONE01", get_date=lambda: OFFSET_NOON
    ) as (client, container):
        creator = _sign_up(client, "creator@example.com").json()
        _promote(client, container, creator["user_id"])
        client.post("/auth/invite/create", json={"_": True})
        client.post("/auth/sign-out")

        response = client.post("/auth/invite/activate", json={"code": "ZONE01"})

    assert response.status_code == 200
    staged = [h for h in _set_cookie_headers(response) if INVITE_COOKIE in h]
    assert "01 Jan 2030 11:00:00 GMT" in staged[0]


def test_redeem_with_non_utc_clock_sets_gmt_cookie():
    with running_app(SINGLE_USE, get_date=lambda: OFFSET_NOON) as (client, container):
        invites = _repo(client, container, InviteRepository)
        client.portal.call(
            invites.create, make_invite(code="ZONE02", created_at=OFFSET_NOON)
        )

        response = client.post("/auth/invite/redeem", json={"code": "ZONE02"})

    assert response.status_code == 200
    staged = [h for h in _set_cookie_headers(response) if INVITE_COOKIE in h]
    assert "01 Jan 2030 11:00:00 GMT" in staged[0]


def test_staging_endpoints_follow_configured_strategy():
    with running_app(COUNTED) as (client, _):
        redeem = client.post(
            "/auth/invite/redeem", json={"code": "ABC123"}, follow_redirects=False
        )
    with running_app(SINGLE_USE) as (client, _):
        activate = client.post("/auth/invite/activate", json={"code": "ABC123"})

    assert redeem.status_code == 404
    assert activate.status_code == 404
