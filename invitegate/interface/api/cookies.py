"""Cookie protocol for the session token and the staged invite code.

The invite cookie is named ``<namespace>.invite-code``, holds the code signed
with itsdangerous, is http-only with path ``/`` and expires together with the
invite. Clearing writes an empty value with an epoch expiry.
"""

from datetime import datetime, timezone

from fastapi import Request, Response

from invitegate.config import Settings
from invitegate.util.cookie import InviteCookieCodec

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def read_staged_code(
    request: Request, codec: InviteCookieCodec, settings: Settings
) -> str | None:
    """Return the staged invite code, or None when absent or tampered with."""
    return codec.loads(request.cookies.get(settings.invitations.cookie_name))


def stage_invite_code(
    response: Response,
    codec: InviteCookieCodec,
    settings: Settings,
    code: str,
    expires_at: datetime,
) -> None:
    """Write the signed invite cookie, expiring with the invite.

    Cookie dates are rendered in GMT, so the expiry is converted to UTC
    whatever zone the injected clock produced it in.
    """
    response.set_cookie(
        key=settings.invitations.cookie_name,
        value=codec.dumps(code),
        expires=expires_at.astimezone(timezone.utc),
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_invite_code(response: Response, settings: Settings) -> None:
    """Overwrite the invite cookie with an empty, already expired value."""
    response.set_cookie(
        key=settings.invitations.cookie_name,
        value="",
        expires=EPOCH,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def read_session_token(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.invitations.session_cookie_name)


def set_session_token(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.invitations.session_cookie_name,
        value=token,
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_token(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.invitations.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
