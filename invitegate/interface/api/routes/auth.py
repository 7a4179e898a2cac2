"""Host authentication routes.

Signup and signin are where the invite lifecycle hooks run: the before-hook
ahead of account creation, the after-hook once the session exists.
"""

from uuid import UUID

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel

from invitegate.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
    SessionResponse,
    SignInRequest,
    SignInUseCase,
    SignUpRequest,
    SignUpUseCase,
)
from invitegate.application.usecase.invite import (
    HookResult,
    InviteLifecycleUseCase,
    LifecycleState,
)
from invitegate.config import Settings
from invitegate.domain.error import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    NotFoundError,
)
from invitegate.domain.value import UserId
from invitegate.interface.api.cookies import (
    clear_invite_code,
    clear_session_token,
    read_session_token,
    read_staged_code,
    set_session_token,
)
from invitegate.util.cookie import InviteCookieCodec
from invitegate.util.jwt import JWTError

AUTH_PREFIX = "/auth"

router = APIRouter(prefix=AUTH_PREFIX, tags=["authentication"], route_class=DishkaRoute)


class SessionAPIResponse(BaseModel):
    """Session created by signup or signin."""

    user_id: str
    email: str
    role: str
    invite: LifecycleState
    # Why a staged invite was not consumed; the session itself still stands
    invite_error: str | None = None


class SignOutResponse(BaseModel):
    """Sign-out response."""

    success: bool


class AuthStatusResponse(BaseModel):
    """Current session, or an unauthenticated marker."""

    authenticated: bool
    user: GetCurrentUserResponse | None = None


def _hook_path(request: Request) -> str:
    """Request path relative to the auth prefix, as the hooks match it."""
    return request.url.path.removeprefix(AUTH_PREFIX)


async def _finish_session(
    request: Request,
    response: Response,
    session: SessionResponse,
    lifecycle: InviteLifecycleUseCase,
    staged_code: str | None,
    settings: Settings,
) -> SessionAPIResponse:
    """Run the after-hook for a new session and write the cookies."""
    result: HookResult = await lifecycle.after_signup(
        _hook_path(request), UserId(UUID(session.user_id)), staged_code
    )

    set_session_token(response, settings, session.token)
    role = session.role
    if result.state == LifecycleState.ACCEPTED:
        role = settings.invitations.role_for_signup_with_invite
    if result.clear_cookie:
        clear_invite_code(response, settings)

    return SessionAPIResponse(
        user_id=session.user_id,
        email=session.email,
        role=role,
        invite=result.state,
        invite_error=result.reason,
    )


@router.post("/sign-up/email", response_model=SessionAPIResponse)
async def sign_up_email(
    body: SignUpRequest,
    request: Request,
    response: Response,
    signup_use_case: FromDishka[SignUpUseCase],
    lifecycle: FromDishka[InviteLifecycleUseCase],
    codec: FromDishka[InviteCookieCodec],
    settings: FromDishka[Settings],
) -> SessionAPIResponse:
    """Create an account from email and password.

    Raises:
        HTTPException: 400 if the email is already registered
    """
    staged_code = read_staged_code(request, codec, settings)

    # May reject with INVITE_REQUIRED / INVALID_OR_EXPIRED_INVITE / NO_USES_LEFT
    await lifecycle.before_signup(_hook_path(request), staged_code)

    try:
        session = await signup_use_case.execute(body)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return await _finish_session(
        request, response, session, lifecycle, staged_code, settings
    )


@router.post("/sign-in/email", response_model=SessionAPIResponse)
async def sign_in_email(
    body: SignInRequest,
    request: Request,
    response: Response,
    signin_use_case: FromDishka[SignInUseCase],
    lifecycle: FromDishka[InviteLifecycleUseCase],
    codec: FromDishka[InviteCookieCodec],
    settings: FromDishka[Settings],
) -> SessionAPIResponse:
    """Sign in with email and password.

    A guest holding a staged counted invite is upgraded here.

    Raises:
        HTTPException: 401 on bad credentials
    """
    try:
        session = await signin_use_case.execute(body)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    staged_code = read_staged_code(request, codec, settings)
    return await _finish_session(
        request, response, session, lifecycle, staged_code, settings
    )


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(response: Response, settings: FromDishka[Settings]) -> SignOutResponse:
    """Clear the session cookie."""
    clear_session_token(response, settings)
    return SignOutResponse(success=True)


@router.get("/session", response_model=AuthStatusResponse)
async def get_session(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> AuthStatusResponse:
    """Return the session user, or ``authenticated: false``."""
    token = read_session_token(request, settings)
    if not token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token)
        )
    except (JWTError, NotFoundError) as e:
        logfire.info("Session not resolved", error=str(e))
        return AuthStatusResponse(authenticated=False)

    return AuthStatusResponse(authenticated=True, user=user)
