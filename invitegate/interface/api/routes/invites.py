"""Invite routes.

All paths live under the host auth prefix so the invite cookie and the
session cookie are handled by the same surface.
"""

from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from invitegate.application.usecase.invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    GetInvitesRequest,
    GetInvitesResponse,
    GetInvitesUseCase,
    RedeemInviteRequest,
    RedeemInviteUseCase,
)
from invitegate.config import Settings
from invitegate.domain.error import InviteValidationError
from invitegate.domain.service import JWTService
from invitegate.domain.value import StrategyKind
from invitegate.interface.api.cookies import read_session_token, stage_invite_code
from invitegate.util.cookie import InviteCookieCodec

router = APIRouter(prefix="/auth/invite", tags=["invites"], route_class=DishkaRoute)


class CreateInviteAPIRequest(BaseModel):
    """Create invite body. Carries no data; ``{"_": true}`` by convention."""

    placeholder: bool = Field(default=True, alias="_")


class InviteCodeAPIRequest(BaseModel):
    """Body for staging a code."""

    code: str


class StagedInviteResponse(BaseModel):
    """Code staged in the invite cookie."""

    status: bool = True
    expires_at: str


def _require_strategy(settings: Settings, strategy: StrategyKind) -> None:
    """Staging endpoints only exist for the configured strategy."""
    if settings.invitations.strategy != strategy.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")


@router.post(
    "/create", response_model=CreateInviteResponse, status_code=status.HTTP_201_CREATED
)
async def create_invite(
    request: Request,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    body: CreateInviteAPIRequest | None = None,
) -> CreateInviteResponse:
    """Create an invite for the session user.

    Errors are rendered as 400 {"code", "message"} by the app error handler.
    """
    user_id = jwt_service.get_user_id_from_token(read_session_token(request, settings))
    return await create_invite_use_case.execute(CreateInviteRequest(user_id=user_id))


@router.post("/redeem", response_model=StagedInviteResponse)
async def redeem_invite(
    body: InviteCodeAPIRequest,
    response: Response,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    codec: FromDishka[InviteCookieCodec],
    settings: FromDishka[Settings],
):
    """Stage a single-use code in the invite cookie.

    On failure the client is sent back to the sign-in page with the error
    code in the query string.
    """
    _require_strategy(settings, StrategyKind.SINGLE_USE)

    try:
        result = await redeem_invite_use_case.execute(
            RedeemInviteRequest(code=body.code)
        )
    except InviteValidationError as e:
        query = urlencode({"error": e.code})
        return RedirectResponse(
            url=f"{settings.invitations.signin_path}?{query}",
            status_code=status.HTTP_302_FOUND,
        )

    stage_invite_code(response, codec, settings, result.code, result.expires_at)
    return StagedInviteResponse(expires_at=result.expires_at.isoformat())


@router.post("/activate", response_model=StagedInviteResponse)
async def activate_invite(
    body: InviteCodeAPIRequest,
    response: Response,
    redeem_invite_use_case: FromDishka[RedeemInviteUseCase],
    codec: FromDishka[InviteCookieCodec],
    settings: FromDishka[Settings],
) -> StagedInviteResponse:
    """Stage a counted code in the invite cookie.

    Unknown, expired and exhausted codes fail with 400.
    """
    _require_strategy(settings, StrategyKind.COUNTED)

    result = await redeem_invite_use_case.execute(
        RedeemInviteRequest(code=body.code)
    )
    stage_invite_code(response, codec, settings, result.code, result.expires_at)
    return StagedInviteResponse(expires_at=result.expires_at.isoformat())


@router.get("/list", response_model=GetInvitesResponse)
async def list_invites(
    request: Request,
    get_invites_use_case: FromDishka[GetInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> GetInvitesResponse:
    """List invites created by the session user, newest first."""
    user_id = jwt_service.get_user_id_from_token(read_session_token(request, settings))
    return await get_invites_use_case.execute(
        GetInvitesRequest(user_id=user_id, limit=limit, offset=offset)
    )
