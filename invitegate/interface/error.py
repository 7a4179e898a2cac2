"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from invitegate.domain.error import DuplicateInviteCodeError, InviteError

DUPLICATE_INVITE_CODE = "DUPLICATE_INVITE_CODE"


def error_body(error: InviteError) -> dict[str, str]:
    """Public JSON body for an invite error."""
    return {"code": error.code, "message": error.message}


async def invite_error_handler(request: Request, exc: InviteError) -> JSONResponse:
    """Render invite and authorization errors as 400 {"code", "message"}."""
    logfire.info("Request rejected", path=request.url.path, code=exc.code)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_body(exc))


async def duplicate_code_handler(
    request: Request, exc: DuplicateInviteCodeError
) -> JSONResponse:
    """A generated code collided; the client may simply retry."""
    logfire.warn("Invite code collision", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "code": DUPLICATE_INVITE_CODE,
            "message": "Generated invite code already exists, try again",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register interface error handlers on the app."""
    app.add_exception_handler(InviteError, invite_error_handler)
    app.add_exception_handler(DuplicateInviteCodeError, duplicate_code_handler)
