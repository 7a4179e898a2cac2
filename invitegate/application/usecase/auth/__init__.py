"""Host authentication use cases."""

from invitegate.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
    GetCurrentUserUseCase,
)
from invitegate.application.usecase.auth.signin import SignInRequest, SignInUseCase
from invitegate.application.usecase.auth.signup import (
    SessionResponse,
    SignUpRequest,
    SignUpUseCase,
)

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserResponse",
    "GetCurrentUserUseCase",
    "SessionResponse",
    "SignInRequest",
    "SignInUseCase",
    "SignUpRequest",
    "SignUpUseCase",
]
