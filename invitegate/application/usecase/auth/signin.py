"""Email signin use case."""

import logfire
from pydantic import BaseModel

from invitegate.application.usecase.auth.signup import SessionResponse
from invitegate.application.usecase.base import BaseUseCase
from invitegate.domain.error import InvalidCredentialsError
from invitegate.domain.service import JWTService, UserService
from invitegate.util.password import verify_password


class SignInRequest(BaseModel):
    """Email signin request."""

    email: str
    password: str


class SignInUseCase(BaseUseCase):
    """Use case for email/password signin."""

    def __init__(self, user_service: UserService, jwt_service: JWTService) -> None:
        self.user_service = user_service
        self.jwt_service = jwt_service

    async def execute(self, request: SignInRequest) -> SessionResponse:
        """Execute signin flow.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        with logfire.span("signin.execute"):
            user = await self.user_service.get_user_by_email(request.email.lower())
            if (
                user is None
                or user.password_hash is None
                or not verify_password(request.password, user.password_hash)
            ):
                logfire.info("Signin failed")
                raise InvalidCredentialsError("Invalid email or password")

            token = self.jwt_service.create_token(str(user.id), user.email)
            logfire.info("User signed in", user_id=str(user.id))
            return SessionResponse(
                token=token, user_id=str(user.id), email=user.email, role=user.role
            )
