"""Email signup use case.

Creates the account with the baseline role. Invite consumption is not part
of this flow; the interface layer runs the lifecycle hooks around it.
"""

from uuid import uuid4

import logfire
from pydantic import BaseModel, Field

from invitegate.application.usecase.base import BaseUseCase
from invitegate.config import InvitationSettings
from invitegate.domain.error import EmailAlreadyRegisteredError
from invitegate.domain.model import User
from invitegate.domain.service import JWTService, UserService
from invitegate.domain.value import UserId
from invitegate.util.password import hash_password


class SignUpRequest(BaseModel):
    """Email signup request."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=1, max_length=255)


class SessionResponse(BaseModel):
    """Session issued on signup or signin."""

    token: str
    user_id: str
    email: str
    role: str


class SignUpUseCase(BaseUseCase):
    """Use case for creating an account from email and password."""

    def __init__(
        self,
        user_service: UserService,
        jwt_service: JWTService,
        settings: InvitationSettings,
    ) -> None:
        """Initialize signup use case.

        Args:
            user_service: User domain service
            jwt_service: Session token service
            settings: Invitation settings (baseline role)
        """
        self.user_service = user_service
        self.jwt_service = jwt_service
        self.settings = settings

    async def execute(self, request: SignUpRequest) -> SessionResponse:
        """Execute signup flow.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account
        """
        email = request.email.lower()
        with logfire.span("signup.execute"):
            if await self.user_service.get_user_by_email(email) is not None:
                raise EmailAlreadyRegisteredError("Email already registered")

            user = User(
                id=UserId(uuid4()),
                email=email,
                name=request.name,
                role=self.settings.role_for_signup_without_invite,
                password_hash=hash_password(request.password),
            )
            user = await self.user_service.save(user)
            logfire.info("User signed up", user_id=str(user.id), role=user.role)

            token = self.jwt_service.create_token(str(user.id), user.email)
            return SessionResponse(
                token=token, user_id=str(user.id), email=user.email, role=user.role
            )
