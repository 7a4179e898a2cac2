"""Create invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from invitegate.application.usecase.base import BaseUseCase
from invitegate.domain.error import (
    InsufficientPermissionsError,
    NoSuchUserError,
    NotAuthenticatedError,
)
from invitegate.domain.service import EligibilityEvaluator, InviteService, UserService
from invitegate.domain.value import UserId


class CreateInviteRequest(BaseModel):
    """Create invite request."""

    user_id: str | None = None  # From the session; None when not logged in


class CreateInviteResponse(BaseModel):
    """Create invite response."""

    code: str
    expires_at: datetime


class CreateInviteUseCase(BaseUseCase):
    """Use case for minting an invite on behalf of the session user."""

    def __init__(
        self,
        invite_service: InviteService,
        user_service: UserService,
        eligibility: EligibilityEvaluator,
    ) -> None:
        """Initialize create invite use case.

        Args:
            invite_service: Invite domain service
            user_service: User domain service
            eligibility: Invite creation eligibility evaluator
        """
        self.invite_service = invite_service
        self.user_service = user_service
        self.eligibility = eligibility

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Execute create invite flow.

        Steps:
        1. Resolve the principal from the session
        2. Evaluate eligibility
        3. Create the invite with a fresh code and expiry

        Raises:
            NotAuthenticatedError: No session
            NoSuchUserError: Session user does not exist
            InsufficientPermissionsError: User may not create invites
            DuplicateInviteCodeError: Generated code collided
        """
        with logfire.span("create_invite.execute"):
            if not request.user_id:
                raise NotAuthenticatedError()

            try:
                user_id = UserId(UUID(request.user_id))
            except ValueError:
                raise NoSuchUserError()

            user = await self.user_service.find_by_id(user_id)
            if user is None:
                logfire.warn("Invite creator not found", user_id=request.user_id)
                raise NoSuchUserError()

            if not self.eligibility.can_create_invite(user):
                logfire.info(
                    "Invite creation denied", user_id=str(user.id), role=user.role
                )
                raise InsufficientPermissionsError()

            invite = await self.invite_service.create_invite(user.id)
            return CreateInviteResponse(
                code=invite.code.root, expires_at=invite.expires_at
            )
