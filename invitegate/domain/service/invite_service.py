"""Invite domain service."""

from datetime import datetime
from uuid import uuid4

import logfire

from invitegate.domain.error import NoUsesLeftError
from invitegate.domain.model import Invite, InviteUse
from invitegate.domain.repository import InviteRepository, InviteUseRepository
from invitegate.domain.value import InviteCode, InviteId, InviteUseId, UserId

from .base import Service
from .policy import InvitePolicy


class InviteService(Service):
    """Domain service for invite creation and consumption records."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        invite_use_repository: InviteUseRepository,
        policy: InvitePolicy,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            invite_use_repository: Invite usage ledger repository
            policy: Code generation and expiry policy
        """
        self.invite_repository = invite_repository
        self.invite_use_repository = invite_use_repository
        self.policy = policy

    async def create_invite(self, creator_id: UserId) -> Invite:
        """Mint and persist a new invite.

        Eligibility is the caller's concern; this only builds the record.

        Args:
            creator_id: User creating the invite

        Returns:
            Created invite

        Raises:
            DuplicateInviteCodeError: If the generated code already exists
        """
        with logfire.span("invite_service.create_invite", creator_id=str(creator_id)):
            now = self.policy.now()
            invite = Invite(
                id=InviteId(uuid4()),
                code=InviteCode(self.policy.generate_code()),
                created_by_user_id=creator_id,
                created_at=now,
                expires_at=self.policy.expiry_for(now),
                consumption=self.policy.new_consumption(),
            )

            saved = await self.invite_repository.create(invite)
            logfire.info(
                "Invite created",
                invite_id=str(saved.id),
                creator_id=str(creator_id),
                strategy=saved.consumption.kind.value,
                max_uses=saved.max_uses,
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def record_use(
        self, invite: Invite, user_id: UserId, used_at: datetime
    ) -> InviteUse | None:
        """Record one consumption of ``invite`` by ``user_id``.

        Counted invites get a new ledger row. Single-use invites have their
        used fields set, guarded so only one caller can ever win.

        Returns:
            The ledger row for counted invites, None for single-use invites

        Raises:
            NoUsesLeftError: If a single-use invite was consumed concurrently
        """
        with logfire.span(
            "invite_service.record_use",
            invite_id=str(invite.id),
            user_id=str(user_id),
        ):
            if invite.is_counted:
                invite_use = InviteUse(
                    id=InviteUseId(uuid4()),
                    invite_id=invite.id,
                    used_by_user_id=user_id,
                    used_at=used_at,
                )
                saved = await self.invite_use_repository.create(invite_use)
                logfire.info(
                    "Invite use recorded",
                    invite_id=str(invite.id),
                    invite_use_id=str(saved.id),
                )
                return saved

            marked = await self.invite_repository.mark_used(invite.id, user_id, used_at)
            if not marked:
                logfire.warn(
                    "Single-use invite already consumed", invite_id=str(invite.id)
                )
                raise NoUsesLeftError()
            logfire.info("Invite marked used", invite_id=str(invite.id))
            return None

    async def list_created_by(
        self, creator_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[tuple[Invite, int]]:
        """List invites created by a user together with their use counts.

        Args:
            creator_id: User ID
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            (invite, times_used) pairs, newest first
        """
        with logfire.span(
            "invite_service.list_created_by",
            creator_id=str(creator_id),
            limit=limit,
            offset=offset,
        ):
            invites = await self.invite_repository.find_by_creator(
                creator_id, limit, offset
            )
            result = []
            for invite in invites:
                if invite.is_counted:
                    times_used = await self.invite_use_repository.count_by_invite(
                        invite.id
                    )
                else:
                    times_used = 1 if invite.is_used else 0
                result.append((invite, times_used))
            logfire.info(
                "Invites listed", creator_id=str(creator_id), count=len(result)
            )
            return result
