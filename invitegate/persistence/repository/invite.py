"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from invitegate.domain.error import DuplicateInviteCodeError
from invitegate.domain.model import Invite
from invitegate.domain.repository import InviteRepository
from invitegate.domain.value import InviteCode, InviteId, UserId
from invitegate.persistence.mappers import invite_to_dict, row_to_invite
from invitegate.persistence.tables import invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_code(
        self, code: InviteCode, lock: bool = False
    ) -> Optional[Invite]:
        """Find an invite by exact code match.

        Args:
            code: Invite code to look up
            lock: Take ``SELECT ... FOR UPDATE`` on the row

        Returns:
            Invite if found, None otherwise
        """
        stmt = select(invites_table).where(invites_table.c.code == code.root)
        if lock:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def create(self, invite: Invite) -> Invite:
        """Insert a new invite.

        The insert runs in a savepoint so a code collision leaves the
        surrounding transaction usable.

        Raises:
            DuplicateInviteCodeError: If the code already exists
        """
        stmt = insert(invites_table).values(**invite_to_dict(invite))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise DuplicateInviteCodeError(
                f"Invite code already exists: {invite.code.redacted()}"
            ) from e
        return invite

    async def mark_used(
        self, invite_id: InviteId, user_id: UserId, used_at: datetime
    ) -> bool:
        """Set the used fields if and only if they are still empty."""
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.used_at.is_(None),
                )
            )
            .values(used_by_user_id=user_id, used_at=used_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def find_by_creator(
        self, user_id: UserId, limit: int = 50, offset: int = 0
    ) -> list[Invite]:
        stmt = (
            select(invites_table)
            .where(invites_table.c.created_by_user_id == user_id)
            .order_by(invites_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_invite(dict(row)) for row in rows]
