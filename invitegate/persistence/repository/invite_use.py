"""PostgreSQL implementation of InviteUse repository."""

from sqlalchemy import and_, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from invitegate.domain.model import InviteUse
from invitegate.domain.repository import InviteUseRepository
from invitegate.domain.value import InviteId, UserId
from invitegate.persistence.mappers import invite_use_to_dict, row_to_invite_use
from invitegate.persistence.tables import invite_uses_table


class PostgresInviteUseRepository(InviteUseRepository):
    """PostgreSQL implementation of InviteUseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, invite_use: InviteUse) -> InviteUse:
        stmt = insert(invite_uses_table).values(**invite_use_to_dict(invite_use))
        await self.session.execute(stmt)
        await self.session.flush()
        return invite_use

    async def count_by_invite(self, invite_id: InviteId) -> int:
        stmt = (
            select(func.count())
            .select_from(invite_uses_table)
            .where(invite_uses_table.c.invite_id == invite_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_invite(self, invite_id: InviteId) -> list[InviteUse]:
        stmt = (
            select(invite_uses_table)
            .where(invite_uses_table.c.invite_id == invite_id)
            .order_by(invite_uses_table.c.used_at.asc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invite_use(dict(row)) for row in result.mappings().all()]

    async def exists_for_user(self, invite_id: InviteId, user_id: UserId) -> bool:
        stmt = select(invite_uses_table.c.id).where(
            and_(
                invite_uses_table.c.invite_id == invite_id,
                invite_uses_table.c.used_by_user_id == user_id,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None
