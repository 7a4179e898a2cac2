"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from invitegate.domain.model import Invite, InviteUse, User
from invitegate.domain.value import (
    Counted,
    InviteCode,
    InviteId,
    InviteUseId,
    SingleUse,
    UserId,
)


def _uuid(value: Any) -> UUID | None:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        name=row["name"],
        role=row["role"],
        password_hash=row.get("password_hash"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return user.model_dump()


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    A NULL ``max_uses`` column marks a single-use invite.
    """
    max_uses = row.get("max_uses")
    consumption = SingleUse() if max_uses is None else Counted(max_uses=max_uses)

    created_by = _uuid(row.get("created_by_user_id"))
    used_by = _uuid(row.get("used_by_user_id"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        code=InviteCode(row["code"]),
        created_by_user_id=UserId(created_by) if created_by else None,
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        consumption=consumption,
        used_by_user_id=UserId(used_by) if used_by else None,
        used_at=row.get("used_at"),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict."""
    return {
        "id": invite.id,
        "code": invite.code.root,
        "created_by_user_id": invite.created_by_user_id,
        "created_at": invite.created_at,
        "expires_at": invite.expires_at,
        "max_uses": invite.max_uses if invite.is_counted else None,
        "used_by_user_id": invite.used_by_user_id,
        "used_at": invite.used_at,
    }


def row_to_invite_use(row: Dict[str, Any]) -> InviteUse:
    """Convert database row to InviteUse domain model."""
    invite_id = _uuid(row.get("invite_id"))
    used_by = _uuid(row.get("used_by_user_id"))
    return InviteUse(
        id=InviteUseId(_uuid(row["id"])),
        invite_id=InviteId(invite_id) if invite_id else None,
        used_by_user_id=UserId(used_by) if used_by else None,
        used_at=row["used_at"],
    )


def invite_use_to_dict(invite_use: InviteUse) -> Dict[str, Any]:
    """Convert InviteUse domain model to database dict."""
    return invite_use.model_dump()
