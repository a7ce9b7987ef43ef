"""
StreamHub request identity.

Token verification happens upstream; the gateway forwards the verified user id
in ``settings.auth_header``. These dependencies resolve it to a ``User`` row.
"""
from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.config import get_settings
from streamhub.core.database import get_db
from streamhub.core.errors import BadRequestError, UnauthorizedError
from streamhub.models.models import User

settings = get_settings()


def parse_id(value: str, label: str = "ID") -> uuid.UUID:
    """Validate an identifier before it ever reaches the store."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise BadRequestError(f"Invalid {label}")


async def _resolve_user(request: Request, db: AsyncSession) -> Optional[User]:
    raw = request.headers.get(settings.auth_header)
    if not raw:
        return None
    try:
        user_id = uuid.UUID(raw)
    except ValueError:
        raise UnauthorizedError("Invalid access token")
    user = await db.get(User, user_id)
    if not user:
        raise UnauthorizedError("Invalid access token")
    return user


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    user = await _resolve_user(request, db)
    if user is None:
        raise UnauthorizedError("Unauthorized request")
    return user


async def get_optional_user(request: Request, db: AsyncSession = Depends(get_db)) -> Optional[User]:
    return await _resolve_user(request, db)
