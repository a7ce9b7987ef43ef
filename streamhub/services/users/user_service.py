"""
StreamHub User Service — accounts double as channels.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import BadRequestError, InternalError, NotFoundError
from streamhub.models.models import Subscription, User
from streamhub.schemas.schemas import ChannelProfile, UserCreate
from streamhub.services.access.ownership import get_or_404

logger = logging.getLogger(__name__)


class UserService:

    async def create_user(self, data: UserCreate, db: AsyncSession) -> User:
        existing = await db.scalar(select(User.id).where(User.username == data.username))
        if existing:
            raise BadRequestError("Username already in use")

        user = User(
            username=data.username,
            full_name=(data.full_name or "").strip() or None,
            avatar=data.avatar,
            cover_image=data.cover_image,
        )
        db.add(user)
        await db.flush()
        if user.id is None:
            raise InternalError("Something went wrong while registering the user")
        await db.commit()
        logger.info(f"Registered user {user.username} ({user.id})")
        return user

    async def get_user(self, user_id: uuid.UUID, db: AsyncSession) -> User:
        return await get_or_404(db, User, user_id, "user")

    async def get_channel_profile(
        self, username: str, db: AsyncSession, viewer: Optional[User] = None
    ) -> ChannelProfile:
        """Channel page header: the user plus subscription counters."""
        name = (username or "").strip().lower()
        if not name:
            raise BadRequestError("Username is missing")

        user = await db.scalar(select(User).where(User.username == name))
        if not user:
            raise NotFoundError("Channel does not exist")

        subscribers = await db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == user.id)
        ) or 0
        subscribed_to = await db.scalar(
            select(func.count(Subscription.id)).where(Subscription.subscriber_id == user.id)
        ) or 0
        is_subscribed = False
        if viewer is not None:
            is_subscribed = bool(await db.scalar(
                select(Subscription.id).where(
                    Subscription.channel_id == user.id,
                    Subscription.subscriber_id == viewer.id,
                )
            ))

        return ChannelProfile(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            avatar=user.avatar,
            cover_image=user.cover_image,
            created_at=user.created_at,
            subscribers_count=subscribers,
            channels_subscribed_to_count=subscribed_to,
            is_subscribed=is_subscribed,
        )


user_service = UserService()
