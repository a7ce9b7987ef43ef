"""
StreamHub Subscription Service.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import BadRequestError
from streamhub.models.models import Subscription, User
from streamhub.schemas.schemas import Page, SubscribedChannelSchema, SubscriberSchema, SubscriptionState
from streamhub.services.access.ownership import get_or_404
from streamhub.services.query.listing import ListingQuery, PageParams, SortParams

logger = logging.getLogger(__name__)


class SubscriptionService:

    async def toggle_subscription(self, channel_id: uuid.UUID, db: AsyncSession, actor: User) -> SubscriptionState:
        if channel_id == actor.id:
            raise BadRequestError("Cannot subscribe to your own channel")
        await get_or_404(db, User, channel_id, "channel")

        existing = await db.scalar(
            select(Subscription).where(
                Subscription.subscriber_id == actor.id,
                Subscription.channel_id == channel_id,
            )
        )
        if existing is not None:
            await db.delete(existing)
            await db.commit()
            logger.info(f"{actor.username} unsubscribed from {channel_id}")
            return SubscriptionState(is_subscribed=False, channel_id=channel_id)

        db.add(Subscription(subscriber_id=actor.id, channel_id=channel_id))
        await db.commit()
        logger.info(f"{actor.username} subscribed to {channel_id}")
        return SubscriptionState(is_subscribed=True, channel_id=channel_id)

    async def list_subscribers(self, channel_id: uuid.UUID, db: AsyncSession, params: PageParams) -> Page:
        """Who follows ``channel_id``."""
        await get_or_404(db, User, channel_id, "channel")
        listing = ListingQuery(
            model=Subscription,
            filters=[Subscription.channel_id == channel_id],
            sort=SortParams(),
            join=Subscription.subscriber,
        )
        return await listing.paginate(db, params, SubscriberSchema.model_validate)

    async def list_subscribed_channels(self, subscriber_id: uuid.UUID, db: AsyncSession, params: PageParams) -> Page:
        """Which channels ``subscriber_id`` follows."""
        await get_or_404(db, User, subscriber_id, "user")
        listing = ListingQuery(
            model=Subscription,
            filters=[Subscription.subscriber_id == subscriber_id],
            sort=SortParams(),
            join=Subscription.channel,
        )
        return await listing.paginate(db, params, SubscribedChannelSchema.model_validate)


subscription_service = SubscriptionService()
