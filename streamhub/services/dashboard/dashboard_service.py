"""
StreamHub Dashboard Service — channel statistics aggregated across tables.
"""
from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.models.models import Like, Subscription, User, Video
from streamhub.schemas.schemas import ChannelStats, Page, VideoSchema
from streamhub.services.query.listing import PageParams, SortParams
from streamhub.services.videos.video_service import video_listing

logger = logging.getLogger(__name__)


class DashboardService:

    async def get_channel_stats(self, db: AsyncSession, actor: User) -> ChannelStats:
        total_videos = await db.scalar(
            select(func.count(Video.id)).where(Video.owner_id == actor.id)
        ) or 0
        total_subscribers = await db.scalar(
            select(func.count(Subscription.id)).where(Subscription.channel_id == actor.id)
        ) or 0
        total_views = await db.scalar(
            select(func.coalesce(func.sum(Video.views), 0)).where(Video.owner_id == actor.id)
        ) or 0
        total_likes = await db.scalar(
            select(func.count(Like.id))
            .join(Video, Like.video_id == Video.id)
            .where(Video.owner_id == actor.id)
        ) or 0

        return ChannelStats(
            total_videos=total_videos,
            total_subscribers=total_subscribers,
            total_views=int(total_views),
            total_likes=total_likes,
        )

    async def list_channel_videos(self, db: AsyncSession, actor: User, params: PageParams, sort: SortParams) -> Page:
        """Owner view of the channel: drafts included."""
        listing = video_listing([Video.owner_id == actor.id], sort)
        return await listing.paginate(db, params, VideoSchema.model_validate)


dashboard_service = DashboardService()
