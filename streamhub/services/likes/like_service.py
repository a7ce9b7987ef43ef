"""
StreamHub Like Service.

A like is the presence of a (user, target) row; each toggle either removes
the existing row or creates a new one, never both.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.models.models import Comment, Like, Tweet, User, Video
from streamhub.schemas.schemas import LikeState, Page, VideoSchema
from streamhub.services.access.ownership import get_or_404
from streamhub.services.query.listing import PageParams, SortParams
from streamhub.services.videos.video_service import get_visible_video, video_listing

logger = logging.getLogger(__name__)

LIKE_TARGETS = {
    "video": (Video, Like.video_id),
    "comment": (Comment, Like.comment_id),
    "tweet": (Tweet, Like.tweet_id),
}


class LikeService:

    async def toggle_like(self, target: str, target_id: uuid.UUID, db: AsyncSession, actor: User) -> LikeState:
        model, column = LIKE_TARGETS[target]
        if model is Video:
            await get_visible_video(db, target_id, actor)
        else:
            await get_or_404(db, model, target_id, target)

        existing = await db.scalar(
            select(Like).where(column == target_id, Like.liked_by_id == actor.id)
        )
        if existing is not None:
            await db.delete(existing)
            await db.commit()
            logger.info(f"{actor.username} unliked {target} {target_id}")
            return LikeState(is_liked=False)

        db.add(Like(liked_by_id=actor.id, **{column.key: target_id}))
        await db.commit()
        logger.info(f"{actor.username} liked {target} {target_id}")
        return LikeState(is_liked=True)

    async def list_liked_videos(self, db: AsyncSession, actor: User, params: PageParams) -> Page:
        liked = select(Like.video_id).where(Like.liked_by_id == actor.id, Like.video_id.is_not(None))
        listing = video_listing(
            [Video.id.in_(liked), Video.is_published.is_(True)],
            SortParams(),
        )
        return await listing.paginate(db, params, VideoSchema.model_validate)


like_service = LikeService()
