"""
StreamHub Comment Service.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import InternalError
from streamhub.models.models import Comment, Like, User
from streamhub.schemas.schemas import CommentSchema, Page
from streamhub.services.access.ownership import apply_owned, load_owned
from streamhub.services.query.listing import ListingQuery, PageParams, SortParams
from streamhub.services.videos.video_service import get_visible_video

logger = logging.getLogger(__name__)


class CommentService:

    async def list_comments(
        self, video_id: uuid.UUID, db: AsyncSession, params: PageParams, viewer: Optional[User] = None
    ) -> Page:
        """Newest-first comments with the author projection joined in."""
        await get_visible_video(db, video_id, viewer)
        listing = ListingQuery(
            model=Comment,
            filters=[Comment.video_id == video_id],
            sort=SortParams(),
            join=Comment.owner,
        )
        return await listing.paginate(db, params, CommentSchema.model_validate)

    async def add_comment(self, video_id: uuid.UUID, content: str, db: AsyncSession, actor: User) -> Comment:
        await get_visible_video(db, video_id, actor)
        comment = Comment(content=content, video_id=video_id, owner=actor)
        db.add(comment)
        await db.flush()
        if comment.id is None:
            raise InternalError("Failed to add comment")
        await db.commit()
        logger.info(f"Comment {comment.id} added to video {video_id}")
        return comment

    async def update_comment(self, comment_id: uuid.UUID, content: str, db: AsyncSession, actor: User) -> Comment:
        def set_content(comment: Comment):
            comment.content = content

        return await apply_owned(db, Comment, comment_id, actor, set_content, label="comment")

    async def delete_comment(self, comment_id: uuid.UUID, db: AsyncSession, actor: User):
        comment = await load_owned(db, Comment, comment_id, actor, label="comment", action="delete")
        await db.execute(
            delete(Like).where(Like.comment_id == comment.id).execution_options(synchronize_session=False)
        )
        await db.delete(comment)
        await db.commit()
        logger.info(f"Comment {comment_id} deleted")


comment_service = CommentService()
