"""
StreamHub Video Service — publishing, browsing, editing and removal of videos.

Deleting a video cascades to its comments, every like on the video or on
those comments, and its playlist entries, all in one transaction. Media
objects are removed from storage after the commit.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import UploadFile
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import BadRequestError, InternalError, NotFoundError
from streamhub.models.models import Comment, Like, PlaylistVideo, User, Video
from streamhub.schemas.schemas import Page, PublishState
from streamhub.services.access.ownership import apply_owned, get_or_404, is_owner, load_owned
from streamhub.services.media.storage import MediaStorage, MediaStorageError
from streamhub.services.query.listing import ListingQuery, PageParams, SortParams

logger = logging.getLogger(__name__)

VIDEO_SORT_KEYS = ("created_at", "updated_at", "title", "views", "duration")
VIDEO_SEARCH_FIELDS = ("title", "description")
TITLE_MAX_LENGTH = 512


def video_listing(
    filters: list,
    sort: SortParams,
    search: Optional[str] = None,
) -> ListingQuery:
    return ListingQuery(
        model=Video,
        filters=filters,
        search=search,
        search_fields=VIDEO_SEARCH_FIELDS,
        sort=sort,
        sortable=VIDEO_SORT_KEYS,
        join=Video.owner,
    )


class VideoService:

    # ── Reads ────────────────────────────────────────────────────────────

    async def list_videos(
        self,
        db: AsyncSession,
        params: PageParams,
        sort: SortParams,
        transform,
        query: Optional[str] = None,
        owner_id: Optional[uuid.UUID] = None,
    ) -> Page:
        """Public feed: published videos only, optionally scoped to one owner."""
        filters = [Video.is_published.is_(True)]
        if owner_id is not None:
            filters.append(Video.owner_id == owner_id)
        return await video_listing(filters, sort, query).paginate(db, params, transform)

    async def get_video(self, video_id: uuid.UUID, db: AsyncSession, viewer: Optional[User] = None) -> Video:
        """Fetch a video; reads of a published video count as a view."""
        video = await get_visible_video(db, video_id, viewer)
        if not video.is_published:
            # Owner reading their own draft; never counted.
            return video

        # Single-column atomic increment; no full-row validation on the read path.
        await db.execute(
            update(Video)
            .where(Video.id == video.id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        await db.refresh(video, attribute_names=["views"])
        return video

    # ── Writes ───────────────────────────────────────────────────────────

    async def publish_video(
        self,
        db: AsyncSession,
        actor: User,
        storage: MediaStorage,
        title: Optional[str],
        description: Optional[str],
        video_file: Optional[UploadFile],
        thumbnail: Optional[UploadFile],
    ) -> Video:
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            raise BadRequestError("Title and description are required")
        if len(title) > TITLE_MAX_LENGTH:
            raise BadRequestError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        if video_file is None or not video_file.filename:
            raise BadRequestError("Video file is required")
        if thumbnail is None or not thumbnail.filename:
            raise BadRequestError("Thumbnail file is required")

        try:
            uploaded_video = await storage.upload(video_file, "videos", probe=True)
        except MediaStorageError:
            raise InternalError("Failed to upload video file")
        try:
            uploaded_thumb = await storage.upload(thumbnail, "thumbnails")
        except MediaStorageError:
            await self._discard_media(storage, uploaded_video.url)
            raise InternalError("Failed to upload thumbnail")

        video = Video(
            title=title,
            description=description,
            video_file=uploaded_video.url,
            thumbnail=uploaded_thumb.url,
            duration=uploaded_video.duration or 0.0,
            views=0,
            is_published=True,
            owner=actor,
        )
        db.add(video)
        try:
            await db.flush()
            if video.id is None:
                raise InternalError("Something went wrong while publishing the video")
            await db.commit()
        except (SQLAlchemyError, InternalError):
            await db.rollback()
            for url in (uploaded_video.url, uploaded_thumb.url):
                await self._discard_media(storage, url)
            raise

        logger.info(f"Video published: {video.id} by {actor.username}")
        return video

    async def update_video(
        self,
        video_id: uuid.UUID,
        db: AsyncSession,
        actor: User,
        storage: MediaStorage,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail: Optional[UploadFile] = None,
    ) -> Video:
        video = await load_owned(db, Video, video_id, actor, label="video", action="update")

        if title is not None:
            if not title.strip():
                raise BadRequestError("Title cannot be empty")
            if len(title.strip()) > TITLE_MAX_LENGTH:
                raise BadRequestError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
            video.title = title.strip()
        if description is not None and description.strip():
            video.description = description.strip()

        old_thumbnail = new_thumbnail = None
        if thumbnail is not None and thumbnail.filename:
            try:
                uploaded = await storage.upload(thumbnail, "thumbnails")
            except MediaStorageError:
                raise InternalError("Failed to upload new thumbnail")
            new_thumbnail = uploaded.url
            old_thumbnail, video.thumbnail = video.thumbnail, new_thumbnail

        try:
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            if new_thumbnail:
                await self._discard_media(storage, new_thumbnail)
            raise
        if old_thumbnail:
            await self._discard_media(storage, old_thumbnail)
        return video

    async def delete_video(self, video_id: uuid.UUID, db: AsyncSession, actor: User, storage: MediaStorage):
        video = await load_owned(db, Video, video_id, actor, label="video", action="delete")
        media = [video.video_file, video.thumbnail]

        comment_ids = select(Comment.id).where(Comment.video_id == video.id)
        removed_likes = await db.execute(
            delete(Like)
            .where(or_(Like.video_id == video.id, Like.comment_id.in_(comment_ids)))
            .execution_options(synchronize_session=False)
        )
        removed_comments = await db.execute(
            delete(Comment).where(Comment.video_id == video.id).execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(PlaylistVideo).where(PlaylistVideo.video_id == video.id).execution_options(synchronize_session=False)
        )
        await db.delete(video)
        await db.commit()

        logger.info(
            f"Video deleted: {video_id} "
            f"(comments={removed_comments.rowcount}, likes={removed_likes.rowcount})"
        )
        for url in media:
            await self._discard_media(storage, url)

    async def toggle_publish(self, video_id: uuid.UUID, db: AsyncSession, actor: User) -> PublishState:
        def flip(video: Video):
            video.is_published = not video.is_published

        video = await apply_owned(
            db, Video, video_id, actor, flip, label="video", action="change the publish status of",
        )
        logger.info(f"Video {video.id} is_published={video.is_published}")
        return PublishState(is_published=video.is_published)

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    async def _discard_media(storage: MediaStorage, url: str):
        # Database state is already final here; an orphaned object is only logged.
        try:
            await storage.delete(url)
        except MediaStorageError as e:
            logger.warning(f"Could not delete media {url}: {e}")


def is_visible(video: Video, viewer: Optional[User]) -> bool:
    return video.is_published or (viewer is not None and is_owner(video, viewer))


async def get_visible_video(db: AsyncSession, video_id: uuid.UUID, viewer: Optional[User] = None) -> Video:
    """Drafts are NotFound for everyone but their owner."""
    video = await get_or_404(db, Video, video_id, "video")
    if not is_visible(video, viewer):
        raise NotFoundError("Video not found")
    return video


video_service = VideoService()
