"""
StreamHub Playlist Service — ordered, duplicate-free video collections.
"""
from __future__ import annotations

import logging
import uuid
from functools import partial
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import InternalError
from streamhub.models.models import Playlist, PlaylistVideo, User
from streamhub.schemas.schemas import OwnerSchema, Page, PlaylistSchema, VideoBrief
from streamhub.services.access.ownership import apply_owned, delete_owned, get_or_404, load_owned
from streamhub.services.query.listing import ListingQuery, PageParams, SortParams
from streamhub.services.videos.video_service import get_visible_video, is_visible

logger = logging.getLogger(__name__)

PLAYLIST_SORT_KEYS = ("created_at", "updated_at", "name")


def to_schema(playlist: Playlist, viewer: Optional[User] = None) -> PlaylistSchema:
    """Drafts stay hidden from everyone but their owner."""
    videos = [
        VideoBrief.model_validate(entry.video)
        for entry in playlist.entries
        if is_visible(entry.video, viewer)
    ]
    return PlaylistSchema(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner=OwnerSchema.model_validate(playlist.owner) if playlist.owner else None,
        videos=videos,
        total_videos=len(videos),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


class PlaylistService:

    async def create_playlist(self, name: str, description: Optional[str], db: AsyncSession, actor: User) -> Playlist:
        playlist = Playlist(name=name, description=(description or "").strip(), owner=actor, entries=[])
        db.add(playlist)
        await db.flush()
        if playlist.id is None:
            raise InternalError("Failed to create playlist")
        await db.commit()
        logger.info(f"Playlist {playlist.id} created by {actor.username}")
        return playlist

    async def list_user_playlists(
        self,
        user_id: uuid.UUID,
        db: AsyncSession,
        params: PageParams,
        sort: SortParams,
        viewer: Optional[User] = None,
    ) -> Page:
        await get_or_404(db, User, user_id, "user")
        listing = ListingQuery(
            model=Playlist,
            filters=[Playlist.owner_id == user_id],
            sort=sort,
            sortable=PLAYLIST_SORT_KEYS,
            join=Playlist.owner,
        )
        return await listing.paginate(db, params, partial(to_schema, viewer=viewer))

    async def get_playlist(self, playlist_id: uuid.UUID, db: AsyncSession) -> Playlist:
        return await get_or_404(db, Playlist, playlist_id, "playlist")

    async def update_playlist(
        self, playlist_id: uuid.UUID, name: str, description: Optional[str], db: AsyncSession, actor: User
    ) -> Playlist:
        def rename(playlist: Playlist):
            playlist.name = name
            if description is not None and description.strip():
                playlist.description = description.strip()

        return await apply_owned(db, Playlist, playlist_id, actor, rename, label="playlist")

    async def delete_playlist(self, playlist_id: uuid.UUID, db: AsyncSession, actor: User):
        await delete_owned(db, Playlist, playlist_id, actor, label="playlist")
        logger.info(f"Playlist {playlist_id} deleted")

    async def add_video(
        self, playlist_id: uuid.UUID, video_id: uuid.UUID, db: AsyncSession, actor: User
    ) -> Tuple[Playlist, bool]:
        """Append ``video_id``; returns (playlist, added). Existing entries are left as-is."""
        playlist = await get_or_404(db, Playlist, playlist_id, "playlist")
        video = await get_visible_video(db, video_id, actor)
        await load_owned(db, Playlist, playlist_id, actor, label="playlist", action="add videos to")

        if any(entry.video_id == video.id for entry in playlist.entries):
            return playlist, False

        position = max((entry.position for entry in playlist.entries), default=-1) + 1
        playlist.entries.append(PlaylistVideo(video_id=video.id, video=video, position=position))
        await db.commit()
        logger.info(f"Video {video.id} added to playlist {playlist.id} at {position}")
        return playlist, True

    async def remove_video(
        self, playlist_id: uuid.UUID, video_id: uuid.UUID, db: AsyncSession, actor: User
    ) -> Playlist:
        playlist = await load_owned(db, Playlist, playlist_id, actor, label="playlist", action="remove videos from")
        for entry in list(playlist.entries):
            if entry.video_id == video_id:
                playlist.entries.remove(entry)
        await db.commit()
        return playlist


playlist_service = PlaylistService()
