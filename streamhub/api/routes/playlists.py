"""
StreamHub API — Playlist routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, get_optional_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, Page, PlaylistCreate, PlaylistSchema, PlaylistUpdate
from streamhub.services.playlists.playlist_service import playlist_service, to_schema
from streamhub.services.query.listing import PageParams, SortParams, page_params, sort_params

router = APIRouter(prefix="/playlists", tags=["Playlists"])


@router.post("", response_model=ApiResponse[PlaylistSchema], status_code=201)
async def create_playlist(
    body: PlaylistCreate,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.create_playlist(body.name, body.description, db, actor)
    return ApiResponse.ok(to_schema(playlist, actor), "Playlist created successfully", 201)


@router.get("/user/{user_id}", response_model=ApiResponse[Page[PlaylistSchema]])
async def list_user_playlists(
    user_id: str,
    params: PageParams = Depends(page_params),
    sort: SortParams = Depends(sort_params),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    page = await playlist_service.list_user_playlists(parse_id(user_id, "user ID"), db, params, sort, viewer)
    return ApiResponse.ok(page, "User playlists fetched successfully")


@router.get("/{playlist_id}", response_model=ApiResponse[PlaylistSchema])
async def get_playlist(
    playlist_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.get_playlist(parse_id(playlist_id, "playlist ID"), db)
    return ApiResponse.ok(to_schema(playlist, viewer), "Playlist fetched successfully")


@router.patch("/{playlist_id}", response_model=ApiResponse[PlaylistSchema])
async def update_playlist(
    playlist_id: str,
    body: PlaylistUpdate,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    playlist = await playlist_service.update_playlist(
        parse_id(playlist_id, "playlist ID"), body.name, body.description, db, actor,
    )
    return ApiResponse.ok(to_schema(playlist, actor), "Playlist updated successfully")


@router.delete("/{playlist_id}", response_model=ApiResponse[dict])
async def delete_playlist(
    playlist_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await playlist_service.delete_playlist(parse_id(playlist_id, "playlist ID"), db, actor)
    return ApiResponse.ok({}, "Playlist deleted successfully")


@router.patch("/add/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistSchema])
async def add_video_to_playlist(
    video_id: str,
    playlist_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    pid, vid = parse_id(playlist_id, "playlist ID"), parse_id(video_id, "video ID")
    playlist, added = await playlist_service.add_video(pid, vid, db, actor)
    message = "Video added to playlist successfully" if added else "Video already exists in the playlist"
    return ApiResponse.ok(to_schema(playlist, actor), message)


@router.patch("/remove/{video_id}/{playlist_id}", response_model=ApiResponse[PlaylistSchema])
async def remove_video_from_playlist(
    video_id: str,
    playlist_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    pid, vid = parse_id(playlist_id, "playlist ID"), parse_id(video_id, "video ID")
    playlist = await playlist_service.remove_video(pid, vid, db, actor)
    return ApiResponse.ok(to_schema(playlist, actor), "Video removed from playlist successfully")
