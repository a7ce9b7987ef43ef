"""
StreamHub API — Video routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, get_optional_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, Page, PublishState, VideoSchema
from streamhub.services.media.storage import MediaStorage, get_media_storage
from streamhub.services.query.listing import PageParams, SortParams, page_params, sort_params
from streamhub.services.videos.video_service import video_service

router = APIRouter(prefix="/videos", tags=["Videos"])


@router.get("", response_model=ApiResponse[Page[VideoSchema]])
async def list_videos(
    query: Optional[str] = Query(None, max_length=256),
    user_id: Optional[str] = None,
    params: PageParams = Depends(page_params),
    sort: SortParams = Depends(sort_params),
    db: AsyncSession = Depends(get_db),
):
    """Published videos, optionally filtered by owner and free-text query."""
    owner_id = parse_id(user_id, "userId") if user_id else None
    page = await video_service.list_videos(
        db, params, sort, VideoSchema.model_validate, query=query, owner_id=owner_id,
    )
    message = "Videos fetched successfully" if page.docs else "No videos found"
    return ApiResponse.ok(page, message)


@router.post("", response_model=ApiResponse[VideoSchema], status_code=201)
async def publish_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    video_file: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    actor: User = Depends(get_current_user),
    storage: MediaStorage = Depends(get_media_storage),
    db: AsyncSession = Depends(get_db),
):
    video = await video_service.publish_video(db, actor, storage, title, description, video_file, thumbnail)
    return ApiResponse.ok(VideoSchema.model_validate(video), "Video published successfully", 201)


@router.get("/{video_id}", response_model=ApiResponse[VideoSchema])
async def get_video(
    video_id: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    video = await video_service.get_video(parse_id(video_id, "video ID"), db, viewer)
    return ApiResponse.ok(VideoSchema.model_validate(video), "Video fetched successfully")


@router.patch("/{video_id}", response_model=ApiResponse[VideoSchema])
async def update_video(
    video_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    actor: User = Depends(get_current_user),
    storage: MediaStorage = Depends(get_media_storage),
    db: AsyncSession = Depends(get_db),
):
    video = await video_service.update_video(
        parse_id(video_id, "video ID"), db, actor, storage,
        title=title, description=description, thumbnail=thumbnail,
    )
    return ApiResponse.ok(VideoSchema.model_validate(video), "Video details updated successfully")


@router.delete("/{video_id}", response_model=ApiResponse[dict])
async def delete_video(
    video_id: str,
    actor: User = Depends(get_current_user),
    storage: MediaStorage = Depends(get_media_storage),
    db: AsyncSession = Depends(get_db),
):
    await video_service.delete_video(parse_id(video_id, "video ID"), db, actor, storage)
    return ApiResponse.ok({}, "Video deleted successfully")


@router.patch("/toggle/publish/{video_id}", response_model=ApiResponse[PublishState])
async def toggle_publish_status(
    video_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    state = await video_service.toggle_publish(parse_id(video_id, "video ID"), db, actor)
    return ApiResponse.ok(state, "Publish status toggled successfully")
