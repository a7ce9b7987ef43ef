"""
StreamHub API — Like routes.

Toggles answer 201 when a like is created and 200 when one is removed.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, LikeState, Page, VideoSchema
from streamhub.services.likes.like_service import like_service
from streamhub.services.query.listing import PageParams, page_params

router = APIRouter(prefix="/likes", tags=["Likes"])


async def _toggle(target: str, raw_id: str, response: Response, db: AsyncSession, actor: User) -> ApiResponse:
    state = await like_service.toggle_like(target, parse_id(raw_id, f"{target} ID"), db, actor)
    if state.is_liked:
        response.status_code = 201
        return ApiResponse.ok(state, "Like added successfully", 201)
    return ApiResponse.ok(state, "Like removed successfully")


@router.post("/toggle/v/{video_id}", response_model=ApiResponse[LikeState])
async def toggle_video_like(
    video_id: str,
    response: Response,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _toggle("video", video_id, response, db, actor)


@router.post("/toggle/c/{comment_id}", response_model=ApiResponse[LikeState])
async def toggle_comment_like(
    comment_id: str,
    response: Response,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _toggle("comment", comment_id, response, db, actor)


@router.post("/toggle/t/{tweet_id}", response_model=ApiResponse[LikeState])
async def toggle_tweet_like(
    tweet_id: str,
    response: Response,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await _toggle("tweet", tweet_id, response, db, actor)


@router.get("/videos", response_model=ApiResponse[Page[VideoSchema]])
async def list_liked_videos(
    params: PageParams = Depends(page_params),
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    page = await like_service.list_liked_videos(db, actor, params)
    message = "Liked videos fetched successfully" if page.docs else "User has no liked videos"
    return ApiResponse.ok(page, message)
