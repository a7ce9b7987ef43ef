"""
StreamHub API — Channel dashboard routes (caller's own channel).
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, ChannelStats, Page, VideoSchema
from streamhub.services.dashboard.dashboard_service import dashboard_service
from streamhub.services.query.listing import PageParams, SortParams, page_params, sort_params

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=ApiResponse[ChannelStats])
async def get_channel_stats(
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stats = await dashboard_service.get_channel_stats(db, actor)
    return ApiResponse.ok(stats, "Channel stats fetched successfully")


@router.get("/videos", response_model=ApiResponse[Page[VideoSchema]])
async def get_channel_videos(
    params: PageParams = Depends(page_params),
    sort: SortParams = Depends(sort_params),
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    page = await dashboard_service.list_channel_videos(db, actor, params, sort)
    message = "Channel videos fetched successfully" if page.docs else "No videos found for this channel"
    return ApiResponse.ok(page, message)
