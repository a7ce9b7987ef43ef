"""
StreamHub API — Comment routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, get_optional_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, CommentSchema, ContentBody, Page
from streamhub.services.comments.comment_service import comment_service
from streamhub.services.query.listing import PageParams, page_params

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("/{video_id}", response_model=ApiResponse[Page[CommentSchema]])
async def list_video_comments(
    video_id: str,
    params: PageParams = Depends(page_params),
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    page = await comment_service.list_comments(parse_id(video_id, "video ID"), db, params, viewer)
    message = "Comments fetched successfully" if page.docs else "No comments found for this video"
    return ApiResponse.ok(page, message)


@router.post("/{video_id}", response_model=ApiResponse[CommentSchema], status_code=201)
async def add_comment(
    video_id: str,
    body: ContentBody,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_service.add_comment(parse_id(video_id, "video ID"), body.content, db, actor)
    return ApiResponse.ok(CommentSchema.model_validate(comment), "Comment added successfully", 201)


@router.patch("/c/{comment_id}", response_model=ApiResponse[CommentSchema])
async def update_comment(
    comment_id: str,
    body: ContentBody,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    comment = await comment_service.update_comment(parse_id(comment_id, "comment ID"), body.content, db, actor)
    return ApiResponse.ok(CommentSchema.model_validate(comment), "Comment updated successfully")


@router.delete("/c/{comment_id}", response_model=ApiResponse[dict])
async def delete_comment(
    comment_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await comment_service.delete_comment(parse_id(comment_id, "comment ID"), db, actor)
    return ApiResponse.ok({}, "Comment deleted successfully")
