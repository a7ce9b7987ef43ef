"""
StreamHub API — Tweet routes.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, ContentBody, Page, TweetSchema
from streamhub.services.query.listing import PageParams, page_params
from streamhub.services.tweets.tweet_service import tweet_service

router = APIRouter(prefix="/tweets", tags=["Tweets"])


@router.post("", response_model=ApiResponse[TweetSchema], status_code=201)
async def create_tweet(
    body: ContentBody,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    tweet = await tweet_service.create_tweet(body.content, db, actor)
    return ApiResponse.ok(TweetSchema.model_validate(tweet), "Tweet created successfully", 201)


@router.get("/user/{user_id}", response_model=ApiResponse[Page[TweetSchema]])
async def list_user_tweets(
    user_id: str,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    page = await tweet_service.list_user_tweets(parse_id(user_id, "user ID"), db, params)
    return ApiResponse.ok(page, "User tweets fetched successfully")


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetSchema])
async def update_tweet(
    tweet_id: str,
    body: ContentBody,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    tweet = await tweet_service.update_tweet(parse_id(tweet_id, "tweet ID"), body.content, db, actor)
    return ApiResponse.ok(TweetSchema.model_validate(tweet), "Tweet updated successfully")


@router.delete("/{tweet_id}", response_model=ApiResponse[dict])
async def delete_tweet(
    tweet_id: str,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await tweet_service.delete_tweet(parse_id(tweet_id, "tweet ID"), db, actor)
    return ApiResponse.ok({}, "Tweet deleted successfully")
