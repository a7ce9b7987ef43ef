"""
StreamHub API — Subscription routes.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_current_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import (
    ApiResponse,
    Page,
    SubscribedChannelSchema,
    SubscriberSchema,
    SubscriptionState,
)
from streamhub.services.query.listing import PageParams, page_params
from streamhub.services.subscriptions.subscription_service import subscription_service

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("/c/{channel_id}", response_model=ApiResponse[SubscriptionState])
async def toggle_subscription(
    channel_id: str,
    response: Response,
    actor: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    state = await subscription_service.toggle_subscription(parse_id(channel_id, "channelId"), db, actor)
    if state.is_subscribed:
        response.status_code = 201
        return ApiResponse.ok(state, "Subscribed successfully", 201)
    return ApiResponse.ok(state, "Unsubscribed successfully")


@router.get("/c/{channel_id}", response_model=ApiResponse[Page[SubscriberSchema]])
async def list_channel_subscribers(
    channel_id: str,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    page = await subscription_service.list_subscribers(parse_id(channel_id, "channelId"), db, params)
    message = "Subscribers fetched successfully" if page.docs else "No subscribers found for this channel"
    return ApiResponse.ok(page, message)


@router.get("/u/{subscriber_id}", response_model=ApiResponse[Page[SubscribedChannelSchema]])
async def list_subscribed_channels(
    subscriber_id: str,
    params: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
):
    page = await subscription_service.list_subscribed_channels(parse_id(subscriber_id, "subscriberId"), db, params)
    message = "Subscribed channels fetched successfully" if page.docs else "User has not subscribed to any channels"
    return ApiResponse.ok(page, message)
