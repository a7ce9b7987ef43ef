"""
StreamHub API Schemas — Pydantic v2 models for request/response validation.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

DataT = TypeVar("DataT")


def _not_blank(value: str) -> str:
    if value is None or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


# ═══════════════════════════════════════════════════════════════════════
# Envelope / Pagination
# ═══════════════════════════════════════════════════════════════════════

class ApiResponse(BaseModel, Generic[DataT]):
    status_code: int = 200
    data: DataT
    message: str = "Success"
    success: bool = True

    @classmethod
    def ok(cls, data: Any, message: str, status_code: int = 200) -> "ApiResponse":
        return cls(status_code=status_code, data=data, message=message, success=status_code < 400)


class Page(BaseModel, Generic[DataT]):
    docs: List[DataT]
    total_docs: int
    limit: int
    page: int
    total_pages: int
    has_prev_page: bool
    has_next_page: bool


# ═══════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════

class OwnerSchema(BaseModel):
    """Denormalized owner projection attached to listings."""
    id: uuid.UUID
    username: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    username: str = Field(..., max_length=64)
    full_name: Optional[str] = Field(None, max_length=256)
    avatar: Optional[str] = None
    cover_image: Optional[str] = None

    @field_validator("username")
    @classmethod
    def _username(cls, v: str) -> str:
        return _not_blank(v).lower()


class UserSchema(BaseModel):
    id: uuid.UUID
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None
    cover_image: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChannelProfile(UserSchema):
    subscribers_count: int = 0
    channels_subscribed_to_count: int = 0
    is_subscribed: bool = False


# ═══════════════════════════════════════════════════════════════════════
# Videos
# ═══════════════════════════════════════════════════════════════════════

class VideoSchema(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    owner_id: uuid.UUID
    owner: Optional[OwnerSchema] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VideoBrief(BaseModel):
    id: uuid.UUID
    title: str
    thumbnail: str
    duration: float
    views: int

    model_config = ConfigDict(from_attributes=True)


class PublishState(BaseModel):
    is_published: bool


# ═══════════════════════════════════════════════════════════════════════
# Comments / Tweets
# ═══════════════════════════════════════════════════════════════════════

class ContentBody(BaseModel):
    content: str = Field(..., max_length=5000)

    @field_validator("content")
    @classmethod
    def _content(cls, v: str) -> str:
        return _not_blank(v)


class CommentSchema(BaseModel):
    id: uuid.UUID
    content: str
    video_id: uuid.UUID
    owner: Optional[OwnerSchema] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TweetSchema(BaseModel):
    id: uuid.UUID
    content: str
    owner: Optional[OwnerSchema] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ═══════════════════════════════════════════════════════════════════════
# Likes / Subscriptions
# ═══════════════════════════════════════════════════════════════════════

class LikeState(BaseModel):
    is_liked: bool


class SubscriptionState(BaseModel):
    is_subscribed: bool
    channel_id: uuid.UUID


class SubscriberSchema(BaseModel):
    id: uuid.UUID
    subscriber: OwnerSchema
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscribedChannelSchema(BaseModel):
    id: uuid.UUID
    channel: OwnerSchema
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ═══════════════════════════════════════════════════════════════════════
# Playlists
# ═══════════════════════════════════════════════════════════════════════

class PlaylistCreate(BaseModel):
    name: str = Field(..., max_length=256)
    description: Optional[str] = Field(None, max_length=5000)

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _not_blank(v)


class PlaylistUpdate(PlaylistCreate):
    pass


class PlaylistSchema(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    owner: Optional[OwnerSchema] = None
    videos: List[VideoBrief] = []
    total_videos: int = 0
    created_at: datetime
    updated_at: datetime


# ═══════════════════════════════════════════════════════════════════════
# Dashboard
# ═══════════════════════════════════════════════════════════════════════

class ChannelStats(BaseModel):
    total_videos: int
    total_subscribers: int
    total_views: int
    total_likes: int
