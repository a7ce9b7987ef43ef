"""
StreamHub ORM Models — complete data layer.

Users double as channels: a channel is simply the user that owns videos and
receives subscriptions.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Float, ForeignKey, Index,
    Integer, String, Text, UniqueConstraint, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from streamhub.core.database import Base


def utcnow() -> datetime:
    # Microsecond resolution keeps newest-first ordering meaningful on every backend.
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


# ═══════════════════════════════════════════════════════════════════════
# Users / Channels
# ═══════════════════════════════════════════════════════════════════════

class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    avatar: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    cover_image: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)


# ═══════════════════════════════════════════════════════════════════════
# Content
# ═══════════════════════════════════════════════════════════════════════

class Video(TimestampMixin, Base):
    __tablename__ = "videos"
    __table_args__ = (
        Index("ix_videos_owner_published", "owner_id", "is_published"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(512))
    description: Mapped[str] = mapped_column(Text, default="")
    video_file: Mapped[str] = mapped_column(String(1024))
    thumbnail: Mapped[str] = mapped_column(String(1024))
    duration: Mapped[float] = mapped_column(Float, default=0.0)
    views: Mapped[int] = mapped_column(Integer, default=0)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    owner: Mapped["User"] = relationship("User", lazy="joined")


class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    content: Mapped[str] = mapped_column(Text)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), index=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    owner: Mapped["User"] = relationship("User", lazy="joined")


class Tweet(TimestampMixin, Base):
    __tablename__ = "tweets"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    content: Mapped[str] = mapped_column(Text)
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    owner: Mapped["User"] = relationship("User", lazy="joined")


# ═══════════════════════════════════════════════════════════════════════
# Join Entities
# ═══════════════════════════════════════════════════════════════════════

class Like(TimestampMixin, Base):
    """A user liking exactly one video, comment or tweet."""
    __tablename__ = "likes"
    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN video_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN comment_id IS NOT NULL THEN 1 ELSE 0 END"
            " + CASE WHEN tweet_id IS NOT NULL THEN 1 ELSE 0 END) = 1",
            name="ck_likes_single_target",
        ),
        UniqueConstraint("liked_by_id", "video_id", name="uq_likes_video"),
        UniqueConstraint("liked_by_id", "comment_id", name="uq_likes_comment"),
        UniqueConstraint("liked_by_id", "tweet_id", name="uq_likes_tweet"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    liked_by_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    video_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), nullable=True, index=True)
    comment_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True)
    tweet_id: Mapped[Optional[uuid.UUID]] = mapped_column(ForeignKey("tweets.id", ondelete="CASCADE"), nullable=True, index=True)


class Subscription(TimestampMixin, Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id", name="uq_subscriptions_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    subscriber_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    channel_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    subscriber: Mapped["User"] = relationship("User", foreign_keys=[subscriber_id], lazy="joined")
    channel: Mapped["User"] = relationship("User", foreign_keys=[channel_id], lazy="joined")


# ═══════════════════════════════════════════════════════════════════════
# Playlists
# ═══════════════════════════════════════════════════════════════════════

class Playlist(TimestampMixin, Base):
    """User playlist — ordered collection of videos."""
    __tablename__ = "playlists"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(256))
    description: Mapped[str] = mapped_column(Text, default="")
    owner_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)

    owner: Mapped["User"] = relationship("User", lazy="joined")
    entries: Mapped[List["PlaylistVideo"]] = relationship(
        "PlaylistVideo",
        back_populates="playlist",
        order_by="PlaylistVideo.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class PlaylistVideo(Base):
    __tablename__ = "playlist_videos"
    __table_args__ = (
        UniqueConstraint("playlist_id", "video_id", name="uq_playlist_videos_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    playlist_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("playlists.id", ondelete="CASCADE"), index=True)
    video_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("videos.id", ondelete="CASCADE"), index=True)
    position: Mapped[int] = mapped_column(Integer, default=0)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    playlist: Mapped["Playlist"] = relationship("Playlist", back_populates="entries")
    video: Mapped["Video"] = relationship("Video", lazy="selectin")
