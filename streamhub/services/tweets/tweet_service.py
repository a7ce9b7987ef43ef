"""
StreamHub Tweet Service — short text posts on a channel.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import InternalError
from streamhub.models.models import Like, Tweet, User
from streamhub.schemas.schemas import Page, TweetSchema
from streamhub.services.access.ownership import apply_owned, get_or_404, load_owned
from streamhub.services.query.listing import ListingQuery, PageParams, SortParams

logger = logging.getLogger(__name__)


class TweetService:

    async def create_tweet(self, content: str, db: AsyncSession, actor: User) -> Tweet:
        tweet = Tweet(content=content, owner=actor)
        db.add(tweet)
        await db.flush()
        if tweet.id is None:
            raise InternalError("Something went wrong while creating the tweet")
        await db.commit()
        logger.info(f"Tweet {tweet.id} created by {actor.username}")
        return tweet

    async def list_user_tweets(self, user_id: uuid.UUID, db: AsyncSession, params: PageParams) -> Page:
        await get_or_404(db, User, user_id, "user")
        listing = ListingQuery(
            model=Tweet,
            filters=[Tweet.owner_id == user_id],
            sort=SortParams(),
            join=Tweet.owner,
        )
        return await listing.paginate(db, params, TweetSchema.model_validate)

    async def update_tweet(self, tweet_id: uuid.UUID, content: str, db: AsyncSession, actor: User) -> Tweet:
        def set_content(tweet: Tweet):
            tweet.content = content

        return await apply_owned(db, Tweet, tweet_id, actor, set_content, label="tweet")

    async def delete_tweet(self, tweet_id: uuid.UUID, db: AsyncSession, actor: User):
        tweet = await load_owned(db, Tweet, tweet_id, actor, label="tweet", action="delete")
        await db.execute(
            delete(Like).where(Like.tweet_id == tweet.id).execution_options(synchronize_session=False)
        )
        await db.delete(tweet)
        await db.commit()
        logger.info(f"Tweet {tweet_id} deleted")


tweet_service = TweetService()
