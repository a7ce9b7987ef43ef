"""
StreamHub API — User / channel routes.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.database import get_db
from streamhub.core.security import get_optional_user, parse_id
from streamhub.models.models import User
from streamhub.schemas.schemas import ApiResponse, ChannelProfile, UserCreate, UserSchema
from streamhub.services.users.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=ApiResponse[UserSchema], status_code=201)
async def register_user(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_service.create_user(body, db)
    return ApiResponse.ok(UserSchema.model_validate(user), "User registered successfully", 201)


@router.get("/c/{username}", response_model=ApiResponse[ChannelProfile])
async def get_channel_profile(
    username: str,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await user_service.get_channel_profile(username, db, viewer)
    return ApiResponse.ok(profile, "User channel fetched successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserSchema])
async def get_user(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await user_service.get_user(parse_id(user_id, "user ID"), db)
    return ApiResponse.ok(UserSchema.model_validate(user), "User fetched successfully")
