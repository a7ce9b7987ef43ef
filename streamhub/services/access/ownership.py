"""
Ownership gate for mutations.

Existence is always checked before ownership, so a missing record is reported
as 404 even to callers who would not own it.
"""
from __future__ import annotations

import inspect
import uuid
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from sqlalchemy.ext.asyncio import AsyncSession

from streamhub.core.errors import ForbiddenError, NotFoundError
from streamhub.models.models import User

ModelT = TypeVar("ModelT")


async def get_or_404(db: AsyncSession, model: type[ModelT], entity_id: uuid.UUID, label: str) -> ModelT:
    entity = await db.get(model, entity_id)
    if entity is None:
        raise NotFoundError(f"{label.capitalize()} not found")
    return entity


def is_owner(entity: Any, actor: User) -> bool:
    return entity.owner_id == actor.id


def ensure_owner(entity: Any, actor: User, action: str, label: str):
    if not is_owner(entity, actor):
        raise ForbiddenError(f"You are not authorized to {action} this {label}")


async def load_owned(
    db: AsyncSession,
    model: type[ModelT],
    entity_id: uuid.UUID,
    actor: User,
    *,
    label: str,
    action: str,
) -> ModelT:
    entity = await get_or_404(db, model, entity_id, label)
    ensure_owner(entity, actor, action, label)
    return entity


async def apply_owned(
    db: AsyncSession,
    model: type[ModelT],
    entity_id: uuid.UUID,
    actor: User,
    mutate: Callable[[ModelT], Union[None, Awaitable[None]]],
    *,
    label: str,
    action: str = "update",
) -> ModelT:
    """Load, authorize, apply ``mutate`` and commit."""
    entity = await load_owned(db, model, entity_id, actor, label=label, action=action)
    outcome: Optional[Awaitable[None]] = mutate(entity)
    if inspect.isawaitable(outcome):
        await outcome
    await db.commit()
    return entity


async def delete_owned(
    db: AsyncSession,
    model: type[ModelT],
    entity_id: uuid.UUID,
    actor: User,
    *,
    label: str,
) -> ModelT:
    entity = await load_owned(db, model, entity_id, actor, label=label, action="delete")
    await db.delete(entity)
    await db.commit()
    return entity
