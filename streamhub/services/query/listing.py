"""
StreamHub Listing Queries — one paginated query builder shared by every read
endpoint.

A listing is composed in fixed stages:

1. filter   — caller-supplied WHERE clauses (owner, published, parent id, ...)
2. search   — optional case-insensitive substring match over text columns
3. join     — optional outer join that eager-loads one related row (the owner)
4. sort     — whitelisted key, then ``created_at DESC``, then ``id DESC``
5. paginate — COUNT over the filtered set plus an OFFSET/LIMIT slice

The trailing ``created_at``/``id`` keys make the order total, so repeated calls
over unchanged data always return the same pages.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from streamhub.core.config import get_settings
from streamhub.core.errors import BadRequestError
from streamhub.schemas.schemas import Page

logger = logging.getLogger(__name__)
settings = get_settings()

SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class PageParams:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1),
) -> PageParams:
    # Oversized pages are clamped rather than rejected.
    return PageParams(page=page, limit=min(limit, settings.max_page_size))


@dataclass
class SortParams:
    sort_by: Optional[str] = None
    sort_type: str = "desc"


def sort_params(
    sort_by: Optional[str] = Query(None),
    sort_type: str = Query("desc", pattern="^(asc|desc)$"),
) -> SortParams:
    return SortParams(sort_by=sort_by, sort_type=sort_type)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class ListingQuery:
    """Declarative description of a paginated listing over one ORM model."""

    model: Any
    filters: List[Any] = field(default_factory=list)
    search: Optional[str] = None
    search_fields: Sequence[str] = ()
    sort: SortParams = field(default_factory=SortParams)
    sortable: Sequence[str] = ("created_at",)
    join: Any = None  # relationship attribute, e.g. Comment.owner

    # ── Stages ───────────────────────────────────────────────────────────

    def where_clauses(self) -> List[Any]:
        clauses = list(self.filters)
        text = (self.search or "").strip()
        if text and self.search_fields:
            pattern = f"%{_escape_like(text)}%"
            clauses.append(or_(*(
                getattr(self.model, name).ilike(pattern, escape="\\")
                for name in self.search_fields
            )))
        return clauses

    def order_clauses(self) -> List[Any]:
        if self.sort.sort_type not in SORT_DIRECTIONS:
            raise BadRequestError("sort_type must be 'asc' or 'desc'")

        order = []
        if self.sort.sort_by:
            if self.sort.sort_by not in self.sortable:
                raise BadRequestError(
                    f"Cannot sort by '{self.sort.sort_by}'. Allowed: {', '.join(self.sortable)}"
                )
            column = getattr(self.model, self.sort.sort_by)
            order.append(column.asc() if self.sort.sort_type == "asc" else column.desc())

        if self.sort.sort_by != "created_at":
            order.append(self.model.created_at.desc())
        order.append(self.model.id.desc())
        return order

    def statement(self) -> Select:
        stmt = select(self.model)
        if self.join is not None:
            stmt = stmt.outerjoin(self.join).options(contains_eager(self.join))
        return stmt.where(*self.where_clauses()).order_by(*self.order_clauses())

    def count_statement(self) -> Select:
        return select(func.count(self.model.id)).where(*self.where_clauses())

    # ── Execution ────────────────────────────────────────────────────────

    async def paginate(
        self,
        db: AsyncSession,
        params: PageParams,
        transform: Callable[[Any], BaseModel],
    ) -> Page:
        stmt = self.statement()
        total = await db.scalar(self.count_statement()) or 0

        docs: list = []
        if params.offset < total:
            result = await db.execute(stmt.offset(params.offset).limit(params.limit))
            docs = [transform(row) for row in result.unique().scalars().all()]

        return build_page(docs, total, params)


def build_page(docs: list, total: int, params: PageParams) -> Page:
    total_pages = (total + params.limit - 1) // params.limit
    return Page(
        docs=docs,
        total_docs=total,
        limit=params.limit,
        page=params.page,
        total_pages=total_pages,
        has_prev_page=params.page > 1,
        has_next_page=params.page < total_pages,
    )
