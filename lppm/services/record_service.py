"""
CRUD shared by the author-linked output records (books, HKI, publications,
grants).
"""
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import settings
from ..db.pagination import Page, paginate
from .base import (
    ErrorBag,
    check_unique,
    commit_unique,
    get_or_404,
    resolve_authors,
    search_filter,
    set_authors,
)

logger = logging.getLogger(__name__)


class RecordService:
    """Base service; subclasses name the model and its searchable columns."""

    model = None
    label = "Record"
    search_fields: Tuple[str, ...] = ("title",)
    unique_fields: Tuple[str, ...] = ("title",)
    latest_first = False

    @classmethod
    def load_options(cls):
        return (selectinload(cls.model.authors),)

    @classmethod
    def not_found_message(cls) -> str:
        return f"{cls.label} not found."

    @classmethod
    def ordering(cls):
        if cls.latest_first:
            return (cls.model.created_at.desc(), cls.model.id.desc())
        return (cls.model.id,)

    @classmethod
    def base_query(cls):
        return select(cls.model)

    @classmethod
    async def get(cls, session: AsyncSession, record_id: int):
        return await get_or_404(
            session, cls.model, record_id, cls.not_found_message(), *cls.load_options()
        )

    @classmethod
    async def list(
        cls,
        session: AsyncSession,
        page: int = 1,
        search: Optional[str] = None,
        per_page: int = settings.PAGE_SIZE,
    ) -> Page:
        query = cls.base_query()
        if search:
            columns = [getattr(cls.model, field) for field in cls.search_fields]
            query = query.where(search_filter(columns, search))
        query = query.order_by(*cls.ordering())
        return await paginate(session, query, page, per_page, *cls.load_options())

    @classmethod
    def column_values(cls, data) -> Dict[str, Any]:
        return data.model_dump(exclude={"authors"})

    @classmethod
    async def validate(
        cls,
        session: AsyncSession,
        values: Dict[str, Any],
        errors: ErrorBag,
        record_id: Optional[int] = None,
    ) -> None:
        """Uniqueness checks; subclasses add their own rules."""
        for field in cls.unique_fields:
            await check_unique(session, errors, cls.model, field, values.get(field), record_id)

    @classmethod
    async def create(cls, session: AsyncSession, data):
        values = cls.column_values(data)
        errors = ErrorBag()
        await cls.validate(session, values, errors)
        authors = await resolve_authors(session, errors, data.authors)
        errors.raise_if_any()

        record = cls.model(**values)
        set_authors(record, authors)
        session.add(record)
        await commit_unique(session, cls.unique_fields[0])
        logger.info(f"{cls.label} {record.id} created")
        return await cls.get(session, record.id)

    @classmethod
    async def update(cls, session: AsyncSession, record_id: int, data):
        record = await cls.get(session, record_id)
        values = cls.column_values(data)
        errors = ErrorBag()
        await cls.validate(session, values, errors, record_id=record.id)
        authors = await resolve_authors(session, errors, data.authors)
        errors.raise_if_any()

        for field, value in values.items():
            setattr(record, field, value)
        # a missing author list detaches every author
        set_authors(record, authors)
        await commit_unique(session, cls.unique_fields[0])
        return await cls.get(session, record.id)

    @classmethod
    async def delete(cls, session: AsyncSession, record_id: int) -> None:
        record = await cls.get(session, record_id)
        await session.delete(record)
        await session.commit()
        logger.info(f"{cls.label} {record_id} deleted")
