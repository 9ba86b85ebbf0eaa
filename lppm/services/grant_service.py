"""
Research and community service grant services.

The leader named by ``nidn_ketua`` must be a known author; together with
``author_members`` they make up the grant's author set.
"""
import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import NotFoundError
from ..models.author import Author
from ..models.grant import Research, Service
from .base import ErrorBag, resolve_authors, set_authors
from .record_service import RecordService

logger = logging.getLogger(__name__)


class GrantService(RecordService):
    unique_fields = ()

    @classmethod
    def column_values(cls, data) -> Dict[str, Any]:
        values = data.model_dump(exclude={"author_members"})
        values["dana_disetujui"] = Decimal(values["dana_disetujui"])
        return values

    @classmethod
    async def _authors(cls, session: AsyncSession, data):
        errors = ErrorBag()
        members = await resolve_authors(session, errors, data.author_members, "author_members")
        errors.raise_if_any()

        result = await session.execute(select(Author).where(Author.nidn == data.nidn_ketua))
        leader = result.scalar_one_or_none()
        if leader is None:
            raise NotFoundError("Author not found.")
        return [leader] + [member for member in members if member.id != leader.id]

    @classmethod
    async def create(cls, session: AsyncSession, data):
        authors = await cls._authors(session, data)
        record = cls.model(**cls.column_values(data))
        set_authors(record, authors)
        session.add(record)
        await session.commit()
        logger.info(f"{cls.label} {record.id} created for leader {data.nidn_ketua}")
        return await cls.get(session, record.id)

    @classmethod
    async def update(cls, session: AsyncSession, record_id: int, data):
        record = await cls.get(session, record_id)
        authors = await cls._authors(session, data)
        for field, value in cls.column_values(data).items():
            setattr(record, field, value)
        set_authors(record, authors)
        await session.commit()
        return await cls.get(session, record.id)


class ResearchService(GrantService):
    model = Research
    label = "Research"
    search_fields = ("nama_ketua", "nidn_ketua", "judul")


class ServiceService(GrantService):
    """Community service (pengabdian) grants."""
    model = Service
    label = "Service"
    search_fields = ("nama_ketua", "nidn_ketua")
    latest_first = True
