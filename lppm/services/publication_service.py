"""
Publication service layer for Google Scholar and Scopus records.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..db.pagination import Page, paginate
from ..models.publication import GOOGLE, GOOGLE_FIELDS, SCOPUS, SCOPUS_FIELDS, Publication
from .base import search_filter
from .record_service import RecordService

SEARCH_FIELDS = {
    GOOGLE: ("title", "journal", "creators"),
    SCOPUS: ("identifier", "title", "publication_name", "creators"),
}
DEFAULT_SEARCH_FIELDS = ("title", "creators")


class PublicationService(RecordService):
    model = Publication
    label = "Publication"
    latest_first = True

    @classmethod
    async def list(
        cls,
        session: AsyncSession,
        page: int = 1,
        search: Optional[str] = None,
        per_page: int = settings.PAGE_SIZE,
        category: Optional[str] = None,
    ) -> Page:
        query = cls.base_query()
        if category:
            query = query.where(Publication.category == category)
        if search:
            fields = SEARCH_FIELDS.get(category, DEFAULT_SEARCH_FIELDS)
            columns = [getattr(Publication, field) for field in fields]
            query = query.where(search_filter(columns, search))
        query = query.order_by(*cls.ordering())
        return await paginate(session, query, page, per_page, *cls.load_options())

    @classmethod
    def column_values(cls, data) -> dict:
        """Payload columns, with the other variant's columns nulled."""
        values = data.model_dump(exclude={"authors"})
        other = SCOPUS_FIELDS if data.category == GOOGLE else GOOGLE_FIELDS
        for field in other:
            values[field] = None
        return values
