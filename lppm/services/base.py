"""
Helpers shared by the record services: lookups, validation and authorship.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import FieldValidationError, NotFoundError
from ..models.author import Author
from ..utils.helpers import join_names

logger = logging.getLogger(__name__)


class ErrorBag:
    """Collects field errors so a request reports all of them at once."""

    def __init__(self):
        self.errors: Dict[str, List[str]] = {}

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)

    def __bool__(self) -> bool:
        return bool(self.errors)

    def raise_if_any(self) -> None:
        if self.errors:
            raise FieldValidationError(self.errors)


def taken_message(field: str) -> str:
    return f"The {field.replace('_', ' ')} has already been taken."


def invalid_message(field: str) -> str:
    return f"The selected {field.replace('_', ' ')} is invalid."


async def get_or_404(session: AsyncSession, model, record_id: int, message: str, *options):
    """Load ``model`` by id with fresh state and the given loader options."""
    query = (
        select(model)
        .where(model.id == record_id)
        .options(*options)
        .execution_options(populate_existing=True)
    )
    record = (await session.execute(query)).scalars().unique().one_or_none()
    if record is None:
        raise NotFoundError(message)
    return record


async def check_unique(
    session: AsyncSession,
    errors: ErrorBag,
    model,
    field: str,
    value: Any,
    exclude_id: Optional[int] = None,
) -> None:
    if value is None:
        return
    query = select(model.id).where(getattr(model, field) == value)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    if (await session.execute(query.limit(1))).first() is not None:
        errors.add(field, taken_message(field))


async def check_exists(
    session: AsyncSession,
    errors: ErrorBag,
    model,
    field: str,
    record_id: Optional[int],
) -> None:
    if record_id is None:
        return
    if await session.get(model, record_id) is None:
        errors.add(field, invalid_message(field))


async def resolve_authors(
    session: AsyncSession,
    errors: ErrorBag,
    author_ids: Optional[Sequence[int]],
    field: str = "authors",
) -> List[Author]:
    """Authors for ``author_ids`` in the given order, duplicates dropped.

    Unknown ids are reported as ``<field>.<index>``.
    """
    if not author_ids:
        return []
    result = await session.execute(select(Author).where(Author.id.in_(set(author_ids))))
    found = {author.id: author for author in result.scalars()}

    authors: List[Author] = []
    for index, author_id in enumerate(author_ids):
        author = found.get(author_id)
        if author is None:
            errors.add(f"{field}.{index}", invalid_message(f"{field}.{index}"))
        elif author not in authors:
            authors.append(author)
    return authors


def set_authors(record, authors: List[Author]) -> None:
    """Replace the author set and recompute ``creators`` when the set changes."""
    current = {author.id for author in record.authors}
    if current == {author.id for author in authors} and record.id is not None:
        return
    record.authors = list(authors)
    record.creators = join_names([author.name for author in authors]) if authors else None


def search_filter(columns: Iterable, term: str):
    """Case-insensitive substring match on any of ``columns``."""
    pattern = f"%{term}%"
    return or_(*[column.ilike(pattern) for column in columns])


async def commit_unique(session: AsyncSession, field: str = "title") -> None:
    """Commit, reporting a unique index violation as a field error on ``field``."""
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise FieldValidationError.single(field, taken_message(field))
