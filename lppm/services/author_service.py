"""
Author and study program service layer.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import settings
from ..db.pagination import Page, paginate
from ..models.author import Author, StudyProgram
from ..models.book import Book
from ..models.grant import Research, Service
from ..models.hki import HKI
from ..models.publication import GooglePublication, Publication
from ..schemas.author import AuthorCreate, StudyProgramCreate
from .base import (
    ErrorBag,
    check_exists,
    check_unique,
    commit_unique,
    get_or_404,
    search_filter,
    set_authors,
)

logger = logging.getLogger(__name__)

AUTHORED_MODELS = (Book, HKI, Publication, GooglePublication, Research, Service)


class AuthorService:
    """Author service class."""

    @staticmethod
    async def get_author(session: AsyncSession, author_id: int) -> Author:
        return await get_or_404(
            session, Author, author_id, "Author not found.", selectinload(Author.study_program)
        )

    @staticmethod
    async def list_authors(
        session: AsyncSession,
        page: int = 1,
        search: Optional[str] = None,
    ) -> Page:
        """Authors ordered by id, matching ``search`` on name, SINTA id or NIDN."""
        query = select(Author)
        if search:
            query = query.where(search_filter([Author.name, Author.sinta_id, Author.nidn], search))
        query = query.order_by(Author.id)
        return await paginate(
            session, query, page, settings.PAGE_SIZE, selectinload(Author.study_program)
        )

    @staticmethod
    async def _validate(
        session: AsyncSession,
        author_data: AuthorCreate,
        author_id: Optional[int] = None,
    ) -> None:
        errors = ErrorBag()
        await check_unique(session, errors, Author, "nidn", author_data.nidn, author_id)
        await check_exists(session, errors, StudyProgram, "study_program_id", author_data.study_program_id)
        errors.raise_if_any()

    @staticmethod
    async def create_author(session: AsyncSession, author_data: AuthorCreate) -> Author:
        """Create a new author."""
        await AuthorService._validate(session, author_data)

        author = Author(**author_data.model_dump())
        session.add(author)
        await commit_unique(session, "nidn")
        logger.info(f"Author {author.nidn} created")
        return await AuthorService.get_author(session, author.id)

    @staticmethod
    async def update_author(
        session: AsyncSession,
        author_id: int,
        author_data: AuthorCreate,
    ) -> Author:
        """Replace an author's fields."""
        author = await AuthorService.get_author(session, author_id)
        await AuthorService._validate(session, author_data, author.id)

        for field, value in author_data.model_dump().items():
            setattr(author, field, value)
        await commit_unique(session, "nidn")
        return await AuthorService.get_author(session, author.id)

    @staticmethod
    async def delete_author(session: AsyncSession, author_id: int) -> None:
        """Delete an author; linked records stay with ``creators`` recomputed."""
        author = await AuthorService.get_author(session, author_id)
        for model in AUTHORED_MODELS:
            result = await session.execute(
                select(model)
                .where(model.authors.any(Author.id == author.id))
                .options(selectinload(model.authors))
            )
            for record in result.scalars():
                set_authors(record, [linked for linked in record.authors if linked.id != author.id])
        await session.delete(author)
        await session.commit()
        logger.info(f"Author {author.nidn} deleted")


class StudyProgramService:
    """Study program service class."""

    @staticmethod
    async def get_study_program(session: AsyncSession, study_program_id: int) -> StudyProgram:
        return await get_or_404(
            session,
            StudyProgram,
            study_program_id,
            "Study program not found.",
            selectinload(StudyProgram.authors),
        )

    @staticmethod
    async def list_study_programs(
        session: AsyncSession,
        page: int = 1,
        search: Optional[str] = None,
    ) -> Page:
        query = select(StudyProgram)
        if search:
            query = query.where(search_filter([StudyProgram.name], search))
        query = query.order_by(StudyProgram.id)
        return await paginate(
            session, query, page, settings.PAGE_SIZE, selectinload(StudyProgram.authors)
        )

    @staticmethod
    async def create_study_program(session: AsyncSession, data: StudyProgramCreate) -> StudyProgram:
        study_program = StudyProgram(name=data.name)
        session.add(study_program)
        await session.commit()
        return await StudyProgramService.get_study_program(session, study_program.id)

    @staticmethod
    async def update_study_program(
        session: AsyncSession,
        study_program_id: int,
        data: StudyProgramCreate,
    ) -> StudyProgram:
        study_program = await StudyProgramService.get_study_program(session, study_program_id)
        study_program.name = data.name
        await session.commit()
        return await StudyProgramService.get_study_program(session, study_program.id)

    @staticmethod
    async def delete_study_program(session: AsyncSession, study_program_id: int) -> None:
        """Delete a study program; its authors are kept without a program."""
        study_program = await StudyProgramService.get_study_program(session, study_program_id)
        await session.delete(study_program)
        await session.commit()
        logger.info(f"Study program {study_program_id} deleted")
