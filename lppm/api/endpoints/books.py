"""
Book endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.records import BookImporter
from ...models.associations import author_book
from ...models.book import Book
from ...models.user import User
from ...schemas.book import BookCreate, BookRead
from ...services.book_service import BookService
from ...services.import_service import ImportService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.post("/import")
async def import_books(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Import books from a spreadsheet; headings on row 5."""
    await ImportService.run(session, BookImporter, file, reset_table)
    return responses.created(message="Books data imported successfully.")


@router.get("/grouped-by-category")
async def books_grouped_by_category(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
):
    """Book counts per ``kategori`` (public)."""
    data = await grouped_counts(session, Book, Book.kategori, study_program_id)
    return responses.success(data, "Books data retrieved successfully")


@router.get("/chart-data")
async def books_chart_data(
    year: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    """Books per study program, optionally for one publication year (public)."""
    data = await chart_data(session, Book, author_book, "book_id", Book.tahun_terbit, year)
    return responses.success(data, "Books chart data retrieved successfully.")


@router.post("")
async def create_book(
    book_data: BookCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    book = await BookService.create(session, book_data)
    return responses.created(BookRead.model_validate(book), "Book data created successfully.")


@router.get("")
async def list_books(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Latest books first; ``q`` matches title or creators."""
    result = await BookService.list(session, page, q or search)
    return responses.paginated(result, "Books data retrieved successfully.", request.url, BookRead)


@router.get("/{book_id}")
async def get_book(
    book_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    book = await BookService.get(session, book_id)
    return responses.success(BookRead.model_validate(book), "Book data retrieved successfully.")


@router.patch("/{book_id}")
async def update_book(
    book_id: int,
    book_data: BookCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    book = await BookService.update(session, book_id, book_data)
    return responses.success(BookRead.model_validate(book), "Book data successfully updated.")


@router.delete("/{book_id}")
async def delete_book(
    book_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await BookService.delete(session, book_id)
    return responses.success(message="Book deleted successfully.")
