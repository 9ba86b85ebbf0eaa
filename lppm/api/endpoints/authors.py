"""
Author endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.author import AuthorImporter
from ...models.user import User
from ...schemas.author import AuthorCreate, AuthorRead
from ...services.author_service import AuthorService
from ...services.import_service import ImportService
from ..dependencies.auth import require_superadmin

router = APIRouter()


@router.post("/import")
async def import_authors(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Import authors; unknown study programs are created by name.

    With ``reset_table`` every author and every authorship link is removed
    first, in the same transaction as the import.
    """
    await ImportService.run(session, AuthorImporter, file, reset_table)
    return responses.created(message="Authors data imported successfully.")


@router.post("")
async def create_author(
    author_data: AuthorCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Create a new author."""
    author = await AuthorService.create_author(session, author_data)
    return responses.created(AuthorRead.model_validate(author), "Author data created successfully.")


@router.get("")
async def list_authors(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """List authors with their study program."""
    result = await AuthorService.list_authors(session, page, q or search)
    return responses.paginated(result, "Authors data retrieved successfully.", request.url, AuthorRead)


@router.get("/{author_id}")
async def get_author(
    author_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Get author by ID."""
    author = await AuthorService.get_author(session, author_id)
    return responses.success(AuthorRead.model_validate(author), "Author data retrieved successfully.")


@router.patch("/{author_id}")
async def update_author(
    author_id: int,
    author_data: AuthorCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    author = await AuthorService.update_author(session, author_id, author_data)
    return responses.success(AuthorRead.model_validate(author), "Author data successfully updated.")


@router.delete("/{author_id}")
async def delete_author(
    author_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    await AuthorService.delete_author(session, author_id)
    return responses.success(message="Author deleted successfully.")
