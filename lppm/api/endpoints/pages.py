"""
Menu page endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...models.user import User
from ...schemas.cms import PageCreate, PageRead
from ...services.cms_service import PageService
from ..dependencies.auth import require_superadmin

router = APIRouter()


@router.get("/menu")
async def menu(session: AsyncSession = Depends(get_session)):
    """Pages shown in the site menu, the home page excluded (public)."""
    pages = await PageService.menu(session)
    return responses.success([PageRead.model_validate(page) for page in pages], "Menu retrieved successfully.")


@router.post("")
async def create_page(
    page_data: PageCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Create a page; a child page with a taken slug gets its parent's slug as prefix."""
    page = await PageService.create_page(session, page_data)
    return responses.created(PageRead.model_validate(page), "Page created successfully.")


@router.get("")
async def list_pages(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    result = await PageService.list_pages(session, page, q or search)
    return responses.paginated(result, "Pages retrieved successfully.", request.url, PageRead)


@router.get("/{page_id}")
async def get_page(
    page_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    page = await PageService.get_page(session, page_id)
    return responses.success(PageRead.model_validate(page), "Page retrieved successfully.")


@router.patch("/{page_id}")
async def update_page(
    page_id: int,
    page_data: PageCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    page = await PageService.update_page(session, page_id, page_data)
    return responses.success(PageRead.model_validate(page), "Page updated successfully.")


@router.delete("/{page_id}")
async def delete_page(
    page_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    await PageService.delete_page(session, page_id)
    return responses.success(message="Page deleted successfully.")
