"""
Post category endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...models.user import User
from ...schemas.cms import CategoryCreate, CategoryOption, CategoryRead
from ...services.cms_service import CategoryService
from ..dependencies.auth import require_superadmin

router = APIRouter()


@router.get("/list")
async def category_options(session: AsyncSession = Depends(get_session)):
    """Every category as ``{id, name}`` for selection lists (public)."""
    categories = await CategoryService.list_options(session)
    return responses.success(
        [CategoryOption.model_validate(category) for category in categories],
        "Categories retrieved successfully.",
    )


@router.post("")
async def create_category(
    category_data: CategoryCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    category = await CategoryService.create_category(session, category_data)
    return responses.created(CategoryRead.model_validate(category), "Category created successfully.")


@router.get("")
async def list_categories(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    result = await CategoryService.list_categories(session, page, q or search)
    return responses.paginated(result, "Categories retrieved successfully.", request.url, CategoryRead)


@router.get("/{category_id}")
async def get_category(
    category_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    category = await CategoryService.get_category(session, category_id)
    return responses.success(CategoryRead.model_validate(category), "Category retrieved successfully.")


@router.patch("/{category_id}")
async def update_category(
    category_id: int,
    category_data: CategoryCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    category = await CategoryService.update_category(session, category_id, category_data)
    return responses.success(CategoryRead.model_validate(category), "Category updated successfully.")


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    await CategoryService.delete_category(session, category_id)
    return responses.success(message="Category deleted successfully.")
