"""
Post endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...models.user import User
from ...schemas.cms import PostCreate, PostListItem, PostRead
from ...services.cms_service import PostService
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.get("/by-page/{slug}")
async def posts_by_page(slug: str, session: AsyncSession = Depends(get_session)):
    """Published posts of one page (public)."""
    posts = await PostService.posts_for_page(session, slug)
    return responses.success(
        [PostListItem.from_post(post) for post in posts], "Posts retrieved successfully."
    )


@router.post("")
async def create_post(
    post_data: PostCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Create a post authored by the current user."""
    post = await PostService.create_post(session, current_user, post_data)
    return responses.created(PostRead.model_validate(post), "Post created successfully.")


@router.get("")
async def list_posts(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """All posts for a superadmin, otherwise only the caller's own."""
    result = await PostService.list_posts(session, current_user, page, q or search)
    result.items = [PostListItem.from_post(post) for post in result.items]
    return responses.paginated(result, "Posts retrieved successfully.", request.url)


@router.get("/{post_id}")
async def get_post(
    post_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    post = await PostService.get_post(session, post_id)
    return responses.success(PostRead.model_validate(post), "Post retrieved successfully.")


@router.patch("/{post_id}")
async def update_post(
    post_id: int,
    post_data: PostCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    post = await PostService.update_post(session, current_user, post_id, post_data)
    return responses.success(PostRead.model_validate(post), "Post updated successfully.")


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await PostService.delete_post(session, current_user, post_id)
    return responses.success(message="Post deleted successfully.")
