"""
Page, category and post services.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import settings
from ..core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from ..core.roles import Role
from ..db.pagination import Page as ResultPage, paginate
from ..models.cms import Category, Page, Post
from ..models.user import User
from ..schemas.cms import CategoryCreate, PageCreate, PostCreate
from ..utils.helpers import slugify
from .base import ErrorBag, check_exists, get_or_404, search_filter

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Text", "Media", "Journal", "File")
MENU_EXCLUDED_SLUG = "beranda"
PUBLISHED = "published"


async def _slug_taken(session: AsyncSession, model, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        query = query.where(model.id != exclude_id)
    return (await session.execute(query.limit(1))).first() is not None


class CategoryService:
    """Post categories; the slug decides which attachments a post needs."""

    DUPLICATE_SLUG = "Slug already exists. Please choose a different category name."

    @staticmethod
    async def get_category(session: AsyncSession, category_id: int) -> Category:
        return await get_or_404(session, Category, category_id, "Category not found.")

    @staticmethod
    async def list_categories(session: AsyncSession, page: int = 1, search: Optional[str] = None) -> ResultPage:
        query = select(Category)
        if search:
            query = query.where(search_filter([Category.name], search))
        return await paginate(session, query.order_by(Category.id), page, settings.PAGE_SIZE)

    @staticmethod
    async def list_options(session: AsyncSession) -> List[Category]:
        result = await session.execute(select(Category).order_by(Category.id))
        return list(result.scalars().all())

    @staticmethod
    async def create_category(session: AsyncSession, data: CategoryCreate) -> Category:
        slug = slugify(data.name)
        if await _slug_taken(session, Category, slug):
            raise ConflictError(CategoryService.DUPLICATE_SLUG)

        category = Category(name=data.name, slug=slug)
        session.add(category)
        await session.commit()
        return category

    @staticmethod
    async def update_category(session: AsyncSession, category_id: int, data: CategoryCreate) -> Category:
        category = await CategoryService.get_category(session, category_id)
        slug = slugify(data.name)
        if await _slug_taken(session, Category, slug, category.id):
            raise ConflictError(CategoryService.DUPLICATE_SLUG)

        category.name = data.name
        category.slug = slug
        await session.commit()
        return category

    @staticmethod
    async def delete_category(session: AsyncSession, category_id: int) -> None:
        category = await CategoryService.get_category(session, category_id)
        await session.delete(category)
        await session.commit()
        logger.info(f"Category {category.slug} deleted")

    @staticmethod
    async def seed_defaults(session: AsyncSession) -> None:
        """Create the built-in post categories that are missing."""
        for name in DEFAULT_CATEGORIES:
            slug = slugify(name)
            if not await _slug_taken(session, Category, slug):
                session.add(Category(name=name, slug=slug))
                logger.info(f"Seeded category {slug}")
        await session.commit()


class PageService:
    """Menu pages. A child page links below its parent: ``/parent/child``."""

    DUPLICATE_SLUG = "Slug already exists. Please choose a different title."

    @staticmethod
    async def get_page(session: AsyncSession, page_id: int) -> Page:
        return await get_or_404(session, Page, page_id, "Page not found.")

    @staticmethod
    async def get_page_by_slug(session: AsyncSession, slug: str) -> Optional[Page]:
        result = await session.execute(select(Page).where(Page.slug == slug).order_by(Page.id).limit(1))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_pages(session: AsyncSession, page: int = 1, search: Optional[str] = None) -> ResultPage:
        query = select(Page)
        if search:
            query = query.where(search_filter([Page.title], search))
        return await paginate(session, query.order_by(Page.id), page, settings.PAGE_SIZE)

    @staticmethod
    async def menu(session: AsyncSession) -> List[Page]:
        result = await session.execute(
            select(Page).where(Page.slug != MENU_EXCLUDED_SLUG).order_by(Page.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def _parent(session: AsyncSession, parent_id: Optional[int]) -> Optional[Page]:
        if parent_id is None:
            return None
        errors = ErrorBag()
        await check_exists(session, errors, Page, "parent_id", parent_id)
        errors.raise_if_any()
        return await session.get(Page, parent_id)

    @staticmethod
    async def _slug_and_link(
        session: AsyncSession,
        title: str,
        parent: Optional[Page],
        page_id: Optional[int] = None,
    ):
        """A taken child slug falls back to ``<parent-slug>-<slug>``."""
        slug = slugify(title)
        if await _slug_taken(session, Page, slug, page_id):
            if parent is None:
                raise ConflictError(PageService.DUPLICATE_SLUG)
            slug = f"{parent.slug}-{slug}"
            if await _slug_taken(session, Page, slug, page_id):
                raise ConflictError(PageService.DUPLICATE_SLUG)

        if parent is None:
            return slug, f"/{slug}"
        return slug, f"/{parent.slug}/{slug}"

    @staticmethod
    async def create_page(session: AsyncSession, data: PageCreate) -> Page:
        parent = await PageService._parent(session, data.parent_id)
        slug, link = await PageService._slug_and_link(session, data.title, parent)

        page = Page(title=data.title, slug=slug, link=link, parent_id=data.parent_id)
        session.add(page)
        await session.commit()
        return page

    @staticmethod
    async def update_page(session: AsyncSession, page_id: int, data: PageCreate) -> Page:
        page = await PageService.get_page(session, page_id)
        parent = await PageService._parent(session, data.parent_id)
        slug, link = await PageService._slug_and_link(session, data.title, parent, page.id)

        page.title = data.title
        page.parent_id = data.parent_id
        page.slug = slug
        page.link = link
        await session.commit()
        return page

    @staticmethod
    async def delete_page(session: AsyncSession, page_id: int) -> None:
        page = await PageService.get_page(session, page_id)
        await session.delete(page)
        await session.commit()
        logger.info(f"Page {page.slug} deleted")


class PostService:
    """Posts; non-superadmins only see and change their own."""

    @staticmethod
    def _load_options():
        return (
            selectinload(Post.category),
            selectinload(Post.page),
            selectinload(Post.author),
        )

    @staticmethod
    async def get_post(session: AsyncSession, post_id: int) -> Post:
        return await get_or_404(
            session, Post, post_id, "Post not found.", *PostService._load_options()
        )

    @staticmethod
    async def list_posts(
        session: AsyncSession,
        user: User,
        page: int = 1,
        search: Optional[str] = None,
    ) -> ResultPage:
        query = select(Post)
        if user.role != Role.SUPERADMIN.value:
            query = query.where(Post.author_id == user.id)
        if search:
            query = query.where(search_filter([Post.title], search))
        query = query.order_by(Post.id)
        return await paginate(session, query, page, settings.PAGE_SIZE, *PostService._load_options())

    @staticmethod
    async def posts_for_page(session: AsyncSession, slug: str) -> List[Post]:
        """Published posts of the page with ``slug``."""
        page = await PageService.get_page_by_slug(session, slug)
        if page is None:
            raise NotFoundError("Page slug not found.")

        result = await session.execute(
            select(Post)
            .where(Post.page_id == page.id, Post.status == PUBLISHED)
            .order_by(Post.id)
            .options(*PostService._load_options())
        )
        return list(result.scalars().all())

    @staticmethod
    async def _validate(session: AsyncSession, data: PostCreate) -> Category:
        errors = ErrorBag()
        await check_exists(session, errors, Page, "page_id", data.page_id)
        await check_exists(session, errors, Category, "category_id", data.category_id)
        errors.raise_if_any()

        category = await session.get(Category, data.category_id)
        if category.slug != "file" and not data.container:
            errors.add("container", "The container field is required.")
            errors.raise_if_any()

        if category.slug == "media" and not data.image_url:
            raise ConflictError("Image required for media category.")
        if category.slug == "journal" and not data.link_url:
            raise ConflictError("Link URL required for journal category.")
        if category.slug == "file" and not data.file_url:
            raise ConflictError("File required for file category.")
        return category

    @staticmethod
    def _check_owner(user: User, post: Post, action: str) -> None:
        if user.role != Role.SUPERADMIN.value and post.author_id != user.id:
            raise PermissionDeniedError(f"You are not authorized to {action} this post.")

    @staticmethod
    async def create_post(session: AsyncSession, user: User, data: PostCreate) -> Post:
        await PostService._validate(session, data)
        post = Post(author_id=user.id, **data.model_dump())
        session.add(post)
        await session.commit()
        return await PostService.get_post(session, post.id)

    @staticmethod
    async def update_post(session: AsyncSession, user: User, post_id: int, data: PostCreate) -> Post:
        post = await PostService.get_post(session, post_id)
        PostService._check_owner(user, post, "update")
        await PostService._validate(session, data)

        for field, value in data.model_dump().items():
            setattr(post, field, value)
        await session.commit()
        return await PostService.get_post(session, post.id)

    @staticmethod
    async def delete_post(session: AsyncSession, user: User, post_id: int) -> None:
        post = await PostService.get_post(session, post_id)
        PostService._check_owner(user, post, "delete")
        await session.delete(post)
        await session.commit()
        logger.info(f"Post {post_id} deleted by user {user.id}")
