"""
Page, category and post schemas.
"""
from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, Field

from .common import NullableStr, Payload, ReadModel, Timestamps

PostStatus = Literal["draft", "published"]


class PageCreate(Payload):
    title: Annotated[str, Field(min_length=3, max_length=100)]
    parent_id: Optional[int] = None


class PageRead(Timestamps):
    id: int
    title: str
    slug: str
    link: str
    parent_id: Optional[int] = None


class CategoryCreate(Payload):
    name: Annotated[str, Field(min_length=3, max_length=50)]


class CategoryRead(Timestamps):
    id: int
    name: str
    slug: str


class CategoryOption(ReadModel):
    id: int
    name: str


class PostCreate(Payload):
    title: Annotated[str, Field(min_length=3, max_length=50)]
    container: Optional[str] = None
    page_id: int
    category_id: int
    image_url: NullableStr(255) = None
    file_url: NullableStr(255) = None
    link_url: NullableStr(255) = None
    status: PostStatus


class PostRead(Timestamps):
    id: int
    title: str
    container: Optional[str] = None
    author_id: int
    page_id: int
    category_id: int
    image_url: Optional[str] = None
    file_url: Optional[str] = None
    link_url: Optional[str] = None
    status: str


class PostListItem(BaseModel):
    """Post row as shown in listings, with the names of its relations."""
    id: int
    title: str
    container: Optional[str] = None
    category_id: int
    category_slug: Optional[str] = None
    page_title: Optional[str] = None
    author_name: Optional[str] = None
    image_url: Optional[str] = None
    file_url: Optional[str] = None
    link_url: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_post(cls, post) -> "PostListItem":
        return cls(
            id=post.id,
            title=post.title,
            container=post.container,
            category_id=post.category_id,
            category_slug=post.category.slug if post.category else None,
            page_title=post.page.title if post.page else None,
            author_name=post.author.name if post.author else None,
            image_url=post.image_url,
            file_url=post.file_url,
            link_url=post.link_url,
            status=post.status,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
