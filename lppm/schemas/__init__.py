"""
Pydantic schemas package.
"""
from .author import AuthorCreate, AuthorRead, StudyProgramCreate, StudyProgramRead
from .book import BookCreate, BookRead, HKICreate, HKIRead
from .cms import (
    CategoryCreate,
    CategoryOption,
    CategoryRead,
    PageCreate,
    PageRead,
    PostCreate,
    PostListItem,
    PostRead,
)
from .common import AuthorSummary, StudyProgramSummary
from .grant import GrantCreate, GrantRead
from .publication import (
    GooglePublicationCreate,
    GooglePublicationPayload,
    GooglePublicationRead,
    PublicationPayload,
    PublicationRead,
    ScopusPublicationPayload,
    parse_publication,
    render_publication,
)
from .user import LoginRequest, LoginUser, UserCreate, UserRead, UserUpdate

__all__ = [
    # Author schemas
    "AuthorCreate",
    "AuthorRead",
    "AuthorSummary",
    "StudyProgramCreate",
    "StudyProgramRead",
    "StudyProgramSummary",
    # Output records
    "BookCreate",
    "BookRead",
    "HKICreate",
    "HKIRead",
    "GrantCreate",
    "GrantRead",
    "GooglePublicationCreate",
    "GooglePublicationPayload",
    "GooglePublicationRead",
    "PublicationPayload",
    "PublicationRead",
    "ScopusPublicationPayload",
    "parse_publication",
    "render_publication",
    # Site content
    "CategoryCreate",
    "CategoryOption",
    "CategoryRead",
    "PageCreate",
    "PageRead",
    "PostCreate",
    "PostListItem",
    "PostRead",
    # User schemas
    "LoginRequest",
    "LoginUser",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
