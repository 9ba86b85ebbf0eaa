"""
Database models package.
"""
from .associations import (
    AUTHOR_LINK_TABLES,
    author_book,
    author_google_publication,
    author_hki,
    author_publication,
    author_research,
    author_service,
)
from .author import Author, StudyProgram
from .book import Book
from .cms import Category, Page, Post
from .grant import GRANT_FIELDS, Research, Service
from .hki import HKI
from .publication import GooglePublication, Publication
from .user import RevokedToken, User

__all__ = [
    "AUTHOR_LINK_TABLES",
    "author_book",
    "author_google_publication",
    "author_hki",
    "author_publication",
    "author_research",
    "author_service",
    "Author",
    "StudyProgram",
    "Book",
    "Category",
    "Page",
    "Post",
    "GRANT_FIELDS",
    "Research",
    "Service",
    "HKI",
    "GooglePublication",
    "Publication",
    "RevokedToken",
    "User",
]
