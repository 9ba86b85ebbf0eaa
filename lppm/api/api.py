"""
API router.
"""
from fastapi import APIRouter

from .endpoints import (
    authors,
    books,
    categories,
    google_publications,
    hki,
    pages,
    posts,
    publications,
    researches,
    services,
    study_programs,
    users,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(authors.router, prefix="/authors", tags=["authors"])
api_router.include_router(study_programs.router, prefix="/study-programs", tags=["study-programs"])
api_router.include_router(books.router, prefix="/books", tags=["books"])
api_router.include_router(hki.router, prefix="/hki", tags=["hki"])
api_router.include_router(publications.router, prefix="/publications", tags=["publications"])
api_router.include_router(
    google_publications.router,
    prefix="/google-publications",
    tags=["google-publications"]
)
api_router.include_router(researches.router, prefix="/researches", tags=["researches"])
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(pages.router, prefix="/pages", tags=["pages"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
