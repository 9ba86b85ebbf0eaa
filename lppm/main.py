"""
Main FastAPI application.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .core import responses
from .core.config import settings
from .core.exceptions import field_errors
from .db.database import async_session, close_db, init_db
from .services.cms_service import CategoryService
from .services.user_service import UserService

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    await init_db()
    async with async_session() as session:
        await UserService.seed_first_superadmin(session)
        await CategoryService.seed_defaults(session)
    logger.info("Database connection established and tables verified")

    yield
    # Shutdown
    await close_db()
    logger.info("Database connections closed")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return responses.error(
        str(exc.detail),
        exc.status_code,
        errors=getattr(exc, "errors", None),
        failures=getattr(exc, "failures", None),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return responses.error(
        "The given data was invalid.",
        422,
        errors=field_errors(exc.errors()),
    )


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Research and community service records for the LPPM portal",
        version=settings.APP_VERSION,
        lifespan=lifespan,
        openapi_url=f"{settings.API_STR}/openapi.json"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Include API router
    app.include_router(api_router, prefix=settings.API_STR)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "documentation": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": settings.APP_VERSION}

    return app


# Create the application instance
app = create_application()
