"""
Google Scholar publication endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.records import GooglePublicationImporter
from ...models.associations import author_google_publication
from ...models.publication import GooglePublication
from ...models.user import User
from ...schemas.publication import GooglePublicationCreate, GooglePublicationRead
from ...services.google_publication_service import GooglePublicationService
from ...services.import_service import ImportService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.post("/import")
async def import_google_publications(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await ImportService.run(session, GooglePublicationImporter, file, reset_table)
    return responses.created(message="Google publications data imported successfully.")


@router.get("/grouped-by-accreditation")
async def google_publications_grouped(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    data = await grouped_counts(
        session, GooglePublication, GooglePublication.accreditation, study_program_id
    )
    return responses.success(data, "Google publications data retrieved successfully.")


@router.get("/chart-data")
async def google_publications_chart_data(
    year: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    data = await chart_data(
        session,
        GooglePublication,
        author_google_publication,
        "google_publication_id",
        GooglePublication.year,
        year,
    )
    return responses.success(data, "Google publications chart data retrieved successfully.")


@router.post("")
async def create_google_publication(
    publication_data: GooglePublicationCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication = await GooglePublicationService.create(session, publication_data)
    return responses.created(
        GooglePublicationRead.model_validate(publication),
        "Google publication data created successfully.",
    )


@router.get("")
async def list_google_publications(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Ordered by id; ``q`` matches title, journal or creators."""
    result = await GooglePublicationService.list(session, page, q or search)
    return responses.paginated(
        result, "Google publications data retrieved successfully.", request.url, GooglePublicationRead
    )


@router.get("/{publication_id}")
async def get_google_publication(
    publication_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication = await GooglePublicationService.get(session, publication_id)
    return responses.success(
        GooglePublicationRead.model_validate(publication),
        "Google publication data retrieved successfully.",
    )


@router.patch("/{publication_id}")
async def update_google_publication(
    publication_id: int,
    publication_data: GooglePublicationCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication = await GooglePublicationService.update(session, publication_id, publication_data)
    return responses.success(
        GooglePublicationRead.model_validate(publication),
        "Google publication data successfully updated.",
    )


@router.delete("/{publication_id}")
async def delete_google_publication(
    publication_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await GooglePublicationService.delete(session, publication_id)
    return responses.success(message="Google publication deleted successfully.")
