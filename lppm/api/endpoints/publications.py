"""
Publication endpoints (Google Scholar and Scopus in one table).
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Request, UploadFile
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.records import PublicationGoogleImporter, ScopusImporter
from ...models.associations import author_publication
from ...models.publication import GOOGLE, SCOPUS, Publication
from ...models.user import User
from ...schemas.publication import PublicationCategory, parse_publication, render_publication
from ...services.import_service import ImportService
from ...services.publication_service import PublicationService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()

IMPORTERS = {
    GOOGLE: PublicationGoogleImporter,
    SCOPUS: ScopusImporter,
}


@router.post("/import")
async def import_publications(
    category: PublicationCategory = Form(...),
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Import one category of publications; headings on row 5."""
    await ImportService.run(session, IMPORTERS[category], file, reset_table)
    return responses.created(message="Publications data imported successfully.")


@router.get("/grouped")
@router.get("/grouped-by-accreditation")
async def publications_grouped(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Counts per accreditation (google) or quartile (scopus)."""
    ranking = func.coalesce(
        func.nullif(Publication.accreditation, ""), func.nullif(Publication.quartile, "")
    )
    data = await grouped_counts(session, Publication, ranking, study_program_id, skip_empty=True)
    return responses.success(data, "Publications data retrieved successfully.")


@router.get("/chart-data")
async def publications_chart_data(
    year: Optional[str] = None,
    category: Optional[PublicationCategory] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    condition = Publication.category == category if category else None
    data = await chart_data(
        session, Publication, author_publication, "publication_id", Publication.year, year, condition
    )
    return responses.success(data, "Publications chart data retrieved successfully.")


@router.post("")
async def create_publication(
    payload: Dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication_data = parse_publication(payload)
    publication = await PublicationService.create(session, publication_data)
    return responses.created(render_publication(publication), "Publication data created successfully.")


@router.get("")
async def list_publications(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    category: Optional[PublicationCategory] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Latest first, optionally narrowed to one ``category``.

    The searchable columns depend on the category: google matches title,
    journal and creators; scopus matches identifier, title, publication name
    and creators; without a category only title and creators are searched.
    """
    result = await PublicationService.list(session, page, q or search, category=category)
    result.items = [render_publication(publication) for publication in result.items]
    return responses.paginated(result, "Publications data retrieved successfully.", request.url)


@router.get("/{publication_id}")
async def get_publication(
    publication_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication = await PublicationService.get(session, publication_id)
    return responses.success(render_publication(publication), "Publication data retrieved successfully.")


@router.patch("/{publication_id}")
async def update_publication(
    publication_id: int,
    payload: Dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    publication_data = parse_publication(payload)
    publication = await PublicationService.update(session, publication_id, publication_data)
    return responses.success(render_publication(publication), "Publication data successfully updated.")


@router.delete("/{publication_id}")
async def delete_publication(
    publication_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await PublicationService.delete(session, publication_id)
    return responses.success(message="Publication deleted successfully.")
