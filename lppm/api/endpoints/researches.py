"""
Research grant endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.grant import ResearchImporter
from ...models.associations import author_research
from ...models.grant import Research
from ...models.user import User
from ...schemas.grant import GrantCreate, GrantRead
from ...services.grant_service import ResearchService
from ...services.import_service import ImportService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.post("/import")
async def import_researches(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Import SIMLITABMAS research rows; every NIDN must belong to a known author."""
    await ImportService.run(session, ResearchImporter, file, reset_table)
    return responses.created(message="Research data imported successfully.")


@router.get("/grouped-by-scheme")
async def researches_grouped_by_scheme(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    """Count and total approved funds per short scheme name."""
    data = await grouped_counts(
        session,
        Research,
        Research.nama_singkat_skema,
        study_program_id,
        funds_column=Research.dana_disetujui,
    )
    return responses.success(data, "Research data retrieved successfully.")


@router.get("/chart-data")
async def researches_chart_data(
    year: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    data = await chart_data(
        session, Research, author_research, "research_id", Research.thn_pelaksanaan_kegiatan, year
    )
    return responses.success(data, "Research chart data retrieved successfully.")


@router.post("")
async def create_research(
    research_data: GrantCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    research = await ResearchService.create(session, research_data)
    return responses.created(GrantRead.model_validate(research), "Research data created successfully.")


@router.get("")
async def list_researches(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    result = await ResearchService.list(session, page, q or search)
    return responses.paginated(result, "Research data retrieved successfully.", request.url, GrantRead)


@router.get("/{research_id}")
async def get_research(
    research_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    research = await ResearchService.get(session, research_id)
    return responses.success(GrantRead.model_validate(research), "Research data retrieved successfully.")


@router.patch("/{research_id}")
async def update_research(
    research_id: int,
    research_data: GrantCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    research = await ResearchService.update(session, research_id, research_data)
    return responses.success(GrantRead.model_validate(research), "Research data successfully updated.")


@router.delete("/{research_id}")
async def delete_research(
    research_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await ResearchService.delete(session, research_id)
    return responses.success(message="Research deleted successfully.")
