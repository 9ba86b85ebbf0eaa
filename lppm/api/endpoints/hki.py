"""
HKI (intellectual property) endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.records import HKIImporter
from ...models.associations import author_hki
from ...models.hki import HKI
from ...models.user import User
from ...schemas.book import HKICreate, HKIRead
from ...services.hki_service import HKIService
from ...services.import_service import ImportService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.post("/import")
async def import_hki(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await ImportService.run(session, HKIImporter, file, reset_table)
    return responses.created(message="Data imported successfully.")


@router.get("/grouped-by-category")
async def hki_grouped_by_category(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
):
    """HKI counts per ``kategori`` (public)."""
    data = await grouped_counts(session, HKI, HKI.kategori, study_program_id)
    return responses.success(data, "Data retrieved successfully.")


@router.get("/chart-data")
async def hki_chart_data(
    year: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
):
    """HKI per study program, optionally for one application year (public)."""
    data = await chart_data(session, HKI, author_hki, "hki_id", HKI.tahun_permohonan, year)
    return responses.success(data, "HKI chart data retrieved successfully.")


@router.post("")
async def create_hki(
    hki_data: HKICreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    hki = await HKIService.create(session, hki_data)
    return responses.created(HKIRead.model_validate(hki), "Data created successfully.")


@router.get("")
async def list_hki(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    result = await HKIService.list(session, page, q or search)
    return responses.paginated(result, "Data retrieved successfully.", request.url, HKIRead)


@router.get("/{hki_id}")
async def get_hki(
    hki_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    hki = await HKIService.get(session, hki_id)
    return responses.success(HKIRead.model_validate(hki), "Data retrieved successfully.")


@router.patch("/{hki_id}")
async def update_hki(
    hki_id: int,
    hki_data: HKICreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    hki = await HKIService.update(session, hki_id, hki_data)
    return responses.success(HKIRead.model_validate(hki), "Data updated successfully.")


@router.delete("/{hki_id}")
async def delete_hki(
    hki_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await HKIService.delete(session, hki_id)
    return responses.success(message="Data deleted successfully.")
