"""
Community service (pengabdian) grant endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...imports.grant import ServiceImporter
from ...models.associations import author_service
from ...models.grant import Service
from ...models.user import User
from ...schemas.grant import GrantCreate, GrantRead
from ...services.grant_service import ServiceService
from ...services.import_service import ImportService
from ...services.stats_service import chart_data, grouped_counts
from ..dependencies.auth import require_records_access

router = APIRouter()


@router.post("/import")
async def import_services(
    file: UploadFile = File(...),
    reset_table: bool = Form(False),
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await ImportService.run(session, ServiceImporter, file, reset_table)
    return responses.created(message="Service data imported successfully.")


@router.get("/grouped-by-scheme")
async def services_grouped_by_scheme(
    study_program_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    data = await grouped_counts(
        session,
        Service,
        Service.nama_singkat_skema,
        study_program_id,
        funds_column=Service.dana_disetujui,
    )
    return responses.success(data, "Service data retrieved successfully.")


@router.get("/chart-data")
async def services_chart_data(
    year: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    data = await chart_data(
        session, Service, author_service, "service_id", Service.thn_pelaksanaan_kegiatan, year
    )
    return responses.success(data, "Service chart data retrieved successfully.")


@router.post("")
async def create_service(
    service_data: GrantCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    service = await ServiceService.create(session, service_data)
    return responses.created(GrantRead.model_validate(service), "Service data created successfully.")


@router.get("")
async def list_services(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    result = await ServiceService.list(session, page, q or search)
    return responses.paginated(result, "Service data retrieved successfully.", request.url, GrantRead)


@router.get("/{service_id}")
async def get_service(
    service_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    service = await ServiceService.get(session, service_id)
    return responses.success(GrantRead.model_validate(service), "Service data retrieved successfully.")


@router.patch("/{service_id}")
async def update_service(
    service_id: int,
    service_data: GrantCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    service = await ServiceService.update(session, service_id, service_data)
    return responses.success(GrantRead.model_validate(service), "Service data successfully updated.")


@router.delete("/{service_id}")
async def delete_service(
    service_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_records_access),
):
    await ServiceService.delete(session, service_id)
    return responses.success(message="Service deleted successfully.")
