"""
Study program endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...core import responses
from ...db.database import get_session
from ...models.user import User
from ...schemas.author import StudyProgramCreate, StudyProgramRead
from ...services.author_service import StudyProgramService
from ..dependencies.auth import require_superadmin

router = APIRouter()


@router.post("")
async def create_study_program(
    study_program_data: StudyProgramCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    study_program = await StudyProgramService.create_study_program(session, study_program_data)
    return responses.created(
        StudyProgramRead.model_validate(study_program), "Study program created successfully."
    )


@router.get("")
async def list_study_programs(
    request: Request,
    page: int = 1,
    q: Optional[str] = None,
    search: Optional[str] = None,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    result = await StudyProgramService.list_study_programs(session, page, q or search)
    return responses.paginated(
        result, "Study programs retrieved successfully.", request.url, StudyProgramRead
    )


@router.get("/{study_program_id}")
async def get_study_program(
    study_program_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    study_program = await StudyProgramService.get_study_program(session, study_program_id)
    return responses.success(
        StudyProgramRead.model_validate(study_program), "Study program retrieved successfully."
    )


@router.patch("/{study_program_id}")
async def update_study_program(
    study_program_id: int,
    study_program_data: StudyProgramCreate,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    study_program = await StudyProgramService.update_study_program(
        session, study_program_id, study_program_data
    )
    return responses.success(
        StudyProgramRead.model_validate(study_program), "Study program updated successfully."
    )


@router.delete("/{study_program_id}")
async def delete_study_program(
    study_program_id: int,
    session: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_superadmin),
):
    """Delete a study program; its authors remain without one."""
    await StudyProgramService.delete_study_program(session, study_program_id)
    return responses.success(message="Study program deleted successfully.")
