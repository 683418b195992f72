"""관리자 감독자-자원봉사자 라우터 — 배정 및 배정 해제.

Admin Supervisor-volunteer Router — Assign volunteers to supervisors and
unassign them. Access is decided by SupervisorVolunteerPolicy inside the
service, so any authenticated member reaches the handlers.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.supervisor_volunteer import SupervisorVolunteerCreate, SupervisorVolunteerResponse
from app.services.supervisor_volunteer_service import supervisor_volunteer_service

router: APIRouter = APIRouter()


@router.post("", response_model=SupervisorVolunteerResponse, status_code=201)
async def create_supervisor_volunteer(
    data: SupervisorVolunteerCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> SupervisorVolunteerResponse:
    """자원봉사자를 감독자에게 배정합니다.

    Assign a volunteer to a supervisor. Admins, supervisors and volunteers
    may create assignments; volunteers only for themselves.
    """
    result: SupervisorVolunteerResponse = await supervisor_volunteer_service.assign(db, current_user, data)
    await db.commit()
    return result


@router.patch("/{link_id}/unassign", response_model=SupervisorVolunteerResponse)
async def unassign_supervisor_volunteer(
    link_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> SupervisorVolunteerResponse:
    """배정을 해제합니다. 자원봉사자는 403."""
    result: SupervisorVolunteerResponse = await supervisor_volunteer_service.unassign(db, current_user, link_id)
    await db.commit()
    return result
