"""감독자-자원봉사자 배정 Pydantic 스키마.

Supervisor-volunteer assignment request/response schemas.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class SupervisorVolunteerCreate(BaseModel):
    """배정 생성 요청 스키마.

    Attributes:
        supervisor_id: 감독자 사용자 UUID (Supervisor user)
        volunteer_id: 자원봉사자 사용자 UUID (Volunteer user)
    """

    supervisor_id: UUID
    volunteer_id: UUID


class SupervisorVolunteerResponse(BaseModel):
    """배정 응답 스키마."""

    id: str
    supervisor_id: str
    volunteer_id: str
    is_active: bool
    created_at: datetime
