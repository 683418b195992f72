"""감독자-자원봉사자 배정 레포지토리.

Supervisor-volunteer Repository — Queries for supervisor/volunteer assignments.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import SupervisorVolunteer, User
from app.repositories.base import BaseRepository


class SupervisorVolunteerRepository(BaseRepository[SupervisorVolunteer]):
    """supervisor_volunteers 테이블 레포지토리.

    Repository handling database queries for the supervisor_volunteers table.
    """

    def __init__(self) -> None:
        super().__init__(SupervisorVolunteer)

    async def get_active_for_volunteer(
        self,
        db: AsyncSession,
        volunteer_id: UUID,
    ) -> SupervisorVolunteer | None:
        """자원봉사자의 현재 활성 배정을 조회합니다.

        Retrieve the volunteer's current (active) supervisor assignment.
        """
        query: Select = select(SupervisorVolunteer).where(
            SupervisorVolunteer.volunteer_id == volunteer_id,
            SupervisorVolunteer.is_active.is_(True),
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_pair(
        self,
        db: AsyncSession,
        supervisor_id: UUID,
        volunteer_id: UUID,
    ) -> SupervisorVolunteer | None:
        result = await db.execute(
            select(SupervisorVolunteer).where(
                SupervisorVolunteer.supervisor_id == supervisor_id,
                SupervisorVolunteer.volunteer_id == volunteer_id,
            )
        )
        return result.scalars().first()

    async def get_in_org(
        self,
        db: AsyncSession,
        record_id: UUID,
        organization_id: UUID,
    ) -> SupervisorVolunteer | None:
        """조직 범위 내에서 배정을 조회합니다 (자원봉사자 소속 기준).

        Retrieve an assignment whose volunteer belongs to the organization.
        """
        query: Select = (
            select(SupervisorVolunteer)
            .join(User, SupervisorVolunteer.volunteer_id == User.id)
            .where(
                SupervisorVolunteer.id == record_id,
                User.organization_id == organization_id,
            )
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
supervisor_volunteer_repository: SupervisorVolunteerRepository = SupervisorVolunteerRepository()
