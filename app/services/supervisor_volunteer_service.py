"""감독자-자원봉사자 배정 서비스.

Supervisor-volunteer Service — Assigns volunteers to supervisors and
unassigns them, gated by SupervisorVolunteerPolicy.

A volunteer has at most one active supervisor: assigning a new supervisor
deactivates the previous assignment, and re-assigning a former pair
reactivates the existing row instead of creating a duplicate.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import SupervisorVolunteer, User
from app.policies.role_authority import RoleAuthority
from app.policies.supervisor_volunteer_policy import supervisor_volunteer_policy
from app.repositories.supervisor_volunteer_repository import supervisor_volunteer_repository
from app.repositories.user_repository import user_repository
from app.schemas.supervisor_volunteer import SupervisorVolunteerCreate, SupervisorVolunteerResponse
from app.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError


class SupervisorVolunteerService:
    """감독자-자원봉사자 배정 비즈니스 로직."""

    def _to_response(self, link: SupervisorVolunteer) -> SupervisorVolunteerResponse:
        return SupervisorVolunteerResponse(
            id=str(link.id),
            supervisor_id=str(link.supervisor_id),
            volunteer_id=str(link.volunteer_id),
            is_active=link.is_active,
            created_at=link.created_at,
        )

    async def _get_member(
        self,
        db: AsyncSession,
        user_id: UUID,
        organization_id: UUID,
        label: str,
    ) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id, organization_id)
        if user is None:
            raise NotFoundError(f"{label} not found")
        return user

    async def assign(
        self,
        db: AsyncSession,
        actor: User,
        data: SupervisorVolunteerCreate,
    ) -> SupervisorVolunteerResponse:
        """자원봉사자를 감독자에게 배정합니다.

        Assign a volunteer to a supervisor within the actor's organization.
        Volunteers may only assign themselves.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            actor: 요청 사용자 (Acting user)
            data: 배정 데이터 (supervisor_id, volunteer_id)

        Returns:
            SupervisorVolunteerResponse: 활성 배정 (The active assignment)

        Raises:
            ForbiddenError: 정책상 허용되지 않음 (Policy denied)
            NotFoundError: 사용자를 찾을 수 없음 (User not in organization)
            BadRequestError: 역할이 맞지 않음 (Wrong roles for the pair)
        """
        supervisor_volunteer_policy.authorize(actor, "create")

        authority: RoleAuthority = RoleAuthority(actor)
        if not (authority.is_admin or authority.is_supervisor) and data.volunteer_id != actor.id:
            raise ForbiddenError("Volunteers can only assign themselves")

        supervisor: User = await self._get_member(db, data.supervisor_id, actor.organization_id, "Supervisor")
        volunteer: User = await self._get_member(db, data.volunteer_id, actor.organization_id, "Volunteer")
        if not (supervisor.is_supervisor or supervisor.is_admin):
            raise BadRequestError("Assigned supervisor must be a supervisor or admin")
        if not volunteer.is_volunteer:
            raise BadRequestError("Only volunteers can be assigned to a supervisor")

        # 기존 활성 배정 처리 — Deactivate the volunteer's current assignment
        current: SupervisorVolunteer | None = await supervisor_volunteer_repository.get_active_for_volunteer(
            db, volunteer.id
        )
        if current is not None:
            if current.supervisor_id == supervisor.id:
                return self._to_response(current)
            current.is_active = False

        link: SupervisorVolunteer | None = await supervisor_volunteer_repository.get_pair(
            db, supervisor.id, volunteer.id
        )
        if link is None:
            link = SupervisorVolunteer(supervisor_id=supervisor.id, volunteer_id=volunteer.id, is_active=True)
            db.add(link)
        else:
            link.is_active = True

        await db.flush()
        await db.refresh(link)
        return self._to_response(link)

    async def unassign(
        self,
        db: AsyncSession,
        actor: User,
        link_id: UUID,
    ) -> SupervisorVolunteerResponse:
        """배정을 해제합니다 (행은 이력으로 유지).

        Deactivate an assignment. Volunteers are not allowed to unassign.

        Raises:
            ForbiddenError: 정책상 허용되지 않음 (Policy denied)
            NotFoundError: 배정을 찾을 수 없음 (Assignment not in organization)
        """
        supervisor_volunteer_policy.authorize(actor, "unassign")

        link: SupervisorVolunteer | None = await supervisor_volunteer_repository.get_in_org(
            db, link_id, actor.organization_id
        )
        if link is None:
            raise NotFoundError("Supervisor volunteer assignment not found")

        link.is_active = False
        await db.flush()
        await db.refresh(link)
        return self._to_response(link)


# 싱글턴 인스턴스 — Singleton instance
supervisor_volunteer_service: SupervisorVolunteerService = SupervisorVolunteerService()
