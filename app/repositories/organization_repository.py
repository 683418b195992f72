"""조직 레포지토리 — 조직 CRUD 및 집계 쿼리.

Organization Repository — CRUD and aggregate queries for organizations.
Extends BaseRepository with lookups by name/slug and the counters shown
on the organization dashboard.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.casa_case import CasaCase, CaseAssignment, CaseContact
from app.models.organization import Organization
from app.models.user import User
from app.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    """조직 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the casa_orgs table.
    """

    def __init__(self) -> None:
        super().__init__(Organization)

    async def name_taken(
        self,
        db: AsyncSession,
        name: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        """다른 조직이 같은 이름을 사용 중인지 확인합니다 (대소문자 구분).

        Check whether another organization already uses this exact name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            name: 확인할 이름 (Name to check, exact match)
            exclude_id: 제외할 조직 ID — 수정 시 자기 자신 (Organization to ignore on update)

        Returns:
            bool: 사용 중 여부 (Whether the name is taken)
        """
        query: Select = select(func.count()).select_from(Organization).where(Organization.name == name)
        if exclude_id is not None:
            query = query.where(Organization.id != exclude_id)
        return ((await db.execute(query)).scalar() or 0) > 0

    async def slug_taken(self, db: AsyncSession, slug: str) -> bool:
        return await self.exists(db, {"slug": slug})

    async def count_users(self, db: AsyncSession, organization_id: UUID) -> int:
        """조직 소속 사용자 수 — 호출 시점의 DB 상태 기준 (no caching)."""
        query: Select = (
            select(func.count())
            .select_from(User)
            .where(User.organization_id == organization_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def count_case_contacts(self, db: AsyncSession, organization_id: UUID) -> int:
        """조직의 전체 케이스 연락 기록 수를 한 번의 조인 쿼리로 집계합니다.

        Count case contacts across all of the organization's cases with a
        single join (case_contacts ⋈ casa_cases).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            organization_id: 조직 ID (Organization UUID)

        Returns:
            int: 연락 기록 수 (Number of case contacts)
        """
        query: Select = (
            select(func.count(CaseContact.id))
            .join(CasaCase, CaseContact.casa_case_id == CasaCase.id)
            .where(CasaCase.organization_id == organization_id)
        )
        return (await db.execute(query)).scalar() or 0

    async def get_case_assignments(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> list[CaseAssignment]:
        """조직 사용자들을 통해 케이스 배정 목록을 조회합니다.

        Case assignments reachable through the organization's users.
        """
        query: Select = (
            select(CaseAssignment)
            .join(User, CaseAssignment.volunteer_id == User.id)
            .where(User.organization_id == organization_id)
            .order_by(CaseAssignment.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
organization_repository: OrganizationRepository = OrganizationRepository()
