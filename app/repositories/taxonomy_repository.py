"""연락 유형/심리 유형 레포지토리.

Taxonomy Repository — Queries for contact type groups, contact types and
hearing types scoped to an organization.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.taxonomy import ContactType, ContactTypeGroup, HearingType
from app.repositories.base import BaseRepository


class ContactTypeGroupRepository(BaseRepository[ContactTypeGroup]):
    """연락 유형 그룹 레포지토리.

    Repository for contact_type_groups (and their contact_types).
    """

    def __init__(self) -> None:
        super().__init__(ContactTypeGroup)

    async def get_by_org_with_types(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> list[ContactTypeGroup]:
        """조직의 그룹 목록을 하위 유형과 함께 이름순으로 조회합니다.

        Retrieve an organization's groups with contact types eager-loaded,
        ordered by name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            organization_id: 조직 ID (Organization UUID)

        Returns:
            list[ContactTypeGroup]: 그룹 목록 (Groups with contact_types loaded)
        """
        query: Select = (
            select(ContactTypeGroup)
            .options(selectinload(ContactTypeGroup.contact_types))
            .where(ContactTypeGroup.organization_id == organization_id)
            .order_by(ContactTypeGroup.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_pairs(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> list[tuple[str, str]]:
        """(그룹 이름, 유형 이름) 쌍을 정렬해 반환합니다.

        Return sorted (group name, contact type name) pairs for the organization.
        """
        query: Select = (
            select(ContactTypeGroup.name, ContactType.name)
            .join(ContactType, ContactType.contact_type_group_id == ContactTypeGroup.id)
            .where(ContactTypeGroup.organization_id == organization_id)
        )
        rows = (await db.execute(query)).all()
        return sorted((group, contact_type) for group, contact_type in rows)


class HearingTypeRepository(BaseRepository[HearingType]):
    """심리 유형 레포지토리.

    Repository for hearing_types.
    """

    def __init__(self) -> None:
        super().__init__(HearingType)

    async def get_names(self, db: AsyncSession, organization_id: UUID) -> list[str]:
        result = await db.execute(
            select(HearingType.name)
            .where(HearingType.organization_id == organization_id)
            .order_by(HearingType.name)
        )
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instances
contact_type_group_repository: ContactTypeGroupRepository = ContactTypeGroupRepository()
hearing_type_repository: HearingTypeRepository = HearingTypeRepository()
