"""마일리지 단가 레포지토리.

Mileage Rate Repository — CRUD queries for mileage_rates.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import MileageRate
from app.repositories.base import BaseRepository


class MileageRateRepository(BaseRepository[MileageRate]):
    """마일리지 단가 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(MileageRate)

    async def get_by_org(self, db: AsyncSession, organization_id: UUID) -> list[MileageRate]:
        # 최신 적용일 우선 — Most recent effective date first
        query: Select = (
            select(MileageRate)
            .where(MileageRate.organization_id == organization_id)
            .order_by(MileageRate.effective_date.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
mileage_rate_repository: MileageRateRepository = MileageRateRepository()
