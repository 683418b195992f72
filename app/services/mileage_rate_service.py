"""마일리지 단가 서비스.

Mileage Rate Service — List and create reimbursement rates for an organization.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import MileageRate
from app.repositories.mileage_rate_repository import mileage_rate_repository
from app.schemas.organization import MileageRateCreate, MileageRateResponse


class MileageRateService:
    """마일리지 단가 비즈니스 로직."""

    def _to_response(self, rate: MileageRate) -> MileageRateResponse:
        return MileageRateResponse(
            id=str(rate.id),
            amount=rate.amount,
            effective_date=rate.effective_date,
            is_active=rate.is_active,
        )

    async def list_rates(self, db: AsyncSession, organization_id: UUID) -> list[MileageRateResponse]:
        rates: list[MileageRate] = await mileage_rate_repository.get_by_org(db, organization_id)
        return [self._to_response(r) for r in rates]

    async def create_rate(
        self,
        db: AsyncSession,
        organization_id: UUID,
        data: MileageRateCreate,
    ) -> MileageRateResponse:
        rate: MileageRate = await mileage_rate_repository.create(
            db, {"organization_id": organization_id, **data.model_dump()}
        )
        return self._to_response(rate)


# 싱글턴 인스턴스 — Singleton instance
mileage_rate_service: MileageRateService = MileageRateService()
