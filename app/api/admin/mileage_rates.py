"""관리자 마일리지 단가 라우터.

Admin Mileage Rate Router — List and create the organization's mileage
reimbursement rates.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models.user import User
from app.schemas.organization import MileageRateCreate, MileageRateResponse
from app.services.mileage_rate_service import mileage_rate_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[MileageRateResponse])
async def list_mileage_rates(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[MileageRateResponse]:
    """마일리지 단가 목록 (최신 적용일 순)."""
    return await mileage_rate_service.list_rates(db, current_user.organization_id)


@router.post("", response_model=MileageRateResponse, status_code=201)
async def create_mileage_rate(
    data: MileageRateCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MileageRateResponse:
    """마일리지 단가를 추가합니다."""
    result: MileageRateResponse = await mileage_rate_service.create_rate(db, current_user.organization_id, data)
    await db.commit()
    return result
