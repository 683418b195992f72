"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - organizations: 조직 관리, 기본 분류, 첨부파일
      (Organization management, default taxonomy, attachments)
    - supervisor_volunteers: 감독자-자원봉사자 배정 (Supervisor/volunteer assignments)
    - mileage_rates: 마일리지 단가 (Mileage reimbursement rates)
"""

from fastapi import APIRouter

from app.api.admin.mileage_rates import router as mileage_rates_router
from app.api.admin.organizations import router as organizations_router
from app.api.admin.supervisor_volunteers import router as supervisor_volunteers_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(organizations_router, prefix="/organizations", tags=["Organizations"])
admin_router.include_router(
    supervisor_volunteers_router, prefix="/supervisor-volunteers", tags=["Supervisor Volunteers"]
)
admin_router.include_router(mileage_rates_router, prefix="/mileage-rates", tags=["Mileage Rates"])
