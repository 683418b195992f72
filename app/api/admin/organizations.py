"""관리자 조직 라우터 — 조직 생성/조회/수정/삭제, 기본 분류, 첨부파일.

Admin Organization Router — Create, retrieve, update and delete the
organization, seed its default taxonomy and upload its attachments.
Reads are open to any member; writes require a CASA admin.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, require_admin
from app.database import get_db
from app.models.organization import Organization
from app.models.taxonomy import ContactTypeGroup, HearingType
from app.models.user import User
from app.repositories.taxonomy_repository import contact_type_group_repository, hearing_type_repository
from app.schemas.organization import (
    ContactTypeGroupResponse,
    ContactTypeResponse,
    HearingTypeResponse,
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
    SeedDefaultsResponse,
)
from app.services.organization_service import organization_service

router: APIRouter = APIRouter()


@router.post("", response_model=OrganizationResponse, status_code=201)
async def create_organization(
    data: OrganizationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> OrganizationResponse:
    """새 조직을 생성합니다.

    Create a new organization. The slug is derived from the name.
    """
    org: Organization = await organization_service.create_organization(db, data)
    result: OrganizationResponse = await organization_service.to_response(db, org)
    await db.commit()
    return result


@router.get("/me", response_model=OrganizationResponse)
async def get_current_organization(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> OrganizationResponse:
    """현재 조직 정보를 조회합니다.

    Retrieve the current organization with its user and case contact counts.
    """
    org: Organization = await organization_service.get(db, current_user.organization_id)
    return await organization_service.to_response(db, org)


@router.put("/me", response_model=OrganizationResponse)
async def update_current_organization(
    data: OrganizationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> OrganizationResponse:
    """현재 조직 정보를 수정합니다.

    Update the current organization. Returns 422 with per-field errors
    (including the Twilio base error) when validation fails.
    """
    org: Organization = await organization_service.update_organization(
        db, current_user.organization_id, data
    )
    result: OrganizationResponse = await organization_service.to_response(db, org)
    await db.commit()
    return result


@router.delete("/me", status_code=204)
async def delete_current_organization(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> None:
    """현재 조직과 모든 소속 데이터를 삭제합니다."""
    await organization_service.delete_organization(db, current_user.organization_id)
    await db.commit()


@router.post("/me/defaults", response_model=SeedDefaultsResponse)
async def generate_defaults(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> SeedDefaultsResponse:
    """기본 연락 유형과 심리 유형을 생성합니다.

    Seed the default contact types and hearing types. Safe to call again:
    only missing rows are created.
    """
    counts: dict[str, int] = await organization_service.generate_contact_types_and_hearing_types(
        db, current_user.organization_id
    )
    await db.commit()
    return SeedDefaultsResponse(**counts)


@router.get("/me/contact-type-groups", response_model=list[ContactTypeGroupResponse])
async def list_contact_type_groups(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[ContactTypeGroupResponse]:
    """연락 유형 그룹 목록 (하위 유형 포함)."""
    groups: list[ContactTypeGroup] = await contact_type_group_repository.get_by_org_with_types(
        db, current_user.organization_id
    )
    return [
        ContactTypeGroupResponse(
            id=str(g.id),
            name=g.name,
            active=g.active,
            contact_types=[
                ContactTypeResponse(id=str(t.id), name=t.name, active=t.active)
                for t in sorted(g.contact_types, key=lambda t: t.name)
            ],
        )
        for g in groups
    ]


@router.get("/me/hearing-types", response_model=list[HearingTypeResponse])
async def list_hearing_types(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[HearingTypeResponse]:
    """심리 유형 목록."""
    hearing_types = await hearing_type_repository.get_all(
        db, organization_id=current_user.organization_id, order_by=HearingType.name
    )
    return [HearingTypeResponse(id=str(h.id), name=h.name, active=h.active) for h in hearing_types]


@router.put("/me/logo", response_model=OrganizationResponse)
async def upload_logo(
    file: UploadFile,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> OrganizationResponse:
    """조직 로고를 업로드합니다 (multipart/form-data).

    Upload or replace the organization logo.
    """
    org: Organization = await organization_service.attach_logo(
        db,
        current_user.organization_id,
        filename=file.filename or "logo",
        content_type=file.content_type or "",
        data=await file.read(),
    )
    result: OrganizationResponse = await organization_service.to_response(db, org)
    await db.commit()
    return result


@router.put("/me/court-report-template", response_model=OrganizationResponse)
async def upload_court_report_template(
    file: UploadFile,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> OrganizationResponse:
    """법원 보고서 템플릿(.docx)을 업로드합니다."""
    org: Organization = await organization_service.attach_court_report_template(
        db,
        current_user.organization_id,
        filename=file.filename or "court_report_template.docx",
        content_type=file.content_type or "",
        data=await file.read(),
    )
    result: OrganizationResponse = await organization_service.to_response(db, org)
    await db.commit()
    return result
