"""조직 서비스 — 조직 생성/수정/삭제, 집계, 첨부파일, 기본 분류 생성.

Organization Service — Business logic for the organization aggregate.
Covers validated create/update, cascade delete, derived counters,
logo / court report template attachments and default taxonomy seeding.
"""

from pathlib import Path
from typing import Any, Awaitable
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.casa_case import CaseAssignment
from app.models.organization import Organization
from app.repositories.organization_repository import organization_repository
from app.schemas.organization import OrganizationCreate, OrganizationResponse, OrganizationUpdate
from app.services.storage_service import storage_service
from app.services.taxonomy_seeder import taxonomy_seeder
from app.utils.exceptions import BadRequestError, NotFoundError, ValidationError
from app.utils.slug import derive_slug, with_suffix
from app.validators.organization_validator import TAKEN_ERROR, organization_validator

# 허용 콘텐츠 타입 — Accepted attachment content types
LOGO_CONTENT_TYPES: frozenset[str] = frozenset({"image/png", "image/jpeg", "image/gif", "image/svg+xml", "image/webp"})
TEMPLATE_CONTENT_TYPES: frozenset[str] = frozenset({
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

# 슬러그 충돌 시 최대 시도 횟수 — Max attempts when resolving slug collisions
_MAX_SLUG_ATTEMPTS: int = 50


class OrganizationService:
    """조직 관련 비즈니스 로직을 처리하는 서비스.

    Service handling organization business logic.
    """

    async def get(self, db: AsyncSession, organization_id: UUID) -> Organization:
        """조직을 조회합니다. 없으면 NotFoundError.

        Raises:
            NotFoundError: 조직을 찾을 수 없을 때 (Organization not found)
        """
        org: Organization | None = await organization_repository.get_by_id(db, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")
        return org

    async def _unique_slug(self, db: AsyncSession, name: str) -> str:
        base: str = derive_slug(name) or "casa"
        for attempt in range(1, _MAX_SLUG_ATTEMPTS + 1):
            candidate: str = with_suffix(base, attempt)
            if not await organization_repository.slug_taken(db, candidate):
                return candidate
        raise ValidationError({"name": ["could not generate a unique slug"]})

    async def _unique_or_raise(
        self,
        db: AsyncSession,
        pending: Awaitable[Organization],
        name: str | None,
        exclude_id: UUID | None = None,
    ) -> Organization:
        # 이름 고유 인덱스 위반만 검증 오류로 변환 — Only a lost race on the name
        # becomes the pre-check's validation error; other integrity errors propagate
        try:
            return await pending
        except IntegrityError:
            await db.rollback()
            if name is not None and await organization_repository.name_taken(db, name, exclude_id=exclude_id):
                raise ValidationError({"name": [TAKEN_ERROR]})
            raise

    async def create_organization(
        self,
        db: AsyncSession,
        data: OrganizationCreate,
    ) -> Organization:
        """새 조직을 생성합니다.

        Create an organization. The name is validated for presence and
        uniqueness, the phone number format is checked, and the slug is
        derived from the name once.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 조직 생성 데이터 (Organization creation data)

        Returns:
            Organization: 생성된 조직 (Created organization)

        Raises:
            ValidationError: 검증 실패 (Validation failed)
        """
        values: dict[str, Any] = data.model_dump()
        errors: dict[str, list[str]] = await organization_validator.validate(db, values)
        if errors:
            raise ValidationError(errors)

        values["name"] = values["name"].strip()
        values["slug"] = await self._unique_slug(db, values["name"])
        return await self._unique_or_raise(db, organization_repository.create(db, values), values["name"])

    async def update_organization(
        self,
        db: AsyncSession,
        organization_id: UUID,
        data: OrganizationUpdate,
    ) -> Organization:
        """조직 정보를 수정합니다. 슬러그는 변경되지 않습니다.

        Update an organization. Twilio credential fields may not be set to an
        empty string. The slug keeps its creation-time value.

        Raises:
            NotFoundError: 조직을 찾을 수 없을 때 (Organization not found)
            ValidationError: 검증 실패 (Validation failed)
        """
        org: Organization = await self.get(db, organization_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        errors: dict[str, list[str]] = await organization_validator.validate(db, changes, organization=org)
        if errors:
            raise ValidationError(errors)

        if isinstance(changes.get("name"), str):
            changes["name"] = changes["name"].strip()
        return await self._unique_or_raise(
            db, organization_repository.update(db, org, changes), changes.get("name"), exclude_id=org.id
        )

    async def delete_organization(self, db: AsyncSession, organization_id: UUID) -> None:
        """조직과 소속 데이터를 모두 삭제합니다.

        Delete the organization; users, cases, case contacts, contact type
        groups, hearing types and mileage rates go with it. Stored
        attachments are removed from storage once the deletion commits.
        """
        org: Organization = await self.get(db, organization_id)
        for key in (org.logo_key, org.court_report_template_key):
            if key:
                storage_service.delete_on_commit(db, key)
        await organization_repository.delete(db, org)

    async def user_count(self, db: AsyncSession, organization_id: UUID) -> int:
        return await organization_repository.count_users(db, organization_id)

    async def case_contacts_count(self, db: AsyncSession, organization_id: UUID) -> int:
        return await organization_repository.count_case_contacts(db, organization_id)

    async def case_assignments(self, db: AsyncSession, organization_id: UUID) -> list[CaseAssignment]:
        return await organization_repository.get_case_assignments(db, organization_id)

    async def generate_contact_types_and_hearing_types(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> dict[str, int]:
        """기본 연락 유형/심리 유형을 생성합니다 (요청 시에만 실행).

        Seed the default taxonomy for the organization. Runs on demand only;
        creating an organization does not trigger it.
        """
        await self.get(db, organization_id)
        return await taxonomy_seeder.seed_defaults(db, organization_id)

    def org_logo(self, org: Organization) -> Path | str:
        """로고 경로를 반환합니다.

        Return the default logo path when no logo is attached, otherwise the
        signed redirect path of the attached logo.
        """
        if not org.has_logo:
            return Path(settings.PUBLIC_DIR) / "logo.jpeg"
        return storage_service.redirect_path(org.logo_key, org.logo_filename)

    def court_report_template_url(self, org: Organization) -> str | None:
        if not org.has_court_report_template:
            return None
        return storage_service.redirect_path(
            org.court_report_template_key, org.court_report_template_filename
        )

    async def _attach(
        self,
        db: AsyncSession,
        organization_id: UUID,
        attachment: str,
        allowed_types: frozenset[str],
        filename: str,
        content_type: str,
        data: bytes,
    ) -> Organization:
        if content_type not in allowed_types:
            raise BadRequestError(f"Unsupported content type: {content_type}")
        if not data:
            raise BadRequestError("Empty file")

        org: Organization = await self.get(db, organization_id)
        previous_key: str | None = getattr(org, f"{attachment}_key")

        key: str = storage_service.generate_key(org.id, attachment, filename)
        storage_service.save(key, data, content_type)
        storage_service.delete_on_rollback(db, key)
        setattr(org, f"{attachment}_key", key)
        setattr(org, f"{attachment}_filename", filename)
        setattr(org, f"{attachment}_content_type", content_type)
        try:
            await db.flush()
        except SQLAlchemyError:
            storage_service.delete(key)
            raise

        # 이전 파일은 커밋 후 정리 — The replaced file goes once the new key is committed
        if previous_key and previous_key != key:
            storage_service.delete_on_commit(db, previous_key)
        await db.refresh(org)
        return org

    async def attach_logo(
        self,
        db: AsyncSession,
        organization_id: UUID,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> Organization:
        """조직 로고를 첨부합니다 (기존 로고는 교체).

        Attach (or replace) the organization logo.

        Raises:
            BadRequestError: 이미지가 아니거나 빈 파일 (Not an image or empty)
        """
        return await self._attach(db, organization_id, "logo", LOGO_CONTENT_TYPES, filename, content_type, data)

    async def attach_court_report_template(
        self,
        db: AsyncSession,
        organization_id: UUID,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> Organization:
        """법원 보고서 템플릿(.docx)을 첨부합니다."""
        return await self._attach(
            db, organization_id, "court_report_template", TEMPLATE_CONTENT_TYPES, filename, content_type, data
        )

    async def to_response(self, db: AsyncSession, org: Organization) -> OrganizationResponse:
        """조직 모델을 집계 값과 함께 응답 스키마로 변환합니다.

        Convert an Organization to its response, including live counters.
        """
        return OrganizationResponse(
            id=str(org.id),
            name=org.name,
            slug=org.slug,
            display_name=org.display_name,
            address=org.address,
            twilio_phone_number=org.twilio_phone_number,
            twilio_enabled=org.twilio_enabled,
            show_driving_reimbursement=org.show_driving_reimbursement,
            additional_expenses_enabled=org.additional_expenses_enabled,
            logo_url=str(self.org_logo(org)) if org.has_logo else None,
            court_report_template_url=self.court_report_template_url(org),
            user_count=await self.user_count(db, org.id),
            case_contacts_count=await self.case_contacts_count(db, org.id),
            created_at=org.created_at,
        )


# 싱글턴 인스턴스 — Singleton instance
organization_service: OrganizationService = OrganizationService()
