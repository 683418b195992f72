"""조직 애그리거트 테스트 — 검증, 슬러그, 집계, 기본 분류, 로고, 삭제.

Organization aggregate tests at the service layer: validation, slug,
counters, default taxonomy seeding, logo path and cascade delete.
"""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.casa_case import CasaCase, CaseAssignment, CaseContact
from app.models.organization import MileageRate, Organization
from app.models.taxonomy import ContactType, ContactTypeGroup, HearingType
from app.models.user import SupervisorVolunteer, User
from app.repositories.taxonomy_repository import contact_type_group_repository, hearing_type_repository
from app.schemas.organization import OrganizationCreate, OrganizationUpdate
from app.services.organization_service import organization_service
from app.services.taxonomy_seeder import DEFAULT_CONTACT_TYPES, DEFAULT_HEARING_TYPES
from app.utils.exceptions import ValidationError
from app.utils.slug import derive_slug
from app.validators.organization_validator import (
    BLANK_ERROR,
    TAKEN_ERROR,
    TOO_LONG_ERROR,
    TWILIO_CREDENTIALS_ERROR,
    organization_validator,
)

EXPECTED_PAIRS = sorted([
    ("CASA", "Supervisor"),
    ("CASA", "Youth"),
    ("Education", "Guidance Counselor"),
    ("Education", "IEP Team"),
    ("Education", "School"),
    ("Education", "Teacher"),
    ("Family", "Aunt Uncle or Cousin"),
    ("Family", "Fictive Kin"),
    ("Family", "Grandparent"),
    ("Family", "Other Family"),
    ("Family", "Parent"),
    ("Family", "Sibling"),
    ("Health", "Medical Professional"),
    ("Health", "Mental Health Therapist"),
    ("Health", "Other Therapist"),
    ("Health", "Psychiatric Practitioner"),
    ("Legal", "Attorney"),
    ("Legal", "Court"),
    ("Placement", "Caregiver Family"),
    ("Placement", "Foster Parent"),
    ("Placement", "Therapeutic Agency Worker"),
    ("Social Services", "Social Worker"),
])


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar()


async def _add_cases_with_contacts(db: AsyncSession, org, creator, contacts_per_case: list[int]) -> list[CasaCase]:
    cases = []
    for i, n in enumerate(contacts_per_case):
        case = CasaCase(organization_id=org.id, case_number=f"CINA-{i:03d}")
        case.case_contacts = [CaseContact(creator_id=creator.id, contact_made=True) for _ in range(n)]
        db.add(case)
        cases.append(case)
    await db.flush()
    return cases


class TestSlug:
    """슬러그 생성 테스트."""

    def test_derive_slug(self):
        assert derive_slug("Prince George CASA") == "prince-george-casa"

    def test_derive_slug_punctuation_and_accents(self):
        assert derive_slug("  Montgomery  County, MD!  ") == "montgomery-county-md"
        assert derive_slug("Café CASA") == "cafe-casa"

    async def test_slug_set_on_create(self, db: AsyncSession):
        org = await organization_service.create_organization(db, OrganizationCreate(name="Howard County CASA"))
        assert org.slug == "howard-county-casa"

    async def test_slug_collision_gets_suffix(self, db: AsyncSession, org):
        """이름은 다르지만 슬러그가 같으면 접미사를 붙임."""
        other = await organization_service.create_organization(db, OrganizationCreate(name="Prince-George CASA"))
        assert other.slug == "prince-george-casa-2"

    async def test_slug_kept_on_rename(self, db: AsyncSession, org):
        updated = await organization_service.update_organization(db, org.id, OrganizationUpdate(name="PG CASA"))
        assert updated.name == "PG CASA"
        assert updated.slug == "prince-george-casa"


class TestOrganizationValidation:
    """조직 검증 테스트."""

    async def test_name_required(self, db: AsyncSession):
        with pytest.raises(ValidationError) as exc:
            await organization_service.create_organization(db, OrganizationCreate(name=""))
        assert exc.value.errors == {"name": [BLANK_ERROR]}

    async def test_blank_name_on_update(self, db: AsyncSession, org):
        with pytest.raises(ValidationError) as exc:
            await organization_service.update_organization(db, org.id, OrganizationUpdate(name="   "))
        assert BLANK_ERROR in exc.value.errors["name"]

    async def test_name_unique(self, db: AsyncSession, org):
        with pytest.raises(ValidationError) as exc:
            await organization_service.create_organization(db, OrganizationCreate(name="Prince George CASA"))
        assert exc.value.errors == {"name": [TAKEN_ERROR]}

    async def test_name_unique_is_case_sensitive(self, db: AsyncSession, org):
        other = await organization_service.create_organization(db, OrganizationCreate(name="prince george casa"))
        assert other.id != org.id

    async def test_name_too_long(self, db: AsyncSession):
        with pytest.raises(ValidationError) as exc:
            await organization_service.create_organization(db, OrganizationCreate(name="x" * 256))
        assert exc.value.errors == {"name": [TOO_LONG_ERROR % 255]}

    async def test_twilio_secret_too_long(self, db: AsyncSession, org):
        with pytest.raises(ValidationError) as exc:
            await organization_service.update_organization(
                db, org.id, OrganizationUpdate(twilio_api_key_secret="s" * 129)
            )
        assert exc.value.errors == {"twilio_api_key_secret": [TOO_LONG_ERROR % 128]}

    async def test_concurrent_duplicate_name_is_taken(self, db: AsyncSession, org, monkeypatch):
        """사전 검사를 통과한 중복 이름도 고유 인덱스에서 동일 오류."""
        await db.commit()

        async def _passes(*args, **kwargs):
            return True

        monkeypatch.setattr(organization_validator, "validate_uniqueness", _passes)
        with pytest.raises(ValidationError) as exc:
            await organization_service.create_organization(db, OrganizationCreate(name=org.name))
        assert exc.value.errors == {"name": [TAKEN_ERROR]}

    async def test_other_integrity_error_propagates(self, db: AsyncSession, org, monkeypatch):
        """이름 외 제약 위반은 이름 오류로 바뀌지 않음."""
        await db.commit()

        async def _existing_slug(db, name):
            return "prince-george-casa"

        monkeypatch.setattr(organization_service, "_unique_slug", _existing_slug)
        with pytest.raises(IntegrityError):
            await organization_service.create_organization(db, OrganizationCreate(name="Other CASA"))

    async def test_update_keeps_own_name(self, db: AsyncSession, org):
        """자기 자신의 이름은 중복으로 보지 않음."""
        updated = await organization_service.update_organization(
            db, org.id, OrganizationUpdate(name="Prince George CASA", address="14735 Main St")
        )
        assert updated.address == "14735 Main St"

    @pytest.mark.parametrize("field", ["twilio_account_sid", "twilio_api_key_sid"])
    async def test_blank_twilio_credential_on_update(self, db: AsyncSession, org, field):
        with pytest.raises(ValidationError) as exc:
            await organization_service.update_organization(db, org.id, OrganizationUpdate(**{field: ""}))
        assert exc.value.errors == {"base": [TWILIO_CREDENTIALS_ERROR]}

    async def test_both_twilio_credentials_blank_single_error(self, db: AsyncSession, org):
        """두 필드가 모두 비어도 base 오류는 하나."""
        with pytest.raises(ValidationError) as exc:
            await organization_service.update_organization(
                db, org.id, OrganizationUpdate(twilio_account_sid="", twilio_api_key_sid="")
            )
        assert exc.value.errors["base"] == [TWILIO_CREDENTIALS_ERROR]

    async def test_twilio_credentials_accepted(self, db: AsyncSession, org):
        updated = await organization_service.update_organization(
            db, org.id, OrganizationUpdate(twilio_account_sid="AC123", twilio_api_key_sid="SK123")
        )
        assert updated.twilio_account_sid == "AC123"

    async def test_blank_twilio_not_checked_on_create(self, db: AsyncSession):
        org = await organization_service.create_organization(
            db, OrganizationCreate(name="Anne Arundel CASA", twilio_account_sid="")
        )
        assert org.id is not None

    async def test_invalid_phone_number(self, db: AsyncSession, org):
        with pytest.raises(ValidationError) as exc:
            await organization_service.update_organization(db, org.id, OrganizationUpdate(twilio_phone_number="12345"))
        assert "twilio_phone_number" in exc.value.errors

    async def test_phone_helper_called_once_per_pass(self, db: AsyncSession, org, monkeypatch):
        """검증 1회당 전화번호 헬퍼 1회 호출."""
        calls = []

        def spy(number):
            calls.append(number)
            return True, None

        monkeypatch.setattr("app.utils.phone.valid_phone_number", spy)
        errors = await organization_validator.validate(
            db, {"twilio_phone_number": "+12223334444"}, organization=org
        )
        assert errors == {}
        assert calls == ["+12223334444"]

    async def test_phone_helper_called_once_on_create(self, db: AsyncSession, monkeypatch):
        calls = []
        monkeypatch.setattr("app.utils.phone.valid_phone_number", lambda n: calls.append(n) or (True, None))
        await organization_validator.validate(db, {"name": "New CASA", "twilio_phone_number": None})
        assert len(calls) == 1


class TestOrganizationCounters:
    """사용자 수, 연락 기록 수 집계 테스트."""

    async def test_user_count(self, db: AsyncSession, org, admin_user, volunteer_user):
        assert await organization_service.user_count(db, org.id) == 2

    async def test_user_count_excludes_other_orgs(self, db: AsyncSession, org, admin_user):
        other = await organization_service.create_organization(db, OrganizationCreate(name="Other CASA"))
        db.add(User(organization_id=other.id, email="x@other.org", password_hash="x", role="volunteer"))
        await db.flush()
        assert await organization_service.user_count(db, org.id) == 1
        assert await organization_service.user_count(db, other.id) == 1

    async def test_case_contacts_count(self, db: AsyncSession, org, volunteer_user):
        """케이스 2건의 연락 기록 합계."""
        await _add_cases_with_contacts(db, org, volunteer_user, [10, 5])
        assert await organization_service.case_contacts_count(db, org.id) == 15

    async def test_case_contacts_count_empty(self, db: AsyncSession, org):
        assert await organization_service.case_contacts_count(db, org.id) == 0

    async def test_case_assignments_through_users(self, db: AsyncSession, org, volunteer_user):
        cases = await _add_cases_with_contacts(db, org, volunteer_user, [0, 0])
        for case in cases:
            db.add(CaseAssignment(casa_case_id=case.id, volunteer_id=volunteer_user.id))
        await db.flush()
        assignments = await organization_service.case_assignments(db, org.id)
        assert len(assignments) == 2
        assert {a.volunteer_id for a in assignments} == {volunteer_user.id}


class TestSeedDefaults:
    """기본 분류 생성 테스트."""

    def test_catalog_size(self):
        assert sum(len(types) for types in DEFAULT_CONTACT_TYPES.values()) == 22

    async def test_seed_contact_types(self, db: AsyncSession, org):
        counts = await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        assert counts["contact_types"] == 22
        assert counts["contact_type_groups"] == len(DEFAULT_CONTACT_TYPES)
        assert await contact_type_group_repository.get_pairs(db, org.id) == EXPECTED_PAIRS

    async def test_seed_hearing_types(self, db: AsyncSession, org):
        await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        names = await hearing_type_repository.get_names(db, org.id)
        assert sorted(names) == sorted(DEFAULT_HEARING_TYPES)
        assert "emergency hearing" in names

    async def test_seed_is_idempotent(self, db: AsyncSession, org):
        """두 번 실행해도 중복 생성 없음."""
        await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        counts = await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        assert counts == {"contact_type_groups": 0, "contact_types": 0, "hearing_types": 0}
        assert await contact_type_group_repository.get_pairs(db, org.id) == EXPECTED_PAIRS
        assert await _count(db, HearingType) == len(DEFAULT_HEARING_TYPES)

    async def test_seed_fills_in_missing(self, db: AsyncSession, org):
        group = ContactTypeGroup(organization_id=org.id, name="Family")
        group.contact_types = [ContactType(name="Parent")]
        db.add(group)
        await db.flush()

        counts = await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        assert counts["contact_type_groups"] == len(DEFAULT_CONTACT_TYPES) - 1
        assert counts["contact_types"] == 21
        assert await contact_type_group_repository.get_pairs(db, org.id) == EXPECTED_PAIRS

    async def test_seed_is_scoped_to_org(self, db: AsyncSession, org):
        other = await organization_service.create_organization(db, OrganizationCreate(name="Other CASA"))
        await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        assert await contact_type_group_repository.get_pairs(db, other.id) == []


class TestOrgLogo:
    """로고 경로 테스트."""

    async def test_default_logo_path(self, org):
        assert organization_service.org_logo(org) == Path(settings.PUBLIC_DIR) / "logo.jpeg"

    async def test_attached_logo_redirect(self, db: AsyncSession, org, local_storage):
        updated = await organization_service.attach_logo(
            db, org.id, filename="company_logo.png", content_type="image/png", data=b"\x89PNG fake"
        )
        logo = organization_service.org_logo(updated)
        assert isinstance(logo, str)
        assert logo.startswith("/api/v1/storage/blobs/redirect/")
        assert logo.endswith("/company_logo.png")
        assert (local_storage / updated.logo_key).read_bytes() == b"\x89PNG fake"

    async def test_replacing_logo_removes_old_file_on_commit(self, db: AsyncSession, org, local_storage):
        first = await organization_service.attach_logo(db, org.id, "a.png", "image/png", b"first")
        old_key = first.logo_key
        await db.commit()

        second = await organization_service.attach_logo(db, org.id, "b.png", "image/png", b"second")
        assert second.logo_key != old_key
        # 커밋 전에는 이전 파일 유지 — The old file stays until the commit
        assert (local_storage / old_key).exists()

        await db.commit()
        assert not (local_storage / old_key).exists()
        assert (local_storage / second.logo_key).read_bytes() == b"second"

    async def test_rollback_keeps_replaced_logo(self, db: AsyncSession, org, local_storage):
        """교체 후 롤백 시 이전 파일 유지, 새 파일 제거."""
        await organization_service.attach_logo(db, org.id, "a.png", "image/png", b"first")
        old_key = org.logo_key
        await db.commit()

        await organization_service.attach_logo(db, org.id, "b.png", "image/png", b"second")
        new_key = org.logo_key
        await db.rollback()
        await db.refresh(org)

        assert org.logo_key == old_key
        assert (local_storage / old_key).read_bytes() == b"first"
        assert not (local_storage / new_key).exists()


class TestOrganizationDelete:
    """조직 삭제 시 연쇄 삭제 테스트."""

    async def test_cascade_delete(self, db: AsyncSession, org, admin_user, supervisor_user, volunteer_user):
        cases = await _add_cases_with_contacts(db, org, volunteer_user, [3, 2])
        db.add(CaseAssignment(casa_case_id=cases[0].id, volunteer_id=volunteer_user.id))
        db.add(SupervisorVolunteer(supervisor_id=supervisor_user.id, volunteer_id=volunteer_user.id))
        db.add(MileageRate(organization_id=org.id, amount=Decimal("0.58"), effective_date=cases[0].created_at.date()))
        await organization_service.generate_contact_types_and_hearing_types(db, org.id)
        await db.flush()

        other = await organization_service.create_organization(db, OrganizationCreate(name="Other CASA"))
        await organization_service.generate_contact_types_and_hearing_types(db, other.id)

        await organization_service.delete_organization(db, org.id)
        await db.flush()

        assert await _count(db, Organization) == 1
        assert await _count(db, User) == 0
        assert await _count(db, CasaCase) == 0
        assert await _count(db, CaseContact) == 0
        assert await _count(db, CaseAssignment) == 0
        assert await _count(db, SupervisorVolunteer) == 0
        assert await _count(db, MileageRate) == 0
        # 다른 조직의 분류는 유지 — Other organization's taxonomy survives
        assert await _count(db, ContactType) == 22
        assert await _count(db, HearingType) == len(DEFAULT_HEARING_TYPES)

    async def test_delete_removes_attachments_on_commit(self, db: AsyncSession, org, local_storage):
        org_id = org.id
        await organization_service.attach_logo(db, org_id, "a.png", "image/png", b"logo")
        logo_key = org.logo_key
        await db.commit()

        await organization_service.delete_organization(db, org_id)
        await db.rollback()
        # 롤백된 삭제는 파일을 남김 — A rolled back delete leaves the file
        assert (local_storage / logo_key).exists()
        assert await _count(db, Organization) == 1

        await organization_service.delete_organization(db, org_id)
        await db.commit()
        assert not (local_storage / logo_key).exists()
        assert await _count(db, Organization) == 0
