"""조직 API 테스트 — 생성, 조회, 수정, 삭제, 기본 분류, 첨부파일, 마일리지 단가.

Organization API tests — Endpoints under /api/v1/admin/organizations,
the blob redirect endpoint and mileage rates. Covers admin-only writes
and the 422 error shape.
"""

from decimal import Decimal

from httpx import AsyncClient

from tests.conftest import auth_header
from app.validators.organization_validator import TAKEN_ERROR, TOO_LONG_ERROR, TWILIO_CREDENTIALS_ERROR

URL = "/api/v1/admin/organizations"
ME = f"{URL}/me"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class TestOrganizationCreate:
    """조직 생성 테스트."""

    async def test_create(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={"name": "Prince George County CASA"}, headers=auth_header(admin_token))
        assert res.status_code == 201
        data = res.json()
        assert data["slug"] == "prince-george-county-casa"
        assert data["user_count"] == 0
        assert data["case_contacts_count"] == 0
        assert data["logo_url"] is None

    async def test_create_blank_name(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={"name": ""}, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert "name" in res.json()["detail"]["errors"]

    async def test_create_duplicate_name(self, client: AsyncClient, admin_token, org):
        res = await client.post(URL, json={"name": org.name}, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert res.json()["detail"]["errors"] == {"name": [TAKEN_ERROR]}

    async def test_create_name_too_long(self, client: AsyncClient, admin_token):
        res = await client.post(URL, json={"name": "x" * 256}, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert res.json()["detail"]["errors"] == {"name": [TOO_LONG_ERROR % 255]}

    async def test_create_volunteer_forbidden(self, client: AsyncClient, volunteer_token):
        res = await client.post(URL, json={"name": "X CASA"}, headers=auth_header(volunteer_token))
        assert res.status_code == 403

    async def test_create_no_auth(self, client: AsyncClient):
        """인증 없이 생성 시 401/403."""
        res = await client.post(URL, json={"name": "X CASA"})
        assert res.status_code in (401, 403)


class TestOrganizationMe:
    """현재 조직 조회/수정 테스트."""

    async def test_get_me_counts(self, client: AsyncClient, volunteer_token, admin_user, volunteer_user, org):
        """자원봉사자도 조회 가능, 사용자 수 포함."""
        res = await client.get(ME, headers=auth_header(volunteer_token))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(org.id)
        assert data["user_count"] == 2
        assert "twilio_account_sid" not in data

    async def test_update(self, client: AsyncClient, admin_token):
        res = await client.put(ME, json={
            "display_name": "PG CASA",
            "twilio_phone_number": "+13015551234",
        }, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["display_name"] == "PG CASA"
        assert data["slug"] == "prince-george-casa"

    async def test_update_blank_twilio_sid(self, client: AsyncClient, admin_token):
        """Twilio SID를 비우면 base 오류 하나."""
        res = await client.put(ME, json={
            "twilio_account_sid": "",
            "twilio_api_key_sid": "",
        }, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert res.json()["detail"]["errors"] == {"base": [TWILIO_CREDENTIALS_ERROR]}

    async def test_update_null_flag_rejected(self, client: AsyncClient, admin_token):
        """NOT NULL 플래그에 null 전송 시 이름 중복 오류가 아닌 요청 검증 오류."""
        res = await client.put(ME, json={"twilio_enabled": None}, headers=auth_header(admin_token))
        assert res.status_code == 422
        assert TAKEN_ERROR not in res.text
        assert res.json()["detail"][0]["loc"] == ["body", "twilio_enabled"]

        res = await client.get(ME, headers=auth_header(admin_token))
        assert res.json()["twilio_enabled"] is False

    async def test_update_flag(self, client: AsyncClient, admin_token):
        res = await client.put(ME, json={"additional_expenses_enabled": True}, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["additional_expenses_enabled"] is True
        assert data["show_driving_reimbursement"] is True

    async def test_update_supervisor_forbidden(self, client: AsyncClient, supervisor_token):
        res = await client.put(ME, json={"display_name": "X"}, headers=auth_header(supervisor_token))
        assert res.status_code == 403

    async def test_delete(self, client: AsyncClient, admin_token):
        res = await client.delete(ME, headers=auth_header(admin_token))
        assert res.status_code == 204
        # 삭제된 조직의 사용자 토큰은 더 이상 유효하지 않음
        res = await client.get(ME, headers=auth_header(admin_token))
        assert res.status_code == 401


class TestOrganizationDefaults:
    """기본 분류 생성 API 테스트."""

    async def test_generate_defaults(self, client: AsyncClient, admin_token):
        res = await client.post(f"{ME}/defaults", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json() == {"contact_type_groups": 7, "contact_types": 22, "hearing_types": 6}

        res = await client.get(f"{ME}/contact-type-groups", headers=auth_header(admin_token))
        assert res.status_code == 200
        groups = res.json()
        assert [g["name"] for g in groups] == [
            "CASA", "Education", "Family", "Health", "Legal", "Placement", "Social Services",
        ]
        assert sum(len(g["contact_types"]) for g in groups) == 22

        res = await client.get(f"{ME}/hearing-types", headers=auth_header(admin_token))
        assert len(res.json()) == 6

    async def test_generate_defaults_twice(self, client: AsyncClient, admin_token):
        await client.post(f"{ME}/defaults", headers=auth_header(admin_token))
        res = await client.post(f"{ME}/defaults", headers=auth_header(admin_token))
        assert res.json() == {"contact_type_groups": 0, "contact_types": 0, "hearing_types": 0}

    async def test_generate_defaults_volunteer_forbidden(self, client: AsyncClient, volunteer_token):
        res = await client.post(f"{ME}/defaults", headers=auth_header(volunteer_token))
        assert res.status_code == 403


class TestOrganizationAttachments:
    """로고/템플릿 업로드 및 리다이렉트 테스트."""

    async def test_upload_logo_and_follow_redirect(self, client: AsyncClient, admin_token):
        res = await client.put(
            f"{ME}/logo",
            files={"file": ("logo.png", b"\x89PNG-logo-bytes", "image/png")},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        logo_url = res.json()["logo_url"]
        assert logo_url.startswith("/api/v1/storage/blobs/redirect/")

        res = await client.get(logo_url)
        assert res.status_code == 200
        assert res.content == b"\x89PNG-logo-bytes"

    async def test_upload_logo_wrong_type(self, client: AsyncClient, admin_token):
        res = await client.put(
            f"{ME}/logo",
            files={"file": ("logo.txt", b"text", "text/plain")},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 400

    async def test_upload_court_report_template(self, client: AsyncClient, admin_token):
        res = await client.put(
            f"{ME}/court-report-template",
            files={"file": ("template.docx", b"PK-docx", DOCX)},
            headers=auth_header(admin_token),
        )
        assert res.status_code == 200
        assert res.json()["court_report_template_url"].endswith("/template.docx")

    async def test_redirect_invalid_signed_id(self, client: AsyncClient):
        res = await client.get("/api/v1/storage/blobs/redirect/not-a-token/logo.png")
        assert res.status_code == 404


class TestMileageRates:
    """마일리지 단가 API 테스트."""

    async def test_create_and_list(self, client: AsyncClient, admin_token, volunteer_token):
        res = await client.post("/api/v1/admin/mileage-rates", json={
            "amount": "0.67",
            "effective_date": "2026-01-01",
        }, headers=auth_header(admin_token))
        assert res.status_code == 201
        assert Decimal(res.json()["amount"]) == Decimal("0.67")

        res = await client.get("/api/v1/admin/mileage-rates", headers=auth_header(volunteer_token))
        assert res.status_code == 200
        assert len(res.json()) == 1

    async def test_create_volunteer_forbidden(self, client: AsyncClient, volunteer_token):
        res = await client.post("/api/v1/admin/mileage-rates", json={
            "amount": "0.67",
            "effective_date": "2026-01-01",
        }, headers=auth_header(volunteer_token))
        assert res.status_code == 403
