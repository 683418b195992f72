"""조직 및 분류 관련 Pydantic 요청/응답 스키마 정의.

Organization and taxonomy Pydantic request/response schema definitions.
Covers the organization aggregate, default taxonomy seeding results,
contact type groups, hearing types and mileage rates.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# === 조직 (Organization) 스키마 ===

class OrganizationCreate(BaseModel):
    """조직 생성 요청 스키마.

    Organization creation request schema.
    Name presence/uniqueness is checked by the organization validator so that
    errors come back in the same shape as other model validation errors.

    Attributes:
        name: 조직 이름 (Organization name, unique)
        display_name: 표시 이름 (Optional display name)
        address: 주소 (Optional address)
        twilio_phone_number: 문자 발신 번호 (Optional Twilio sender number)
    """

    name: str = ""  # 조직 이름 — 빈 값은 검증기에서 거부 (Blank is rejected by the validator)
    display_name: str | None = None
    address: str | None = None
    twilio_phone_number: str | None = None
    twilio_account_sid: str | None = None
    twilio_api_key_sid: str | None = None
    twilio_api_key_secret: str | None = None
    twilio_enabled: bool = False
    show_driving_reimbursement: bool = True
    additional_expenses_enabled: bool = False


class OrganizationUpdate(BaseModel):
    """조직 수정 요청 스키마 (부분 업데이트).

    Organization update request schema (partial update).
    Only fields present in the request are applied; the slug is not editable.
    """

    name: str | None = None
    display_name: str | None = None
    address: str | None = None
    twilio_phone_number: str | None = None
    twilio_account_sid: str | None = None  # 빈 문자열은 검증 실패 (Empty string fails validation)
    twilio_api_key_sid: str | None = None  # 빈 문자열은 검증 실패 (Empty string fails validation)
    twilio_api_key_secret: str | None = None
    # NOT NULL 플래그 — null은 스키마에서 거부, 기본값은 미전송 시 적용되지 않음
    # (Non-nullable flags: null is rejected; the default is never applied when unset)
    twilio_enabled: bool = False
    show_driving_reimbursement: bool = True
    additional_expenses_enabled: bool = False


class OrganizationResponse(BaseModel):
    """조직 응답 스키마 — 집계 값 포함.

    Organization response schema returned from API, including live counters.
    Twilio secrets are never returned.

    Attributes:
        id: 조직 UUID (Organization unique identifier)
        name: 조직 이름 (Organization name)
        slug: URL 슬러그 (URL slug)
        logo_url: 첨부 로고 리다이렉트 경로 (Signed logo path, null without logo)
        user_count: 소속 사용자 수 (Number of users)
        case_contacts_count: 전체 케이스 연락 기록 수 (Number of case contacts)
    """

    id: str
    name: str
    slug: str
    display_name: str | None
    address: str | None
    twilio_phone_number: str | None
    twilio_enabled: bool
    show_driving_reimbursement: bool
    additional_expenses_enabled: bool
    logo_url: str | None
    court_report_template_url: str | None
    user_count: int
    case_contacts_count: int
    created_at: datetime


class SeedDefaultsResponse(BaseModel):
    """기본 분류 생성 결과 — 새로 생성된 행 수.

    Default taxonomy seeding result: number of newly created rows.
    """

    contact_type_groups: int
    contact_types: int
    hearing_types: int


# === 분류 (Taxonomy) 스키마 ===

class ContactTypeResponse(BaseModel):
    id: str
    name: str
    active: bool


class ContactTypeGroupResponse(BaseModel):
    """연락 유형 그룹 응답 — 하위 유형 포함.

    Contact type group with its contact types.
    """

    id: str
    name: str
    active: bool
    contact_types: list[ContactTypeResponse] = []


class HearingTypeResponse(BaseModel):
    id: str
    name: str
    active: bool


# === 마일리지 단가 (Mileage rate) 스키마 ===

class MileageRateCreate(BaseModel):
    """마일리지 단가 생성 요청 스키마.

    Attributes:
        amount: 마일당 환급액 (Reimbursement per mile, > 0)
        effective_date: 적용 시작일 (First day the rate applies)
    """

    amount: Decimal = Field(gt=0, max_digits=6, decimal_places=2)
    effective_date: date
    is_active: bool = True


class MileageRateResponse(BaseModel):
    id: str
    amount: Decimal
    effective_date: date
    is_active: bool
