"""조직 관련 SQLAlchemy ORM 모델 정의.

Organization-related SQLAlchemy ORM model definitions.
Includes the CASA organization (tenant) and its mileage rates,
with cascade delete relationships to everything the organization owns.

Tables:
    - casa_orgs: 최상위 테넌트 (Top-level tenant, one per CASA program)
    - mileage_rates: 조직별 마일리지 환급 단가 (Mileage reimbursement rates)
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Organization(Base):
    """CASA 조직(테넌트) 모델 — 시스템의 최상위 엔티티.

    CASA organization (tenant) model — Top-level entity in the system.
    Users, cases, contact type taxonomies, hearing types and mileage rates
    are scoped under an organization and removed with it.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 조직 이름, 전역 고유 (Organization name, globally unique)
        slug: URL 식별자 — 생성 시 이름에서 파생 (URL slug derived from name on create)
        display_name: 화면 표시 이름 (Optional display name)
        address: 주소 (Postal address, optional)
        twilio_phone_number: 문자 발신 번호 (Twilio sender number)
        twilio_account_sid: Twilio 계정 SID
        twilio_api_key_sid: Twilio API 키 SID
        twilio_api_key_secret: Twilio API 키 비밀값
        twilio_enabled: 문자 발송 활성화 여부 (SMS notifications enabled)
        logo_key: 로고 스토리지 키 (Storage key of the attached logo)
        court_report_template_key: 법원 보고서 템플릿 스토리지 키 (Storage key of the template)

    Relationships:
        users: 소속 사용자 (Users, cascade delete)
        casa_cases: 소속 케이스 (Cases, cascade delete)
        contact_type_groups: 연락 유형 그룹 (Contact type groups, cascade delete)
        hearing_types: 심리 유형 (Hearing types, cascade delete)
        mileage_rates: 마일리지 단가 (Mileage rates, cascade delete)
    """

    __tablename__ = "casa_orgs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 조직 이름 — 전역 고유, 동시 생성 경합은 DB 제약으로 차단 (Unique index backs the app-level check)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # 슬러그 — 생성 시 한 번만 계산, 이름 변경 시 유지 (Computed once on create, kept on rename)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Twilio 문자 발송 설정 — SMS credentials (빈 문자열은 검증 실패)
    twilio_phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    twilio_account_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    twilio_api_key_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    twilio_api_key_secret: Mapped[str | None] = mapped_column(String(128), nullable=True)
    twilio_enabled: Mapped[bool] = mapped_column(Boolean, default=False)

    # 기능 플래그 — Feature flags
    show_driving_reimbursement: Mapped[bool] = mapped_column(Boolean, default=True)
    additional_expenses_enabled: Mapped[bool] = mapped_column(Boolean, default=False)

    # 첨부파일 — Attachments (logo, court report template)
    logo_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    logo_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo_content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    court_report_template_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    court_report_template_filename: Mapped[str | None] = mapped_column(String(255), nullable=True)
    court_report_template_content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships (cascade: 조직 삭제 시 하위 데이터 일괄 삭제)
    users = relationship("User", back_populates="organization", cascade="all, delete-orphan")
    casa_cases = relationship("CasaCase", back_populates="organization", cascade="all, delete-orphan")
    contact_type_groups = relationship("ContactTypeGroup", back_populates="organization", cascade="all, delete-orphan")
    hearing_types = relationship("HearingType", back_populates="organization", cascade="all, delete-orphan")
    mileage_rates = relationship("MileageRate", back_populates="organization", cascade="all, delete-orphan")

    @property
    def has_logo(self) -> bool:
        return self.logo_key is not None

    @property
    def has_court_report_template(self) -> bool:
        return self.court_report_template_key is not None


class MileageRate(Base):
    """마일리지 환급 단가 모델.

    Mileage reimbursement rate, effective from a given date.

    Attributes:
        id: 고유 식별자 UUID
        organization_id: 소속 조직 FK
        amount: 마일당 환급액 (Reimbursement per mile)
        effective_date: 적용 시작일 (First day the rate applies)
        is_active: 활성 상태
    """

    __tablename__ = "mileage_rates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    organization = relationship("Organization", back_populates="mileage_rates")
