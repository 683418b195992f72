"""케이스 관련 SQLAlchemy ORM 모델 정의.

Case-related SQLAlchemy ORM model definitions.

Tables:
    - casa_cases: 조직의 케이스 (Cases handled by an organization)
    - case_contacts: 케이스 연락 기록 (Contacts logged against a case)
    - case_assignments: 자원봉사자-케이스 배정 (Volunteer assignments to cases)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class CasaCase(Base):
    """케이스 모델.

    Case model — A child's case followed by the organization.

    Attributes:
        id: 고유 식별자 UUID
        organization_id: 소속 조직 FK
        case_number: 케이스 번호, 조직 내 고유 (Case number, unique per org)
        active: 진행 중 여부 (Whether the case is open)
        birth_month_year_youth: 아동 출생 연월 (Youth birth month, optional)

    Constraints:
        uq_casa_case_org_number: 조직 내 케이스 번호 고유
    """

    __tablename__ = "casa_cases"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False)
    case_number: Mapped[str] = mapped_column(String(100), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    birth_month_year_youth: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("organization_id", "case_number", name="uq_casa_case_org_number"),
    )

    organization = relationship("Organization", back_populates="casa_cases")
    case_contacts = relationship("CaseContact", back_populates="casa_case", cascade="all, delete-orphan")
    case_assignments = relationship("CaseAssignment", back_populates="casa_case", cascade="all, delete-orphan")


class CaseContact(Base):
    """케이스 연락 기록 모델.

    Case contact — One interaction logged by a volunteer or supervisor
    against a case. Counted in organization statistics.

    Attributes:
        id: 고유 식별자 UUID
        casa_case_id: 케이스 FK
        creator_id: 작성자 사용자 FK (작성자 삭제 시 NULL)
        occurred_at: 연락 일시
        duration_minutes: 소요 시간(분)
        contact_made: 실제 연락 성사 여부
        medium_type: 연락 수단 (in-person, phone, text/email, video, letter)
        notes: 메모
    """

    __tablename__ = "case_contacts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_case_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False)
    creator_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    contact_made: Mapped[bool] = mapped_column(Boolean, default=False)
    medium_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    casa_case = relationship("CasaCase", back_populates="case_contacts")


class CaseAssignment(Base):
    """자원봉사자-케이스 배정 모델.

    Volunteer-to-case assignment. Reachable from an organization through its users.
    """

    __tablename__ = "case_assignments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    casa_case_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_cases.id", ondelete="CASCADE"), nullable=False)
    volunteer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("casa_case_id", "volunteer_id", name="uq_case_assignment_case_volunteer"),
    )

    casa_case = relationship("CasaCase", back_populates="case_assignments")
    volunteer = relationship("User", back_populates="case_assignments")
