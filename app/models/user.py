"""사용자 및 감독자-자원봉사자 관계 SQLAlchemy ORM 모델 정의.

User and supervisor-volunteer SQLAlchemy ORM model definitions.
Each user belongs to exactly one organization and carries one role
(casa_admin, supervisor or volunteer).

Tables:
    - users: 사용자 계정 (User accounts scoped to an organization)
    - supervisor_volunteers: 감독자-자원봉사자 배정 (Supervisor/volunteer assignments)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.policies.role_authority import RoleAuthority


class User(Base):
    """사용자 모델 — 관리자, 감독자, 자원봉사자 계정.

    User model — Admin, supervisor and volunteer accounts.
    Email is globally unique and used as the login identifier.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        organization_id: 소속 조직 FK (Parent organization foreign key)
        email: 로그인 이메일 (Login email, globally unique)
        display_name: 표시 이름 (Display name)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 이름 (casa_admin / supervisor / volunteer)
        phone_number: 전화번호 (Phone number, optional)
        active: 활성 상태 (Active status flag)

    Relationships:
        organization: 소속 조직 (Parent organization)
        case_assignments: 케이스 배정 (Case assignments as volunteer, cascade delete)
        volunteer_links: 자원봉사자로서의 감독자 배정 (Supervisor links as volunteer)
        supervisor_links: 감독자로서의 자원봉사자 배정 (Volunteer links as supervisor)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 조직 FK — Parent organization (CASCADE: 조직 삭제 시 사용자도 삭제)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # 역할 — casa_admin / supervisor / volunteer (그 외 값은 권한 없음으로 취급)
    role: Mapped[str] = mapped_column(String(30), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    organization = relationship("Organization", back_populates="users")
    case_assignments = relationship("CaseAssignment", back_populates="volunteer", cascade="all, delete-orphan")
    volunteer_links = relationship(
        "SupervisorVolunteer",
        foreign_keys="SupervisorVolunteer.volunteer_id",
        back_populates="volunteer",
        cascade="all, delete-orphan",
    )
    supervisor_links = relationship(
        "SupervisorVolunteer",
        foreign_keys="SupervisorVolunteer.supervisor_id",
        back_populates="supervisor",
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return RoleAuthority(self).is_admin

    @property
    def is_supervisor(self) -> bool:
        return RoleAuthority(self).is_supervisor

    @property
    def is_volunteer(self) -> bool:
        return RoleAuthority(self).is_volunteer


class SupervisorVolunteer(Base):
    """감독자-자원봉사자 배정 모델.

    Supervisor-volunteer assignment. A volunteer has at most one active
    supervisor at a time; unassigning sets ``is_active`` to False and keeps
    the row for history.

    Attributes:
        id: 고유 식별자 UUID
        supervisor_id: 감독자 사용자 FK (Supervisor user)
        volunteer_id: 자원봉사자 사용자 FK (Volunteer user)
        is_active: 활성 배정 여부 (Whether the assignment is current)
    """

    __tablename__ = "supervisor_volunteers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    supervisor_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    volunteer_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    supervisor = relationship("User", foreign_keys=[supervisor_id], back_populates="supervisor_links")
    volunteer = relationship("User", foreign_keys=[volunteer_id], back_populates="volunteer_links")
