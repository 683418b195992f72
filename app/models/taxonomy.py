"""연락 유형 및 심리 유형 SQLAlchemy ORM 모델 정의.

Contact type and hearing type SQLAlchemy ORM model definitions.
Two-level taxonomy (group -> type) classifying who a case contact was with,
plus the hearing types used for court dates. All rows are organization-scoped.

Tables:
    - contact_type_groups: 연락 유형 그룹 (e.g. "Family")
    - contact_types: 연락 유형 (e.g. "Parent" under "Family")
    - hearing_types: 심리 유형 (e.g. "emergency hearing")
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ContactTypeGroup(Base):
    """연락 유형 그룹 모델.

    Contact type group — first level of the contact taxonomy.

    Constraints:
        uq_contact_type_group_org_name: 조직 내 그룹 이름 고유
    """

    __tablename__ = "contact_type_groups"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_contact_type_group_org_name"),
    )

    organization = relationship("Organization", back_populates="contact_type_groups")
    contact_types = relationship("ContactType", back_populates="contact_type_group", cascade="all, delete-orphan")


class ContactType(Base):
    """연락 유형 모델 — 그룹 하위 항목.

    Contact type — second level of the contact taxonomy.
    """

    __tablename__ = "contact_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_type_group_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("contact_type_groups.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("contact_type_group_id", "name", name="uq_contact_type_group_name"),
    )

    contact_type_group = relationship("ContactTypeGroup", back_populates="contact_types")


class HearingType(Base):
    """심리 유형 모델.

    Hearing type — classification of a court hearing.

    Constraints:
        uq_hearing_type_org_name: 조직 내 심리 유형 이름 고유
    """

    __tablename__ = "hearing_types"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("casa_orgs.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_hearing_type_org_name"),
    )

    organization = relationship("Organization", back_populates="hearing_types")
