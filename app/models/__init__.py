"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    organization: 조직, 마일리지 단가 (Organization, MileageRate)
    user: 사용자, 감독자-자원봉사자 배정 (User, SupervisorVolunteer)
    casa_case: 케이스, 연락 기록, 케이스 배정 (CasaCase, CaseContact, CaseAssignment)
    taxonomy: 연락 유형 그룹/유형, 심리 유형 (ContactTypeGroup, ContactType, HearingType)
"""

from app.models.organization import Organization, MileageRate
from app.models.user import User, SupervisorVolunteer
from app.models.casa_case import CasaCase, CaseContact, CaseAssignment
from app.models.taxonomy import ContactTypeGroup, ContactType, HearingType

__all__ = [
    "Organization", "MileageRate",
    "User", "SupervisorVolunteer",
    "CasaCase", "CaseContact", "CaseAssignment",
    "ContactTypeGroup", "ContactType", "HearingType",
]
