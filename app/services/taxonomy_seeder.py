"""기본 분류 생성 서비스 — 연락 유형 그룹/유형 및 심리 유형 시드.

Taxonomy seeder — Creates the default contact type catalog and hearing types
for an organization.

Seeding is idempotent: groups, contact types and hearing types that already
exist by name for the organization are reused, so running it again only fills
in whatever is missing.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.taxonomy import ContactType, ContactTypeGroup, HearingType
from app.repositories.taxonomy_repository import (
    contact_type_group_repository,
    hearing_type_repository,
)

# 기본 연락 유형 카탈로그 — Default contact type catalog (group -> types)
DEFAULT_CONTACT_TYPES: dict[str, list[str]] = {
    "CASA": ["Supervisor", "Youth"],
    "Education": ["Guidance Counselor", "IEP Team", "School", "Teacher"],
    "Family": [
        "Aunt Uncle or Cousin",
        "Fictive Kin",
        "Grandparent",
        "Other Family",
        "Parent",
        "Sibling",
    ],
    "Health": [
        "Medical Professional",
        "Mental Health Therapist",
        "Other Therapist",
        "Psychiatric Practitioner",
    ],
    "Legal": ["Attorney", "Court"],
    "Placement": ["Caregiver Family", "Foster Parent", "Therapeutic Agency Worker"],
    "Social Services": ["Social Worker"],
}

# 기본 심리 유형 — Default hearing types
DEFAULT_HEARING_TYPES: list[str] = [
    "emergency hearing",
    "trial on the merits",
    "scheduling conference",
    "uncontested hearing",
    "pendente lite hearing",
    "pretrial conference",
]


class TaxonomySeeder:
    """조직별 기본 분류 데이터 생성기.

    Seeds default reference data scoped to one organization.
    """

    async def seed_defaults(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> dict[str, int]:
        """기본 연락 유형과 심리 유형을 생성합니다.

        Create the default contact type groups, contact types and hearing
        types for the organization, skipping rows that already exist.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            organization_id: 조직 ID (Organization UUID)

        Returns:
            dict[str, int]: 새로 생성된 행 수
                            (Counts of newly created groups, contact types, hearing types)
        """
        created: dict[str, int] = {"contact_type_groups": 0, "contact_types": 0, "hearing_types": 0}

        groups: dict[str, ContactTypeGroup] = {
            g.name: g
            for g in await contact_type_group_repository.get_by_org_with_types(db, organization_id)
        }

        for group_name, type_names in DEFAULT_CONTACT_TYPES.items():
            group: ContactTypeGroup | None = groups.get(group_name)
            if group is None:
                group = ContactTypeGroup(organization_id=organization_id, name=group_name, active=True)
                db.add(group)
                created["contact_type_groups"] += 1

            existing_types: set[str] = {t.name for t in group.contact_types}
            for type_name in type_names:
                if type_name in existing_types:
                    continue
                group.contact_types.append(ContactType(name=type_name, active=True))
                created["contact_types"] += 1

        existing_hearing_types: set[str] = set(
            await hearing_type_repository.get_names(db, organization_id)
        )
        for hearing_type_name in DEFAULT_HEARING_TYPES:
            if hearing_type_name in existing_hearing_types:
                continue
            db.add(HearingType(organization_id=organization_id, name=hearing_type_name, active=True))
            created["hearing_types"] += 1

        await db.flush()
        return created


# 싱글턴 인스턴스 — Singleton instance
taxonomy_seeder: TaxonomySeeder = TaxonomySeeder()
