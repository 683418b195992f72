"""초기 데이터 시드 스크립트 — 조직, 관리자 계정, 기본 분류 생성.

Seed script — Creates the first organization, its CASA admin and the
default contact types / hearing types. Run once to bootstrap the database.

Usage:
    python -m app.seed

Creates:
    - 1개 조직: "Prince George CASA" (1 organization)
    - 1개 관리자 계정: admin@example.com / admin123 (1 casa_admin user)
    - 기본 연락 유형 22개 + 기본 심리 유형 (default taxonomy)
"""

import asyncio

from sqlalchemy import select

from app.database import Base, async_session, engine
from app.models import Organization, User
from app.policies.role_authority import CASA_ADMIN
from app.services.taxonomy_seeder import taxonomy_seeder
from app.utils.password import hash_password
from app.utils.slug import derive_slug


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the initial
    organization, admin user and default taxonomy.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 조직이 하나라도 있으면 건너뜀 (Skip when any organization exists)
        result = await db.execute(select(Organization).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        name: str = "Prince George CASA"
        org: Organization = Organization(name=name, slug=derive_slug(name))
        db.add(org)
        await db.flush()  # flush로 org.id 생성 (Flush to generate org.id)

        admin: User = User(
            organization_id=org.id,
            email="admin@example.com",
            display_name="CASA Admin",
            password_hash=hash_password("admin123"),
            role=CASA_ADMIN,
            active=True,
        )
        db.add(admin)

        counts: dict[str, int] = await taxonomy_seeder.seed_defaults(db, org.id)

        await db.commit()
        print(f"Seeded: org={org.id}, admin user=admin@example.com/admin123, taxonomy={counts}")


if __name__ == "__main__":
    asyncio.run(seed())
