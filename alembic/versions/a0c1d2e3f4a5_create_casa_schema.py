"""create_casa_schema

Revision ID: a0c1d2e3f4a5
Revises:
Create Date: 2026-10-19 10:00:00.000000

CASA 초기 스키마 생성: 조직, 사용자, 감독자-자원봉사자, 케이스, 연락 기록,
케이스 배정, 연락 유형 그룹/유형, 심리 유형, 마일리지 단가.
Create the initial CASA schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = 'a0c1d2e3f4a5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # casa_orgs — 최상위 테넌트 (Top-level tenant)
    op.create_table(
        'casa_orgs',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('display_name', sa.String(255), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('twilio_phone_number', sa.String(20), nullable=True),
        sa.Column('twilio_account_sid', sa.String(64), nullable=True),
        sa.Column('twilio_api_key_sid', sa.String(64), nullable=True),
        sa.Column('twilio_api_key_secret', sa.String(128), nullable=True),
        sa.Column('twilio_enabled', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('show_driving_reimbursement', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('additional_expenses_enabled', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('logo_key', sa.String(512), nullable=True),
        sa.Column('logo_filename', sa.String(255), nullable=True),
        sa.Column('logo_content_type', sa.String(100), nullable=True),
        sa.Column('court_report_template_key', sa.String(512), nullable=True),
        sa.Column('court_report_template_filename', sa.String(255), nullable=True),
        sa.Column('court_report_template_content_type', sa.String(100), nullable=True),
        *_timestamps(),
    )

    # users — 관리자/감독자/자원봉사자 (Admins, supervisors, volunteers)
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organization_id', UUID(as_uuid=True), sa.ForeignKey('casa_orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('display_name', sa.String(255), server_default='', nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(30), nullable=False),
        sa.Column('phone_number', sa.String(20), nullable=True),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_organization', 'users', ['organization_id'])

    # supervisor_volunteers — 감독자-자원봉사자 배정 (Assignments, kept as history)
    op.create_table(
        'supervisor_volunteers',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('supervisor_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('volunteer_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_supervisor_volunteers_volunteer', 'supervisor_volunteers', ['volunteer_id', 'is_active'])

    # casa_cases — 케이스 (Cases, case number unique per organization)
    op.create_table(
        'casa_cases',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organization_id', UUID(as_uuid=True), sa.ForeignKey('casa_orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('case_number', sa.String(100), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('birth_month_year_youth', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'case_number', name='uq_casa_case_org_number'),
    )

    # case_contacts — 케이스 연락 기록 (Contacts logged against a case)
    op.create_table(
        'case_contacts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('casa_case_id', UUID(as_uuid=True), sa.ForeignKey('casa_cases.id', ondelete='CASCADE'), nullable=False),
        sa.Column('creator_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('occurred_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('contact_made', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('medium_type', sa.String(50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_case_contacts_case', 'case_contacts', ['casa_case_id'])

    # case_assignments — 자원봉사자-케이스 배정 (Volunteer assignments to cases)
    op.create_table(
        'case_assignments',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('casa_case_id', UUID(as_uuid=True), sa.ForeignKey('casa_cases.id', ondelete='CASCADE'), nullable=False),
        sa.Column('volunteer_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('casa_case_id', 'volunteer_id', name='uq_case_assignment_case_volunteer'),
    )

    # contact_type_groups / contact_types — 연락 유형 2단계 분류
    op.create_table(
        'contact_type_groups',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organization_id', UUID(as_uuid=True), sa.ForeignKey('casa_orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'name', name='uq_contact_type_group_org_name'),
    )
    op.create_table(
        'contact_types',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('contact_type_group_id', UUID(as_uuid=True), sa.ForeignKey('contact_type_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('contact_type_group_id', 'name', name='uq_contact_type_group_name'),
    )

    # hearing_types — 심리 유형 (Hearing types)
    op.create_table(
        'hearing_types',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organization_id', UUID(as_uuid=True), sa.ForeignKey('casa_orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('organization_id', 'name', name='uq_hearing_type_org_name'),
    )

    # mileage_rates — 마일리지 환급 단가 (Mileage reimbursement rates)
    op.create_table(
        'mileage_rates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('organization_id', UUID(as_uuid=True), sa.ForeignKey('casa_orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Numeric(6, 2), nullable=False),
        sa.Column('effective_date', sa.Date(), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('mileage_rates')
    op.drop_table('hearing_types')
    op.drop_table('contact_types')
    op.drop_table('contact_type_groups')
    op.drop_table('case_assignments')
    op.drop_index('ix_case_contacts_case', table_name='case_contacts')
    op.drop_table('case_contacts')
    op.drop_table('casa_cases')
    op.drop_index('ix_supervisor_volunteers_volunteer', table_name='supervisor_volunteers')
    op.drop_table('supervisor_volunteers')
    op.drop_index('ix_users_organization', table_name='users')
    op.drop_table('users')
    op.drop_table('casa_orgs')
