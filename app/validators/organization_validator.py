"""조직 검증기 — 이름, 전화번호, Twilio 자격 증명 검증.

Organization validator — Record-level validation for organizations.

Errors are collected per field (``{"name": [...]}``) with record-wide messages
under ``"base"``. The name uniqueness check here gives early feedback; the
unique index on casa_orgs.name is what actually guards concurrent inserts.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.repositories.organization_repository import organization_repository
from app.utils import phone

# 오류 메시지 — Error messages
BLANK_ERROR: str = "can't be blank"
TAKEN_ERROR: str = "has already been taken"
TWILIO_CREDENTIALS_ERROR: str = "Your Twilio credentials are incorrect, kindly check and try again."
TOO_LONG_ERROR: str = "is too long (maximum is %d characters)"

# 비워질 수 없는 Twilio 자격 증명 필드 — Credential fields that may not be blanked
TWILIO_CREDENTIAL_FIELDS: tuple[str, ...] = ("twilio_account_sid", "twilio_api_key_sid")

# 길이 제한 문자열 컬럼 — String columns whose length is checked before writing
LENGTH_LIMITED_FIELDS: tuple[str, ...] = (
    "name",
    "display_name",
    "twilio_account_sid",
    "twilio_api_key_sid",
    "twilio_api_key_secret",
)

Errors = dict[str, list[str]]


def _add(errors: Errors, field: str, message: str) -> None:
    # 같은 메시지는 한 번만 — Same message is recorded once per field
    messages: list[str] = errors.setdefault(field, [])
    if message not in messages:
        messages.append(message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class OrganizationValidator:
    """조직 레코드 검증기.

    Validates organization attributes on create and update.
    """

    def validate_presence(self, name: str | None, errors: Errors) -> bool:
        if _is_blank(name):
            _add(errors, "name", BLANK_ERROR)
            return False
        return True

    def validate_length(self, field: str, value: Any, errors: Errors) -> bool:
        limit: int | None = Organization.__table__.c[field].type.length
        if isinstance(value, str) and limit is not None and len(value) > limit:
            _add(errors, field, TOO_LONG_ERROR % limit)
            return False
        return True

    async def validate_uniqueness(
        self,
        db: AsyncSession,
        name: str,
        errors: Errors,
        exclude_id: UUID | None = None,
    ) -> bool:
        if await organization_repository.name_taken(db, name, exclude_id=exclude_id):
            _add(errors, "name", TAKEN_ERROR)
            return False
        return True

    def validate_phone_number(self, number: str | None, errors: Errors) -> bool:
        valid, message = phone.valid_phone_number(number)
        if not valid:
            _add(errors, "twilio_phone_number", message or "is invalid")
        return valid

    def validate_twilio_credentials(self, changes: dict[str, Any], errors: Errors) -> bool:
        """수정 요청에서 Twilio 자격 증명이 빈 문자열로 바뀌었는지 검사합니다.

        Fail when an update sets ``twilio_account_sid`` or
        ``twilio_api_key_sid`` to an empty string. Any number of blanked fields
        yields a single base error.

        Args:
            changes: 수정 요청 필드 (Fields present in the update)
            errors: 오류 누적 딕셔너리 (Error accumulator)

        Returns:
            bool: 통과 여부 (Whether the credentials passed)
        """
        for field in TWILIO_CREDENTIAL_FIELDS:
            value: Any = changes.get(field)
            if field in changes and isinstance(value, str) and not value.strip():
                _add(errors, "base", TWILIO_CREDENTIALS_ERROR)
                return False
        return True

    async def validate(
        self,
        db: AsyncSession,
        changes: dict[str, Any],
        organization: Organization | None = None,
    ) -> Errors:
        """생성(organization=None) 또는 수정 요청 전체를 검증합니다.

        Run a full validation pass. ``organization`` is None on create; on
        update, attributes missing from ``changes`` fall back to the stored
        record. The phone helper is called exactly once per pass.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            changes: 생성/수정 데이터 (Create data or update changes)
            organization: 수정 대상 조직 (Organization being updated, None on create)

        Returns:
            Errors: 필드별 오류, 비어있으면 유효 (Errors by field; empty means valid)
        """
        errors: Errors = {}

        def current(field: str) -> Any:
            if field in changes or organization is None:
                return changes.get(field)
            return getattr(organization, field)

        for field in LENGTH_LIMITED_FIELDS:
            if field in changes:
                self.validate_length(field, changes[field], errors)

        name: str | None = current("name")
        if self.validate_presence(name, errors) and "name" not in errors:
            exclude_id: UUID | None = organization.id if organization is not None else None
            await self.validate_uniqueness(db, name.strip(), errors, exclude_id=exclude_id)

        self.validate_phone_number(current("twilio_phone_number"), errors)

        if organization is not None:
            self.validate_twilio_credentials(changes, errors)

        return errors


# 싱글턴 인스턴스 — Singleton instance
organization_validator: OrganizationValidator = OrganizationValidator()
