"""전화번호 형식 검증 유틸리티.

Phone number format helper.
Accepts US numbers in E.164 form (+1 followed by 10 digits) or as 10 bare
digits with common separators. Blank values are considered valid; requiring a
number is the caller's decision.
"""

import re

# 구분자 — Separators stripped before matching
_SEPARATORS = re.compile(r"[\s().-]")
_US_E164 = re.compile(r"^\+1\d{10}$")
_US_LOCAL = re.compile(r"^\d{10}$")


def valid_phone_number(number: str | None) -> tuple[bool, str | None]:
    """전화번호 형식을 검증합니다.

    Validate a phone number string.

    Args:
        number: 전화번호 문자열 (Phone number, may be None or blank)

    Returns:
        tuple[bool, str | None]: (유효 여부, 오류 메시지) (Validity flag and error message)
    """
    if number is None or not number.strip():
        return True, None

    compact: str = _SEPARATORS.sub("", number)
    if _US_E164.match(compact) or _US_LOCAL.match(compact):
        return True, None
    return False, "must be 10 digits or 12 digits including country code (+1)"
