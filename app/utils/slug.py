"""슬러그 생성 유틸리티.

Slug generation utility.
Turns a human-readable organization name into a URL-safe, lowercase,
hyphenated token (e.g. "Prince George CASA" -> "prince-george-casa").
"""

import re
import unicodedata

# 영숫자가 아닌 연속 문자 — Runs of characters that are not [a-z0-9]
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def derive_slug(name: str) -> str:
    """이름에서 슬러그를 생성합니다.

    Derive a URL-safe slug from a name. Accents are folded to ASCII,
    everything else that is not alphanumeric becomes a single hyphen.

    Args:
        name: 원본 이름 (Source name)

    Returns:
        str: 슬러그 (Lowercase hyphenated slug, may be empty)
    """
    ascii_name: str = (
        unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALNUM.sub("-", ascii_name.lower()).strip("-")


def with_suffix(slug: str, attempt: int) -> str:
    """충돌 시 숫자 접미사를 붙인 슬러그를 반환합니다.

    Return the slug with a numeric suffix for the given attempt
    (attempt 1 is the bare slug, 2 -> "slug-2", ...).
    """
    if attempt <= 1:
        return slug
    return f"{slug}-{attempt}"
