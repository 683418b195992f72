"""역할 판별기 — 사용자 역할에 대한 독립적인 불리언 판별.

Role authority — Independent boolean predicates over a user's role.

A user's role is matched against the capability set below. The predicates
are independent and do not enforce exclusivity: an actor carrying several
roles (e.g. a hybrid supervisor/volunteer) satisfies each of them, while a
missing user or a role outside the set satisfies none.
"""

from collections.abc import Iterable
from typing import Any

# 역할 이름 — Role names stored on users.role
CASA_ADMIN: str = "casa_admin"
SUPERVISOR: str = "supervisor"
VOLUNTEER: str = "volunteer"

ROLES: frozenset[str] = frozenset({CASA_ADMIN, SUPERVISOR, VOLUNTEER})


def roles_of(user: Any) -> frozenset[str]:
    """사용자가 가진 인식 가능한 역할 집합을 반환합니다.

    Return the recognised roles carried by the user. ``user.role`` may be a
    single role name or an iterable of names; unknown names are dropped.

    Args:
        user: 사용자 또는 역할을 가진 객체 (User or any object with a ``role``)

    Returns:
        frozenset[str]: 인식된 역할 집합, 없으면 빈 집합 (Recognised roles, possibly empty)
    """
    if user is None:
        return frozenset()
    role: Any = getattr(user, "role", None)
    if isinstance(role, str):
        candidates: Iterable[Any] = (role,)
    elif isinstance(role, Iterable):
        candidates = role
    else:
        return frozenset()
    return frozenset(r for r in candidates if r in ROLES)


class RoleAuthority:
    """사용자 한 명의 역할 판별기.

    Role predicates for a single user.

    Attributes:
        user: 판별 대상 사용자 (User under evaluation, may be None)
    """

    def __init__(self, user: Any) -> None:
        self.user: Any = user
        self._roles: frozenset[str] = roles_of(user)

    @property
    def is_admin(self) -> bool:
        return CASA_ADMIN in self._roles

    @property
    def is_supervisor(self) -> bool:
        return SUPERVISOR in self._roles

    @property
    def is_volunteer(self) -> bool:
        return VOLUNTEER in self._roles
