"""감독자-자원봉사자 관계 권한 정책.

Supervisor-volunteer policy — Authorization predicates for creating and
unassigning supervisor/volunteer relationships.

Predicates return booleans and never raise; ``authorize`` is the helper the
service layer uses to turn a denial into a 403.
"""

from typing import Any, Callable

from app.policies.role_authority import RoleAuthority
from app.utils.exceptions import ForbiddenError


class SupervisorVolunteerPolicy:
    """감독자-자원봉사자 관계에 대한 권한 판별.

    Authorization for supervisor/volunteer relationships.

    - create: 관리자, 감독자, 자원봉사자 모두 허용 (admin, supervisor or volunteer)
    - unassign: 관리자, 감독자만 허용 (admin or supervisor; volunteers excluded)
    """

    def can_create(self, actor: Any) -> bool:
        authority: RoleAuthority = RoleAuthority(actor)
        return authority.is_admin or authority.is_supervisor or authority.is_volunteer

    def can_unassign(self, actor: Any) -> bool:
        authority: RoleAuthority = RoleAuthority(actor)
        return authority.is_admin or authority.is_supervisor

    def permits(self, actor: Any, action: str) -> bool:
        """액션 이름으로 판별합니다. 알 수 없는 액션은 거부.

        Evaluate a predicate by action name ("create" / "unassign").
        Unknown actions are denied.
        """
        predicate: Callable[[Any], bool] | None = {
            "create": self.can_create,
            "unassign": self.can_unassign,
        }.get(action)
        if predicate is None:
            return False
        return predicate(actor)

    def authorize(self, actor: Any, action: str) -> None:
        """권한이 없으면 ForbiddenError를 발생시킵니다.

        Raise ForbiddenError when the actor may not perform the action.

        Raises:
            ForbiddenError: 권한 없음 (Actor not permitted)
        """
        if not self.permits(actor, action):
            raise ForbiddenError(f"Not authorized to {action} supervisor volunteer")


# 싱글턴 인스턴스 — Singleton instance
supervisor_volunteer_policy: SupervisorVolunteerPolicy = SupervisorVolunteerPolicy()
