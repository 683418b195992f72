"""역할 판별기 및 감독자-자원봉사자 정책 테스트.

RoleAuthority and SupervisorVolunteerPolicy tests. Pure predicates, no database.
"""

from types import SimpleNamespace

import pytest

from app.policies.role_authority import CASA_ADMIN, SUPERVISOR, VOLUNTEER, RoleAuthority, roles_of
from app.policies.supervisor_volunteer_policy import supervisor_volunteer_policy
from app.utils.exceptions import ForbiddenError


def actor(role):
    return SimpleNamespace(role=role)


class TestRoleAuthority:
    """역할 판별 테스트."""

    def test_admin(self):
        authority = RoleAuthority(actor(CASA_ADMIN))
        assert authority.is_admin is True
        assert authority.is_supervisor is False
        assert authority.is_volunteer is False

    def test_supervisor(self):
        authority = RoleAuthority(actor(SUPERVISOR))
        assert (authority.is_admin, authority.is_supervisor, authority.is_volunteer) == (False, True, False)

    def test_volunteer(self):
        authority = RoleAuthority(actor(VOLUNTEER))
        assert (authority.is_admin, authority.is_supervisor, authority.is_volunteer) == (False, False, True)

    def test_unknown_role_is_nothing(self):
        """알 수 없는 역할은 모든 판별에서 False."""
        authority = RoleAuthority(actor("all_casa_admin"))
        assert not (authority.is_admin or authority.is_supervisor or authority.is_volunteer)

    def test_missing_user_is_nothing(self):
        authority = RoleAuthority(None)
        assert not (authority.is_admin or authority.is_supervisor or authority.is_volunteer)

    def test_missing_role_is_nothing(self):
        assert roles_of(SimpleNamespace()) == frozenset()
        assert roles_of(actor(None)) == frozenset()

    def test_hybrid_roles_are_independent(self):
        """복수 역할은 각각 독립적으로 판별."""
        authority = RoleAuthority(actor([SUPERVISOR, VOLUNTEER]))
        assert authority.is_supervisor is True
        assert authority.is_volunteer is True
        assert authority.is_admin is False


class TestSupervisorVolunteerPolicy:
    """감독자-자원봉사자 정책 테스트."""

    @pytest.mark.parametrize("role", [CASA_ADMIN, SUPERVISOR, VOLUNTEER])
    def test_create_allowed_for_every_role(self, role):
        assert supervisor_volunteer_policy.can_create(actor(role)) is True

    @pytest.mark.parametrize("role,expected", [
        (CASA_ADMIN, True),
        (SUPERVISOR, True),
        (VOLUNTEER, False),
    ])
    def test_unassign(self, role, expected):
        assert supervisor_volunteer_policy.can_unassign(actor(role)) is expected

    @pytest.mark.parametrize("subject", [None, actor(None), actor(""), actor("guest")])
    def test_fails_closed(self, subject):
        """역할이 없거나 알 수 없으면 모두 거부."""
        assert supervisor_volunteer_policy.can_create(subject) is False
        assert supervisor_volunteer_policy.can_unassign(subject) is False

    def test_unknown_action_denied(self):
        assert supervisor_volunteer_policy.permits(actor(CASA_ADMIN), "destroy") is False

    def test_authorize_raises_forbidden(self):
        with pytest.raises(ForbiddenError) as exc:
            supervisor_volunteer_policy.authorize(actor(VOLUNTEER), "unassign")
        assert exc.value.status_code == 403

    def test_authorize_passes(self):
        supervisor_volunteer_policy.authorize(actor(SUPERVISOR), "unassign")
