"""권한 정책 패키지.

Authorization policies package — role predicates and per-resource policies.
"""

from app.policies.role_authority import CASA_ADMIN, ROLES, SUPERVISOR, VOLUNTEER, RoleAuthority
from app.policies.supervisor_volunteer_policy import SupervisorVolunteerPolicy, supervisor_volunteer_policy

__all__ = [
    "CASA_ADMIN", "SUPERVISOR", "VOLUNTEER", "ROLES", "RoleAuthority",
    "SupervisorVolunteerPolicy", "supervisor_volunteer_policy",
]
