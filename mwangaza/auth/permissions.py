"""Role-based access rules.

One matrix answers every "may this principal do that" question; routes ask it
through ``can_access`` instead of comparing roles themselves.
"""
from typing import Dict, FrozenSet, Tuple

from mwangaza.auth.schemas import Department, Principal

ROLES = ("admin", "social_worker", "psychologist", "educator")

DEPARTMENTS = [
    Department(id="admin", name="Administration", description="System administration and management"),
    Department(id="social_work", name="Social Work", description="Client social support services"),
    Department(id="psychology", name="Psychology", description="Mental health and counseling services"),
    Department(id="education", name="Education", description="Academic progress and teaching"),
]

DEPARTMENT_BY_ROLE = {
    "admin": "admin",
    "social_worker": "social_work",
    "psychologist": "psychology",
    "educator": "education",
}

EVERYONE = frozenset(ROLES)
CASEWORK = frozenset({"admin", "social_worker"})
ADMIN_ONLY = frozenset({"admin"})

PERMISSIONS: Dict[Tuple[str, str], FrozenSet[str]] = {
    ("clients", "view"): EVERYONE,
    ("clients", "create"): CASEWORK,
    ("clients", "update"): frozenset({"admin", "social_worker", "psychologist"}),
    ("client_status", "update"): CASEWORK,
    ("home_visits", "view"): frozenset({"admin", "social_worker", "psychologist"}),
    ("home_visits", "create"): CASEWORK,
    ("home_visits", "update"): CASEWORK,
    ("academic_records", "view"): EVERYONE,
    ("academic_records", "create"): frozenset({"admin", "educator"}),
    ("reports", "view"): CASEWORK,
    ("department_stats", "view"): CASEWORK,
    ("database", "view"): ADMIN_ONLY,
    ("database", "admin"): ADMIN_ONLY,
    ("staff", "view"): ADMIN_ONLY,
    ("staff", "admin"): ADMIN_ONLY,
}


def can_access(principal: Principal, resource: str, action: str) -> bool:
    """True if the principal's role is granted action on resource.

    Unknown resource/action pairs are denied.
    """
    allowed = PERMISSIONS.get((resource, action))
    if allowed is None:
        return False
    return principal.role in allowed
