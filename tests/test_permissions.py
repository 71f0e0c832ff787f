"""Tests for role-based access decisions."""
import pytest

from mwangaza.auth.permissions import DEPARTMENT_BY_ROLE, DEPARTMENTS, PERMISSIONS, ROLES, can_access

from conftest import make_principal


@pytest.mark.parametrize("role", ROLES)
def test_everyone_can_view_clients_and_academics(role):
    principal = make_principal(role)
    assert can_access(principal, "clients", "view")
    assert can_access(principal, "academic_records", "view")


@pytest.mark.parametrize("resource, action, allowed", [
    ("clients", "create", {"admin", "social_worker"}),
    ("clients", "update", {"admin", "social_worker", "psychologist"}),
    ("client_status", "update", {"admin", "social_worker"}),
    ("home_visits", "view", {"admin", "social_worker", "psychologist"}),
    ("home_visits", "create", {"admin", "social_worker"}),
    ("academic_records", "create", {"admin", "educator"}),
    ("reports", "view", {"admin", "social_worker"}),
    ("department_stats", "view", {"admin", "social_worker"}),
    ("database", "admin", {"admin"}),
    ("staff", "admin", {"admin"}),
])
def test_matrix(resource, action, allowed):
    for role in ROLES:
        assert can_access(make_principal(role), resource, action) == (role in allowed), role


def test_admin_only_resources_have_no_social_worker_carve_out():
    social_worker = make_principal("social_worker")
    assert not can_access(social_worker, "database", "view")
    assert not can_access(social_worker, "staff", "view")


def test_unknown_resource_or_action_is_denied():
    admin = make_principal("admin")
    assert not can_access(admin, "payroll", "view")
    assert not can_access(admin, "clients", "delete")


def test_matrix_only_names_known_roles():
    for roles in PERMISSIONS.values():
        assert roles <= set(ROLES)


def test_every_role_has_a_department():
    department_ids = {department.id for department in DEPARTMENTS}
    assert set(DEPARTMENT_BY_ROLE) == set(ROLES)
    assert set(DEPARTMENT_BY_ROLE.values()) <= department_ids
