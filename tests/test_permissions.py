"""
Role and permission constant tests.
"""

import pytest

from app.constants.permissions import (
    ADMIN_PERMISSIONS,
    INSTRUCTOR_PERMISSIONS,
    STUDENT_PERMISSIONS,
    Action,
    Resource,
    build_permission,
    parse_permission,
)
from app.constants.roles import ROLE_DISPLAY_NAMES, SystemRole


def test_build_permission():
    assert build_permission(Resource.GRADES, Action.UPDATE) == "grades:update"
    assert build_permission("users", "read") == "users:read"


def test_parse_permission():
    assert parse_permission("attendance:create") == (Resource.ATTENDANCE, Action.CREATE)


@pytest.mark.parametrize("name", ["grades", "grades:", "planets:read", "users:fly"])
def test_parse_permission_rejects_malformed_names(name):
    with pytest.raises(ValueError):
        parse_permission(name)


def test_admin_has_every_permission():
    assert len(ADMIN_PERMISSIONS) == len(Resource) * len(Action)
    assert len(set(ADMIN_PERMISSIONS)) == len(ADMIN_PERMISSIONS)
    assert set(STUDENT_PERMISSIONS) <= set(ADMIN_PERMISSIONS)
    assert set(INSTRUCTOR_PERMISSIONS) <= set(ADMIN_PERMISSIONS)


def test_students_only_read():
    assert all(name.endswith(":read") for name in STUDENT_PERMISSIONS)


def test_instructors_can_grade():
    assert "grades:create" in INSTRUCTOR_PERMISSIONS
    assert "grades:delete" not in INSTRUCTOR_PERMISSIONS


def test_every_system_role_has_a_display_name():
    assert set(ROLE_DISPLAY_NAMES) == set(SystemRole)
    assert ROLE_DISPLAY_NAMES[SystemRole.HR] == "HR Manager"
    assert SystemRole("registrar") is SystemRole.REGISTRAR
