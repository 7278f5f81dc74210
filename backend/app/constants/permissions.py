"""
Permission names and the default permission sets per role.

A permission is named ``<resource>:<action>``. These are descriptors only;
evaluating them against a principal is the authorization service's job.
"""

import enum
from typing import List, Tuple


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class Resource(str, enum.Enum):
    USERS = "users"
    ROLES = "roles"
    STUDENTS = "students"
    EMPLOYEES = "employees"
    COURSES = "courses"
    CLASSES = "classes"
    ENROLLMENTS = "enrollments"
    GRADES = "grades"
    ATTENDANCE = "attendance"
    PAYMENTS = "payments"
    FEES = "fees"
    BOOKS = "books"
    LOANS = "loans"
    DEPARTMENTS = "departments"
    FACULTIES = "faculties"
    AUDIT = "audit"
    SETTINGS = "settings"


class Action(str, enum.Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    EXPORT = "export"


def build_permission(resource: Resource, action: Action) -> str:
    """Join a resource and an action into a permission name."""
    return f"{Resource(resource).value}:{Action(action).value}"


def parse_permission(name: str) -> Tuple[Resource, Action]:
    """
    Split a permission name into its resource and action.

    Raises:
        ValueError: If the name is not ``<resource>:<action>`` with known parts
    """
    resource, sep, action = name.partition(":")
    if not sep:
        raise ValueError(f"Malformed permission name: {name!r}")
    return Resource(resource), Action(action)


ADMIN_PERMISSIONS: List[str] = [
    build_permission(resource, action)
    for resource in Resource
    for action in Action
]

STUDENT_PERMISSIONS: List[str] = [
    build_permission(Resource.COURSES, Action.READ),
    build_permission(Resource.CLASSES, Action.READ),
    build_permission(Resource.ENROLLMENTS, Action.READ),
    build_permission(Resource.GRADES, Action.READ),
    build_permission(Resource.ATTENDANCE, Action.READ),
    build_permission(Resource.PAYMENTS, Action.READ),
    build_permission(Resource.FEES, Action.READ),
    build_permission(Resource.BOOKS, Action.READ),
    build_permission(Resource.LOANS, Action.READ),
]

INSTRUCTOR_PERMISSIONS: List[str] = [
    build_permission(Resource.COURSES, Action.READ),
    build_permission(Resource.CLASSES, Action.READ),
    build_permission(Resource.CLASSES, Action.UPDATE),
    build_permission(Resource.ENROLLMENTS, Action.READ),
    build_permission(Resource.GRADES, Action.READ),
    build_permission(Resource.GRADES, Action.CREATE),
    build_permission(Resource.GRADES, Action.UPDATE),
    build_permission(Resource.ATTENDANCE, Action.READ),
    build_permission(Resource.ATTENDANCE, Action.CREATE),
    build_permission(Resource.ATTENDANCE, Action.UPDATE),
    build_permission(Resource.STUDENTS, Action.READ),
]
