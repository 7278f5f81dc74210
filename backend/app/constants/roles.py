"""
Built-in system roles.
"""

import enum
from typing import Dict


class SystemRole(str, enum.Enum):
    """Roles seeded by the user-management service."""
    ADMIN = "admin"
    STAFF = "staff"
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    FINANCE = "finance"
    LIBRARIAN = "librarian"
    REGISTRAR = "registrar"
    HR = "hr"


ROLE_DISPLAY_NAMES: Dict[SystemRole, str] = {
    SystemRole.ADMIN: "Administrator",
    SystemRole.STAFF: "Staff",
    SystemRole.STUDENT: "Student",
    SystemRole.INSTRUCTOR: "Instructor",
    SystemRole.FINANCE: "Finance Officer",
    SystemRole.LIBRARIAN: "Librarian",
    SystemRole.REGISTRAR: "Registrar",
    SystemRole.HR: "HR Manager",
}
