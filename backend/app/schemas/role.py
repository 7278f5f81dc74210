"""
Role and permission schemas.
"""

from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel


class Role(CamelModel):
    """Authorization grouping of permissions."""
    id: str
    name: str
    display_name: str
    description: Optional[str] = None
    is_system: bool
    created_at: datetime
    updated_at: datetime


class PermissionEntity(CamelModel):
    """Fine-grained capability, named ``<resource>:<action>``."""
    id: str
    name: str
    display_name: str
    description: Optional[str] = None
    resource: str
    action: str
