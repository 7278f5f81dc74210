"""
User schemas.
The user lifecycle is owned by the user-management service.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.role import Role


class User(CamelModel):
    """Persisted identity record."""
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool
    email_verified: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class CreateUserRequest(CamelModel):
    """Schema for creating a user."""
    email: str
    password: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role_ids: Optional[List[str]] = Field(None, description="Roles to assign on creation")


class UpdateUserRequest(CamelModel):
    """Schema for updating a user (all fields optional)."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar: Optional[str] = None
    is_active: Optional[bool] = None


class UserWithRoles(User):
    """User together with its assigned roles."""
    roles: List[Role] = Field(default_factory=list)
