"""
Authentication request/response schemas.
These describe payloads exchanged with the authentication service; no
credential or token checks happen here.
"""

from typing import List

from pydantic import Field

from app.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Credentials submitted for authentication."""
    email: str
    password: str


class AuthUser(CamelModel):
    """Snapshot of the authenticated principal."""
    id: str
    email: str
    first_name: str
    last_name: str
    roles: List[str] = Field(..., description="Role names")
    permissions: List[str] = Field(..., description="Permission names")


class LoginResponse(CamelModel):
    """Tokens issued on successful authentication."""
    access_token: str
    refresh_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    user: AuthUser


class RefreshTokenRequest(CamelModel):
    """Refresh token exchanged for a new access token."""
    refresh_token: str


class RefreshTokenResponse(CamelModel):
    """Renewed access token."""
    access_token: str
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class ChangePasswordRequest(CamelModel):
    """Self-service password change."""
    current_password: str
    new_password: str


class ResetPasswordRequest(CamelModel):
    """Starts the password reset flow."""
    email: str


class ConfirmResetPasswordRequest(CamelModel):
    """Completes the password reset flow."""
    token: str
    new_password: str


class JwtPayload(CamelModel):
    """Decoded token claims. ``iat``/``exp`` are epoch seconds."""
    user_id: str
    email: str
    roles: List[str]
    iat: int
    exp: int
