"""
Client for the external authentication / user-management service.

Sends and receives the shared auth, user and role schemas. Every reply is an
ApiResponse envelope; failures surface as AuthServiceError. Tokens are passed
through untouched, never inspected.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.core.integrations.http.http_client import HttpClient
from app.core.logging import get_logger
from app.schemas.api import ApiResponse, PaginatedResponse, SearchParams
from app.schemas.auth import (
    ChangePasswordRequest,
    ConfirmResetPasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
    ResetPasswordRequest,
)
from app.schemas.role import PermissionEntity, Role
from app.schemas.user import CreateUserRequest, UpdateUserRequest, UserWithRoles

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class AuthServiceError(Exception):
    """Raised when the service rejects a call or replies with an unusable body."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[str]] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")


class AuthServiceClient:
    """Typed calls against the authentication and user-management API."""

    def __init__(self, http_client: Optional[HttpClient] = None):
        self.http = http_client or HttpClient(
            base_url=settings.AUTH_SERVICE_URL,
            timeout=settings.AUTH_SERVICE_TIMEOUT,
            max_retries=settings.AUTH_SERVICE_MAX_RETRIES,
        )

    async def close(self) -> None:
        await self.http.close()

    async def _call(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self.http.request(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            payload = self._payload(e.response)
            if payload is None:
                raise AuthServiceError(e.response.status_code, "Auth service error") from e
            raise self._rejection(e.response, payload) from e
        except httpx.HTTPError as e:
            raise AuthServiceError(503, f"Auth service unavailable: {e}") from e

    @staticmethod
    def _auth_headers(access_token: Optional[str]) -> Optional[Dict[str, str]]:
        if not access_token:
            return None
        return {"Authorization": f"Bearer {access_token}"}

    @staticmethod
    def _payload(response: httpx.Response) -> Optional[Dict[str, Any]]:
        try:
            payload = response.json()
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

    @staticmethod
    def _rejection(response: httpx.Response, payload: Dict[str, Any]) -> AuthServiceError:
        message = payload.get("message") or response.reason_phrase or "Request failed"
        logger.warning(
            f"Auth service rejected request: {message}",
            extra={
                "status_code": response.status_code,
                "url": str(response.request.url),
            },
        )
        return AuthServiceError(response.status_code, message, payload.get("errors"))

    def _envelope(self, response: httpx.Response, model: Type[M]) -> M:
        """Parse the body into ``model``, raising AuthServiceError on failure."""
        payload = self._payload(response)
        if payload is None:
            raise AuthServiceError(
                response.status_code,
                f"Unexpected response body from auth service (HTTP {response.status_code})",
            )

        if response.is_error or payload.get("success") is False:
            raise self._rejection(response, payload)

        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise AuthServiceError(
                response.status_code,
                "Malformed response from auth service",
                [str(error["msg"]) for error in e.errors()],
            ) from e

    def _data(self, response: httpx.Response, model: Type[Any]) -> Any:
        envelope = self._envelope(response, ApiResponse[model])
        if envelope.data is None:
            raise AuthServiceError(response.status_code, "Auth service response is missing data")
        return envelope.data

    def _ack(self, response: httpx.Response) -> Optional[str]:
        return self._envelope(response, ApiResponse[Any]).message

    # Authentication

    async def login(self, request: LoginRequest) -> LoginResponse:
        response = await self._call("POST", "/auth/login", json=request.to_wire())
        return self._data(response, LoginResponse)

    async def refresh(self, request: RefreshTokenRequest) -> RefreshTokenResponse:
        response = await self._call("POST", "/auth/refresh", json=request.to_wire())
        return self._data(response, RefreshTokenResponse)

    async def logout(self, access_token: str) -> Optional[str]:
        response = await self._call("POST", "/auth/logout", headers=self._auth_headers(access_token))
        return self._ack(response)

    async def request_password_reset(self, request: ResetPasswordRequest) -> Optional[str]:
        response = await self._call("POST", "/auth/forgot-password", json=request.to_wire())
        return self._ack(response)

    async def confirm_password_reset(self, request: ConfirmResetPasswordRequest) -> Optional[str]:
        response = await self._call("POST", "/auth/reset-password", json=request.to_wire())
        return self._ack(response)

    async def change_password(self, request: ChangePasswordRequest, access_token: str) -> Optional[str]:
        response = await self._call(
            "POST",
            "/auth/change-password",
            json=request.to_wire(),
            headers=self._auth_headers(access_token),
        )
        return self._ack(response)

    # Users

    async def list_users(
        self,
        access_token: str,
        params: Optional[SearchParams] = None,
    ) -> PaginatedResponse[UserWithRoles]:
        response = await self._call(
            "GET",
            "/users",
            params=params.to_query() if params else None,
            headers=self._auth_headers(access_token),
        )
        return self._envelope(response, PaginatedResponse[UserWithRoles])

    async def get_user(self, user_id: str, access_token: str) -> UserWithRoles:
        response = await self._call("GET", f"/users/{user_id}", headers=self._auth_headers(access_token))
        return self._data(response, UserWithRoles)

    async def create_user(self, request: CreateUserRequest, access_token: str) -> UserWithRoles:
        response = await self._call(
            "POST",
            "/users",
            json=request.to_wire(),
            headers=self._auth_headers(access_token),
        )
        return self._data(response, UserWithRoles)

    async def update_user(
        self,
        user_id: str,
        request: UpdateUserRequest,
        access_token: str,
    ) -> UserWithRoles:
        response = await self._call(
            "PATCH",
            f"/users/{user_id}",
            json=request.to_wire(),
            headers=self._auth_headers(access_token),
        )
        return self._data(response, UserWithRoles)

    # Roles and permissions

    async def list_roles(self, access_token: str) -> List[Role]:
        response = await self._call("GET", "/roles", headers=self._auth_headers(access_token))
        return self._data(response, List[Role])

    async def list_permissions(self, access_token: str) -> List[PermissionEntity]:
        response = await self._call("GET", "/roles/permissions", headers=self._auth_headers(access_token))
        return self._data(response, List[PermissionEntity])
