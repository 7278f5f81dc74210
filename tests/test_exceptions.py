"""
Exception handler tests: every failure is returned as an ApiError envelope.
"""

import logging

import pytest

from app.core.exceptions import AppException
from app.main import create_app


@pytest.fixture
def app(make_settings):
    app = create_app(make_settings("test"))

    @app.get("/raise/app")
    async def raise_app():
        raise AppException.not_found("User not found", code="USER_NOT_FOUND")

    @app.get("/raise/conflict")
    async def raise_conflict():
        raise AppException.conflict("Email already registered", errors=["email: taken"])

    @app.get("/raise/crash")
    async def raise_crash():
        raise RuntimeError("database exploded")

    @app.get("/items")
    async def list_items(page: int):
        return {"page": page}

    return app


@pytest.mark.parametrize("factory, status_code, message", [
    (AppException.bad_request, 400, "Bad Request"),
    (AppException.unauthorized, 401, "Unauthorized"),
    (AppException.forbidden, 403, "Forbidden"),
    (AppException.not_found, 404, "Not Found"),
    (AppException.conflict, 409, "Conflict"),
    (AppException.unprocessable, 422, "Unprocessable Entity"),
    (AppException.internal, 500, "Internal Server Error"),
])
def test_app_exception_factories(factory, status_code, message):
    exc = factory()
    assert exc.status_code == status_code
    assert exc.message == message
    assert str(exc) == message


@pytest.mark.asyncio
async def test_app_exception_is_rendered(app, client_for, caplog):
    caplog.set_level(logging.ERROR, logger="app.core.exceptions")
    async with client_for(app) as client:
        response = await client.get("/raise/app")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "User not found",
        "code": "USER_NOT_FOUND",
    }
    assert any("User not found" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_app_exception_errors_are_included(app, client_for):
    async with client_for(app) as client:
        response = await client.get("/raise/conflict")

    assert response.status_code == 409
    assert response.json()["errors"] == ["email: taken"]


@pytest.mark.asyncio
async def test_unknown_route_returns_api_error(app, client_for):
    async with client_for(app) as client:
        response = await client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}


@pytest.mark.asyncio
async def test_validation_error_lists_each_problem(app, client_for):
    async with client_for(app) as client:
        response = await client.get("/items", params={"page": "first"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert len(body["errors"]) == 1
    assert body["errors"][0].startswith("query.page: ")


@pytest.mark.asyncio
async def test_unhandled_exception_returns_generic_error(app, client_for):
    async with client_for(app, raise_app_exceptions=False) as client:
        response = await client.get("/raise/crash")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


@pytest.mark.asyncio
async def test_rate_limit_rejects_excess_requests(make_settings, client_for):
    app = create_app(make_settings("test", RATE_LIMIT_ENABLED=True, RATE_LIMIT_PER_MINUTE=2))
    async with client_for(app) as client:
        statuses = [(await client.get("/api/v1/health")).status_code for _ in range(3)]

    assert statuses == [200, 200, 429]
