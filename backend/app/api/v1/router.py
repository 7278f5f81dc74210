"""
API v1 router that aggregates all endpoint routers.
Authentication and user management are served by the external auth service;
this API only exposes operational endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import health

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])
