"""
Health service.
Provides health check functionality.
"""

import time
from typing import Optional

from app.core.config import settings
from app.core.request_logging import RequestLoggerConfig
from app.services.base_service import BaseService
from app.schemas.health import HealthResponse


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(
        self,
        environment: Optional[str] = None,
        request_logger_config: Optional[RequestLoggerConfig] = None,
    ):
        self.start_time = time.time()
        self.environment = environment or settings.ENVIRONMENT
        self.request_logger_config = request_logger_config

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {"environment": self.environment}
        if self.request_logger_config is not None:
            checks["request_logging"] = "enabled" if self.request_logger_config.enabled else "skipped"

        return HealthResponse(
            status="ok",
            uptime=uptime_str,
            checks=checks,
        )
