"""
Health service.
Reports uptime and whether the backend API answers.
"""

import time

from clientdesk.core.exceptions import AppException
from clientdesk.core.integrations.backend_api import BackendApiClient
from clientdesk.schemas.health import HealthResponse
from clientdesk.services.base_service import BaseService


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self, backend: BackendApiClient):
        self.backend = backend
        self.start_time = time.time()

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, and checks
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration format

        checks = {}

        try:
            await self.backend.check_health()
            checks["backend_api"] = "ok"
        except AppException as e:
            checks["backend_api"] = f"error: {e.message}"

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
        )
