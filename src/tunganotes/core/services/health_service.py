"""Health service implementation."""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ..redis_client import RedisClient, get_redis_client
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession, redis_client: RedisClient | None = None):
        self.session = session
        self.redis_client = redis_client or get_redis_client()
        self.settings = get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()
        redis_health = await self.check_redis_health()

        overall_status = "healthy"
        if not db_health["connected"] or not redis_health["connected"]:
            overall_status = "unhealthy"

        return HealthCheckResponse(
            status=overall_status,
            timestamp=datetime.now(timezone.utc),
            version=self.settings.app_version,
            checks={"database": db_health, "redis": redis_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        start = time.perf_counter()
        try:
            result = await self.session.execute(text("SELECT 1"))
            result.scalar()
        except Exception as e:
            return _unhealthy(e)
        return _healthy(start)

    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        start = time.perf_counter()
        try:
            connected = await self.redis_client.ping()
        except Exception as e:
            return _unhealthy(e)
        if not connected:
            return {"connected": False, "status": "unhealthy", "error": "not connected"}
        return _healthy(start)


def _healthy(start: float) -> Dict[str, Any]:
    return {
        "connected": True,
        "status": "healthy",
        "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
    }


def _unhealthy(error: Exception) -> Dict[str, Any]:
    return {"connected": False, "status": "unhealthy", "error": str(error)}
