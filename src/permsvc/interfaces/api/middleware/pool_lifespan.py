"""Pool lifespan middleware - opens pools on startup, closes on shutdown."""

from typing import Any

import structlog
from psycopg_pool import AsyncConnectionPool

logger = structlog.get_logger(__name__)


class PoolLifespanMiddleware:
    """Opens every connection pool on startup and closes them on shutdown."""

    def __init__(self, *pools: AsyncConnectionPool) -> None:
        self._pools = pools

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Open pools when ASGI server starts."""
        for pool in self._pools:
            await pool.open()
        logger.info("connection_pools_opened", count=len(self._pools))

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Close pools when ASGI server shuts down."""
        for pool in reversed(self._pools):
            await pool.close()
        logger.info("connection_pools_closed", count=len(self._pools))
