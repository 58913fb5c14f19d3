"""Health check endpoints."""

import falcon
import falcon.asgi
import structlog

from permsvc import __version__
from permsvc.domain.exceptions import ServerFault

logger = structlog.get_logger(__name__)


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok", "service": "permsvc", "version": __version__}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (permissions database)."""
        try:
            async with self._uow_factory() as uow:
                levels = await uow.permission_levels.list_all()
        except ServerFault as e:
            logger.warning("readiness_check_failed", error=str(e))
            resp.media = {"status": "unavailable"}
            resp.status = falcon.HTTP_503
            return
        resp.media = {"status": "ready", "permission_levels": len(levels)}
        resp.status = falcon.HTTP_200
