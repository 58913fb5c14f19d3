"""Error handlers mapping domain exceptions to HTTP responses."""

import falcon
import falcon.asgi
import structlog

from permsvc.domain.exceptions import ClientError, NotFound

logger = structlog.get_logger(__name__)


async def handle_client_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: ClientError, params: dict
) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"reason": str(ex)}


async def handle_not_found(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: NotFound, params: dict
) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"reason": str(ex)}


async def handle_server_fault(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params: dict
) -> None:
    logger.exception(
        "request_failed",
        method=req.method,
        path=req.path,
        error_type=type(ex).__name__,
    )
    resp.status = falcon.HTTP_500
    resp.media = {"reason": "internal server error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers; Falcon picks the closest match in the exception's MRO.

    UnknownPermissionLevel is both a ClientError and a NotFound and lists
    ClientError first, so it maps to 400.
    """
    app.add_error_handler(Exception, handle_server_fault)
    app.add_error_handler(NotFound, handle_not_found)
    app.add_error_handler(ClientError, handle_client_error)
