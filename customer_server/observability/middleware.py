from __future__ import annotations

import re
import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import Headers, MutableHeaders

REQUEST_ID_HEADER = "X-Request-ID"
SERVER_HEADER = "customer-server/0.1.0"

# Caller-supplied ids are echoed back, so keep them short and header-safe.
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}", re.ASCII)


def _request_id_from(scope: dict[str, Any]) -> str:
    incoming = Headers(scope=scope).get(REQUEST_ID_HEADER)
    if incoming and _REQUEST_ID_PATTERN.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


def _route_template(scope: dict[str, Any]) -> str | None:
    route = scope.get("route")
    return getattr(route, "path", None)


class RequestContextMiddleware:
    """Call logging and default response headers for every HTTP call.

    Each call gets a request id (the caller's ``X-Request-ID`` when it is
    well formed) bound into the structlog context and echoed in the
    response, a ``Server`` header, and one ``http_request`` event carrying
    the matched route template and the final status.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = _request_id_from(scope)
        structlog.contextvars.bind_contextvars(request_id=request_id)
        access_logger = structlog.get_logger("access")
        start = perf_counter()
        status_code: int | None = None

        async def send_with_defaults(message: dict[str, Any]) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message["status"])
                headers = MutableHeaders(scope=message)
                headers[REQUEST_ID_HEADER] = request_id
                headers.setdefault("Server", SERVER_HEADER)
            await send(message)

        try:
            await self.app(scope, receive, send_with_defaults)
        except Exception:
            access_logger.exception(
                "http_request_failed",
                method=scope.get("method"),
                path=scope.get("path"),
                route=_route_template(scope),
            )
            raise
        else:
            log = access_logger.error if status_code is None or status_code >= 500 else access_logger.info
            log(
                "http_request",
                method=scope.get("method"),
                path=scope.get("path"),
                route=_route_template(scope),
                status_code=status_code,
                elapsed_ms=round((perf_counter() - start) * 1000.0, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()
