"""Request-scoped logging helpers.

Request IDs are bound through structlog contextvars so that every log event
emitted while handling a call carries the same ``request_id``.
"""

from __future__ import annotations

from customer_server.observability.logging import configure_logging, reset_logging
from customer_server.observability.middleware import RequestContextMiddleware

__all__ = ["RequestContextMiddleware", "configure_logging", "reset_logging"]
