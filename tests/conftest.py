from __future__ import annotations

import logging
import socket
from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from customer_server.config import get_settings
from customer_server.main import app
from customer_server.observability import reset_logging
from customer_server.store.memory import create_store, reset_customer_ids, set_store


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "LOG_LEVEL", "LOG_JSON", "SHUTDOWN_GRACE_SECONDS", "SHUTDOWN_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("SEED_CUSTOMERS", "true")
    get_settings.cache_clear()

    reset_customer_ids()
    set_store(create_store(seed=True))

    yield

    set_store(None)
    reset_customer_ids()
    get_settings.cache_clear()


@pytest.fixture
def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fresh_logging():
    names = ("", "uvicorn", "uvicorn.error", "uvicorn.access")
    saved = {}
    for name in names:
        logger = logging.getLogger(name)
        saved[name] = (list(logger.handlers), logger.level, logger.propagate, logger.disabled)
    reset_logging()

    yield

    reset_logging()
    for name, (handlers, level, propagate, disabled) in saved.items():
        logger = logging.getLogger(name)
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
        logger.disabled = disabled
