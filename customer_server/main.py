from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.gzip import GZipMiddleware

from customer_server.api.customers import router as customers_router
from customer_server.api.greetings import router as greetings_router
from customer_server.config import get_settings
from customer_server.observability import RequestContextMiddleware
from customer_server.store.memory import get_store


app = FastAPI(title="Customer Server", version="0.1.0")
app.add_middleware(GZipMiddleware, minimum_size=get_settings().gzip_minimum_size)
app.add_middleware(RequestContextMiddleware)
app.include_router(greetings_router)
app.include_router(customers_router)


@app.exception_handler(StarletteHTTPException)
async def _plain_text_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


@app.on_event("startup")
def _startup() -> None:
    store = get_store()
    structlog.get_logger(__name__).info("customer_store_ready", customers=len(store))
