from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

router = APIRouter(tags=["greetings"])

_HTML_HELLO = """
<html>
    <head>
    </head>
    <body>
        <h1>Hello World!</h1>
    </body>
</html>
"""


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "This is the root"


@router.get("/plain-hello", response_class=PlainTextResponse)
async def plain_hello() -> str:
    return "Hello World!"


@router.get("/html-hello", response_class=HTMLResponse)
async def html_hello() -> str:
    return _HTML_HELLO
