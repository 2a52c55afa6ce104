"""FastAPI route handlers.

Relay endpoints return the upstream status code and JSON body unchanged. The parse endpoint always
answers with an Intent unless the query itself is invalid (400) or both parsers fail (500).
"""

from __future__ import annotations

import logging
from time import monotonic
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from intent_relay.app import App
from intent_relay.web.errors import InvalidRequestError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_app(request: Request) -> App:
    """Return the `App` container attached to the FastAPI instance."""

    return request.app.state.app


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise InvalidRequestError("request body must be valid JSON") from exc
    if not isinstance(body, dict):
        raise InvalidRequestError("request body must be a JSON object")
    return body


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Hello, World!"


@router.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "message": "Proxy server is running"}


@router.post("/api/claude")
async def relay_chat(request: Request, app: App = Depends(get_app)) -> JSONResponse:
    """Forward `{apiKey?, data}` to the chat upstream."""

    body = await _read_json_object(request)
    data = body.get("data")
    if not isinstance(data, dict):
        raise InvalidRequestError("data object required")
    api_key = body.get("apiKey")
    if api_key is not None and not isinstance(api_key, str):
        raise InvalidRequestError("apiKey must be a string")

    upstream = await app.relay.forward_chat(api_key=api_key, data=data)
    return JSONResponse(status_code=upstream.status_code, content=upstream.body)


@router.post("/api/tavily")
async def relay_search(request: Request, app: App = Depends(get_app)) -> JSONResponse:
    """Forward the request body verbatim to the search upstream."""

    body = await _read_json_object(request)
    upstream = await app.relay.forward_search(body)
    return JSONResponse(status_code=upstream.status_code, content=upstream.body)


@router.post("/api/parse-query")
async def parse_query(request: Request, app: App = Depends(get_app)) -> dict[str, Any]:
    """Parse `{query}` into an Intent (LLM when configured, rules otherwise)."""

    started = monotonic()
    body = await _read_json_object(request)
    result = await app.parser.parse_with_source(body.get("query"))

    latency_ms = int((monotonic() - started) * 1000)
    logger.info(
        "parsed source=%s route=%s latency_ms=%d",
        result.source,
        result.intent.route,
        latency_ms,
    )
    return result.intent.to_json()
