"""HTTP error mapping.

Every error response is `{"error": "<message>"}`. Messages are short and never include stack
traces; details stay in the logs.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from intent_relay.intent.parser import IntentParserError, InvalidInputError
from intent_relay.relay.client import UpstreamError

logger = logging.getLogger(__name__)


class InvalidRequestError(ValueError):
    """Raised when a request body is not the JSON shape an endpoint expects."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _handle_invalid_input(_request: Request, exc: Exception) -> JSONResponse:
    return error_response(400, str(exc))


async def _handle_upstream_error(request: Request, exc: Exception) -> JSONResponse:
    logger.info("upstream failure path=%s reason=%s", request.url.path, exc)
    return error_response(500, str(exc))


async def _handle_parser_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("intent parsing failed path=%s reason=%s", request.url.path, exc)
    return error_response(500, "query parsing failed")


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request failed path=%s", request.url.path, exc_info=exc)
    return error_response(500, "internal server error")


def register_error_handlers(api: FastAPI) -> None:
    """Attach the error-kind to HTTP status mapping to the FastAPI app."""

    api.add_exception_handler(InvalidInputError, _handle_invalid_input)
    api.add_exception_handler(InvalidRequestError, _handle_invalid_input)
    api.add_exception_handler(UpstreamError, _handle_upstream_error)
    api.add_exception_handler(IntentParserError, _handle_parser_error)
    api.add_exception_handler(Exception, _handle_unexpected_error)
