"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from intent_relay.app import App
from intent_relay.web.errors import error_response, register_error_handlers
from intent_relay.web.routes import router

logger = logging.getLogger(__name__)


def create_api(app: App) -> FastAPI:
    """Build the HTTP application around an `App` container."""

    settings = app.settings

    @asynccontextmanager
    async def lifespan(_api: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "relay ready llm_enabled=%s max_body_bytes=%d",
            app.parser.llm_enabled,
            settings.max_body_bytes,
        )
        yield
        logger.info("shutting down")

    api = FastAPI(title="Intent Relay API", version="0.1.0", lifespan=lifespan)
    api.state.app = app

    @api.middleware("http")
    async def limit_body_size(
            request: Request,
            call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                return error_response(400, "invalid Content-Length header")
            if size > settings.max_body_bytes:
                return error_response(413, "request body too large")
        return await call_next(request)

    # Added last so it wraps everything, including the body-size rejections.
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(api)
    api.include_router(router)
    return api
