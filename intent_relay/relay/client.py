"""Upstream relay client for the chat and search APIs.

The relay is a pass-through: it attaches the headers each upstream requires, posts the caller's
payload once (no retries) and hands back the upstream status code and JSON body unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_PREVIEW_CHARS_REQUEST = 100
_PREVIEW_CHARS_RESPONSE = 200


class UpstreamError(RuntimeError):
    """Raised when an upstream call fails or returns a body that is not JSON."""


class UpstreamTimeoutError(UpstreamError):
    """Raised when an upstream does not answer within the configured timeout."""


@dataclass(frozen=True)
class RelayConfig:
    """Upstream endpoints, headers and server-side credentials for the relay."""

    chat_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    search_url: str = "https://api.tavily.com/search"
    chat_api_key: str | None = None
    search_api_key: str | None = None
    timeout_s: float = 15.0


@dataclass(frozen=True)
class UpstreamResponse:
    """Upstream HTTP status code and decoded JSON body."""

    status_code: int
    body: Any


def _log_chat_request(data: dict[str, Any]) -> None:
    messages = data.get("messages")
    if not isinstance(messages, list):
        logger.info("chat request messages=0")
        return

    logger.info("chat request messages=%d", len(messages))
    for idx, msg in enumerate(messages):
        if not isinstance(msg, dict):
            continue
        content = msg.get("content")
        if isinstance(content, str):
            logger.debug(
                "chat message idx=%d role=%s content=str preview=%r",
                idx,
                msg.get("role"),
                content[:_PREVIEW_CHARS_REQUEST],
            )
        elif isinstance(content, list):
            logger.debug(
                "chat message idx=%d role=%s content=list items=%d types=%s",
                idx,
                msg.get("role"),
                len(content),
                [item.get("type") if isinstance(item, dict) else None for item in content],
            )


def _log_chat_response(status_code: int, body: Any) -> None:
    if not isinstance(body, dict):
        logger.info("chat response status=%d", status_code)
        return

    content = body.get("content")
    blocks = content if isinstance(content, list) else []
    usage = body.get("usage") if isinstance(body.get("usage"), dict) else {}
    logger.info(
        "chat response status=%d blocks=%d stop_reason=%s output_tokens=%s",
        status_code,
        len(blocks),
        body.get("stop_reason"),
        usage.get("output_tokens"),
    )
    for idx, block in enumerate(blocks):
        if not isinstance(block, dict):
            continue
        text = block.get("text")
        if block.get("type") == "text" and isinstance(text, str):
            logger.debug(
                "chat block idx=%d type=text length=%d preview=%r",
                idx,
                len(text),
                text[:_PREVIEW_CHARS_RESPONSE],
            )
        else:
            logger.debug("chat block idx=%d type=%s", idx, block.get("type"))


class RelayClient:
    """Forward caller payloads to the chat and search upstreams."""

    def __init__(self, config: RelayConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    async def forward_chat(self, *, api_key: str | None, data: dict[str, Any]) -> UpstreamResponse:
        """Relay a Messages API payload.

        The caller's `api_key` wins over the server-side key; with neither, no key header is sent
        and the upstream's own authentication error is relayed.
        """

        headers = {
            "Content-Type": "application/json",
            "anthropic-version": self._config.anthropic_version,
        }
        key = api_key or self._config.chat_api_key
        if key:
            headers["x-api-key"] = key

        _log_chat_request(data)
        response = await self._post(self._config.chat_url, payload=data, headers=headers)
        _log_chat_response(response.status_code, response.body)
        return response

    async def forward_search(self, body: dict[str, Any]) -> UpstreamResponse:
        """Relay a search payload verbatim (the server-side key fills a missing `api_key`)."""

        payload = body
        if "api_key" not in body and self._config.search_api_key:
            payload = {**body, "api_key": self._config.search_api_key}

        logger.info("search request query=%r", body.get("query"))
        response = await self._post(
            self._config.search_url,
            payload=payload,
            headers={"Content-Type": "application/json"},
        )

        results = response.body.get("results") if isinstance(response.body, dict) else None
        logger.info(
            "search response status=%d results=%d",
            response.status_code,
            len(results) if isinstance(results, list) else 0,
        )
        return response

    async def _post(self, url: str, *, payload: Any, headers: dict[str, str]) -> UpstreamResponse:
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_s, transport=self._transport) as client:
                resp = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            logger.error("upstream timeout url=%s", url)
            raise UpstreamTimeoutError("upstream request timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("upstream transport error url=%s error=%s", url, exc)
            raise UpstreamError(str(exc) or "upstream request failed") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            logger.error("upstream returned non-JSON body url=%s status=%d", url, resp.status_code)
            raise UpstreamError("upstream returned an invalid JSON body") from exc

        return UpstreamResponse(status_code=resp.status_code, body=body)
