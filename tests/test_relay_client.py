"""Tests for the upstream relay client (httpx mock transport, no network)."""

from __future__ import annotations

import json

import httpx
import pytest

from intent_relay.relay.client import (
    RelayClient,
    RelayConfig,
    UpstreamError,
    UpstreamTimeoutError,
)

_CONFIG = RelayConfig(
    chat_url="https://chat.test/v1/messages",
    search_url="https://search.test/search",
    timeout_s=5.0,
)


def _client(handler, config: RelayConfig = _CONFIG) -> RelayClient:
    return RelayClient(config, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_forward_chat_sets_headers_and_relays_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "content": [{"type": "text", "text": "hi"}],
                "stop_reason": "end_turn",
                "usage": {"output_tokens": 1},
            },
        )

    data = {"model": "claude-test", "messages": [{"role": "user", "content": "hello"}]}
    response = await _client(handler).forward_chat(api_key="caller-key", data=data)

    assert response.status_code == 200
    assert response.body["content"][0]["text"] == "hi"
    request = seen[0]
    assert str(request.url) == "https://chat.test/v1/messages"
    assert request.headers["x-api-key"] == "caller-key"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert json.loads(request.content) == data


@pytest.mark.asyncio
async def test_forward_chat_propagates_upstream_status() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"type": "error", "error": {"type": "authentication_error"}})

    response = await _client(handler).forward_chat(api_key=None, data={"messages": []})

    assert response.status_code == 401
    assert response.body["error"]["type"] == "authentication_error"


@pytest.mark.asyncio
async def test_forward_chat_uses_server_key_when_caller_has_none() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    config = RelayConfig(chat_url=_CONFIG.chat_url, chat_api_key="server-key")
    await _client(handler, config).forward_chat(api_key=None, data={"messages": []})

    assert seen[0].headers["x-api-key"] == "server-key"


@pytest.mark.asyncio
async def test_forward_search_injects_server_key_only_when_missing() -> None:
    payloads: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json={"results": [{"url": "https://a.test"}]})

    config = RelayConfig(search_url=_CONFIG.search_url, search_api_key="server-key")
    client = _client(handler, config)

    response = await client.forward_search({"query": "franchise"})
    await client.forward_search({"query": "franchise", "api_key": "caller-key"})

    assert response.status_code == 200
    assert response.body["results"][0]["url"] == "https://a.test"
    assert payloads[0] == {"query": "franchise", "api_key": "server-key"}
    assert payloads[1] == {"query": "franchise", "api_key": "caller-key"}


@pytest.mark.asyncio
async def test_transport_error_raises_upstream_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError, match="connection refused"):
        await _client(handler).forward_search({"query": "x"})


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamTimeoutError):
        await _client(handler).forward_chat(api_key="k", data={"messages": []})


@pytest.mark.asyncio
async def test_non_json_body_raises_upstream_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with pytest.raises(UpstreamError):
        await _client(handler).forward_search({"query": "x"})
