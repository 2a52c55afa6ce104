"""Tests for the Gemini-backed intent generator and LLM output decoding."""

from __future__ import annotations

import json

import httpx
import pytest

from intent_relay.intent.llm_parser import (
    GeminiIntentGenerator,
    LLMConfig,
    LLMParserError,
    LLMTimeoutError,
    build_intent_prompt,
    decode_intent_json,
)


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def test_prompt_embeds_enumerations_and_query() -> None:
    prompt = build_intent_prompt("gym franchise in pune, costs $5")

    assert "/franchise/oppurtunties" in prompt
    assert "/coming-soon" in prompt
    assert "- Sports & Equipment" in prompt
    assert prompt.rstrip().endswith("gym franchise in pune, costs $5")


def test_decode_strips_code_fences() -> None:
    text = '```json\n{"route": "/research", "subKeywords": {}}\n```'
    assert decode_intent_json(text) == {"route": "/research", "subKeywords": {}}


def test_decode_plain_json() -> None:
    assert decode_intent_json(' {"route": "/data-listing"} ') == {"route": "/data-listing"}


@pytest.mark.parametrize("text", ["Sure! Here you go.", "[]", '{"subKeywords": {}}', ""])
def test_decode_rejects_unusable_output(text: str) -> None:
    with pytest.raises(LLMParserError):
        decode_intent_json(text)


@pytest.mark.asyncio
async def test_generator_posts_prompt_and_returns_text() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_gemini_body('{"route": "/research"}'))

    generator = GeminiIntentGenerator(
        LLMConfig(api_key="secret", model="gemini-test", api_base="https://llm.test/v1beta/"),
        transport=httpx.MockTransport(handler),
    )

    text = await generator.generate_intent_json("PROMPT")

    assert text == '{"route": "/research"}'
    assert len(seen) == 1
    request = seen[0]
    assert str(request.url) == "https://llm.test/v1beta/models/gemini-test:generateContent"
    assert request.headers["x-goog-api-key"] == "secret"
    payload = json.loads(request.content)
    assert payload["contents"][0]["parts"][0]["text"] == "PROMPT"
    assert payload["generationConfig"]["temperature"] == 0


@pytest.mark.asyncio
async def test_generator_http_error() -> None:
    generator = GeminiIntentGenerator(
        LLMConfig(api_key="secret"),
        transport=httpx.MockTransport(lambda _request: httpx.Response(429, json={"error": "quota"})),
    )

    with pytest.raises(LLMParserError, match="429"):
        await generator.generate_intent_json("PROMPT")


@pytest.mark.asyncio
async def test_generator_timeout_has_its_own_error_kind() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    generator = GeminiIntentGenerator(LLMConfig(api_key="secret"), transport=httpx.MockTransport(handler))

    with pytest.raises(LLMTimeoutError):
        await generator.generate_intent_json("PROMPT")


@pytest.mark.asyncio
async def test_generator_unexpected_response_shape() -> None:
    generator = GeminiIntentGenerator(
        LLMConfig(api_key="secret"),
        transport=httpx.MockTransport(lambda _request: httpx.Response(200, json={"candidates": []})),
    )

    with pytest.raises(LLMParserError):
        await generator.generate_intent_json("PROMPT")
