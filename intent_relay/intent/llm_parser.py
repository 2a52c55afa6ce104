"""Optional LLM-based intent parser (enabled by `GEMINI_API_KEY`).

The LLM is only asked for **Intent JSON**. Its raw text goes through `decode_intent_json` and then
through `normalize_intent`; anything that fails along the way is an `LLMParserError`, which the
parser orchestration turns into a fallback to the rules parser.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Any, Protocol

import httpx

from intent_relay.intent.schema import Category, Route


class LLMParserError(RuntimeError):
    """Raised when the LLM call fails or its output is not usable Intent JSON."""


class LLMTimeoutError(LLMParserError):
    """Raised when the LLM backend does not answer within the configured timeout."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the Gemini `generateContent` API call."""

    api_key: str
    model: str = "gemini-1.5-flash"
    api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_s: float = 15.0


class IntentGenerator(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate_intent_json(self, prompt: str) -> str:
        """Return the model's raw text answer; raise `LLMParserError` on transport failure."""
        ...


_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(?P<body>.*?)\s*```$", flags=re.DOTALL)


@lru_cache(maxsize=1)
def _load_prompt() -> Template:
    prompt_path = Path(__file__).resolve().parent / "prompt_intent_v1.md"
    return Template(prompt_path.read_text(encoding="utf-8"))


def _strip_code_fences(text: str) -> str:
    value = (text or "").strip()
    match = _CODE_FENCE_RE.match(value)
    if match:
        return match.group("body")
    return value


def _generate_content_url(config: LLMConfig) -> str:
    return f"{config.api_base.rstrip('/')}/models/{config.model}:generateContent"


def build_intent_prompt(query: str) -> str:
    """Render the intent prompt with the route and category enumerations and the raw query."""

    return _load_prompt().substitute(
        routes="\n".join(f"- {route.value}" for route in Route),
        categories="\n".join(f"- {category.value}" for category in Category),
        query=query,
    )


def decode_intent_json(text: str) -> dict[str, Any]:
    """Parse raw model text into an intent object.

    Markdown code fences around the JSON are tolerated. The object must carry a `route` field.
    """

    try:
        obj = json.loads(_strip_code_fences(text))
    except json.JSONDecodeError as exc:
        raise LLMParserError("LLM did not return valid JSON") from exc

    if not isinstance(obj, dict) or "route" not in obj:
        raise LLMParserError("LLM JSON has no route field")
    return obj


class GeminiIntentGenerator:
    """`IntentGenerator` backed by the Gemini REST API."""

    def __init__(self, config: LLMConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._config = config
        self._transport = transport

    async def generate_intent_json(self, prompt: str) -> str:
        """Call Gemini once and return the concatenated text parts of the first candidate."""

        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0},
        }
        headers = {
            "x-goog-api-key": self._config.api_key,
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                    timeout=self._config.timeout_s,
                    transport=self._transport,
            ) as client:
                resp = await client.post(_generate_content_url(self._config), json=payload, headers=headers)
                resp.raise_for_status()
        except httpx.TimeoutException as exc:
            raise LLMTimeoutError(f"LLM request timed out after {self._config.timeout_s}s") from exc
        except httpx.HTTPStatusError as exc:
            raise LLMParserError(f"LLM HTTP error: {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise LLMParserError("LLM connection error") from exc

        try:
            decoded = resp.json()
            parts = decoded["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise LLMParserError("Unexpected LLM response format") from exc
