"""Intent parser orchestration (LLM optional; rules-based fallback)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from intent_relay.intent.llm_parser import (
    IntentGenerator,
    LLMParserError,
    build_intent_prompt,
    decode_intent_json,
)
from intent_relay.intent.normalize import normalize_intent
from intent_relay.intent.rules_parser import RulesParserError
from intent_relay.intent.rules_parser import parse_intent as parse_rules_intent
from intent_relay.intent.schema import Intent

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when the query itself is missing, not a string, or blank."""


class IntentParserError(RuntimeError):
    """Raised when no parser can produce a valid intent."""


ParseSource = Literal["llm", "rules"]


@dataclass(frozen=True)
class ParseResult:
    """Validated intent plus information about which parser produced it."""

    intent: Intent
    source: ParseSource


class IntentParser:
    """Parse free-text queries into intents.

    The generator is injected: without one, every query goes straight to the rules parser.
    """

    def __init__(self, generator: IntentGenerator | None = None) -> None:
        self._generator = generator

    @property
    def llm_enabled(self) -> bool:
        return self._generator is not None

    async def parse_with_source(self, text: Any) -> ParseResult:
        """Parse text into an Intent object.

        Strategy:
            1) If a generator is configured, ask it for Intent JSON and normalize it.
            2) On any failure/invalid JSON, fall back to the deterministic rules parser.
            3) If rules parsing fails too, raise `IntentParserError`.

        Raises:
            InvalidInputError: If `text` is not a non-blank string.
            IntentParserError: If the rules parser fails.
        """

        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("query string required")

        if self._generator is not None:
            try:
                raw = await self._generator.generate_intent_json(build_intent_prompt(text))
                intent = normalize_intent(decode_intent_json(raw))
                return ParseResult(intent=intent, source="llm")
            except (LLMParserError, ValueError) as exc:
                # Invalid LLM output must never reach the caller; fall back to rules.
                logger.warning("llm intent parsing failed, using rules: %s", exc)

        try:
            intent = parse_rules_intent(text)
            return ParseResult(intent=intent, source="rules")
        except RulesParserError as exc:
            raise IntentParserError(str(exc)) from exc

    async def parse(self, text: Any) -> Intent:
        """Parse text into a validated Intent object (convenience wrapper)."""

        return (await self.parse_with_source(text)).intent
