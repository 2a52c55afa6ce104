"""Application composition root.

This module wires together configuration, the relay client and the intent parser for the HTTP
runtime. Nothing here holds process-wide state: every dependency lives on the `App` container.
"""

from __future__ import annotations

from dataclasses import dataclass

from intent_relay.config.settings import Settings
from intent_relay.intent.llm_parser import GeminiIntentGenerator, LLMConfig
from intent_relay.intent.parser import IntentParser
from intent_relay.relay.client import RelayClient, RelayConfig


@dataclass(frozen=True)
class App:
    """Shared application dependencies for route handlers."""

    settings: Settings
    parser: IntentParser
    relay: RelayClient


def create_app(settings: Settings) -> App:
    """Create the application container.

    Note:
        The intent parser only gets an LLM generator when `GEMINI_API_KEY` is set.
    """

    generator = None
    if settings.gemini_api_key:
        generator = GeminiIntentGenerator(
            LLMConfig(
                api_key=settings.gemini_api_key,
                model=settings.llm_model,
                api_base=settings.llm_api_base,
                timeout_s=settings.llm_timeout_s,
            )
        )

    relay = RelayClient(
        RelayConfig(
            chat_url=settings.anthropic_api_url,
            anthropic_version=settings.anthropic_version,
            search_url=settings.tavily_api_url,
            chat_api_key=settings.anthropic_api_key,
            search_api_key=settings.tavily_api_key,
            timeout_s=settings.upstream_timeout_s,
        )
    )
    return App(settings=settings, parser=IntentParser(generator), relay=relay)
