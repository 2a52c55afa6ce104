"""Rules-based English query parser (fallback).

This parser is deterministic and always available:
    - it only recognizes franchise-discovery filters (category, ROI, city, investment range),
    - it always targets the opportunities route,
    - it produces an Intent validated by the Pydantic schema.
"""

from __future__ import annotations

from intent_relay.intent.amounts import extract_investment_range, extract_roi
from intent_relay.intent.dictionaries import detect_category, detect_location
from intent_relay.intent.normalize import normalize_text
from intent_relay.intent.schema import OPPORTUNITIES_ROUTE, Intent, SubKeywords


class RulesParserError(ValueError):
    """Raised when the rules parser cannot produce a valid intent."""


def parse_intent(text: str) -> Intent:
    """Parse an input string into a validated opportunities Intent.

    Raises:
        RulesParserError: If the input is empty or the extracted filters fail validation.
    """

    normalized = normalize_text(text)
    if not normalized:
        raise RulesParserError("empty input")

    investment = extract_investment_range(normalized)

    try:
        return Intent(
            route=OPPORTUNITIES_ROUTE,
            sub_keywords=SubKeywords(
                category=detect_category(normalized),
                roi=extract_roi(normalized),
                location=detect_location(normalized),
                min_investment=investment.min_investment,
                max_investment=investment.max_investment,
            ),
        )
    except ValueError as exc:
        raise RulesParserError(str(exc)) from exc
