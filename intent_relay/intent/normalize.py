"""Normalization of user text and of untrusted intent objects."""

from __future__ import annotations

import math
import re
from typing import Any

from intent_relay.intent.amounts import parse_currency
from intent_relay.intent.dictionaries import canonical_location, normalize_category
from intent_relay.intent.schema import DEFAULT_ROUTE, OPPORTUNITIES_ROUTE, Intent, Route, SubKeywords

_MULTISPACE_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Normalize user text for rules-based parsing.

    Normalization is intentionally conservative:
        - Lowercase.
        - Normalize unicode dashes to ASCII hyphen.
        - Collapse whitespace.

    Punctuation is kept: amounts ("5,00,000", "₹2cr") and percentages ("8%") depend on it.
    """

    value = (text or "").strip().lower()
    value = value.replace("—", "-").replace("–", "-")
    value = _MULTISPACE_RE.sub(" ", value).strip()
    return value


def _coerce_route(value: Any) -> Route:
    try:
        return Route(value)
    except (TypeError, ValueError):
        return DEFAULT_ROUTE


def _coerce_amount(value: Any, *, percent: bool = False) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number: float | None = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if percent:
            text = text.removesuffix("%")
        number = parse_currency(text)
    else:
        return None

    if number is None or not math.isfinite(number) or number < 0:
        return None
    return number


def _coerce_location(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    return canonical_location(value) or value.strip()


def normalize_intent(obj: Any) -> Intent:
    """Normalize and validate an Intent from an arbitrary decoded JSON object.

    Unknown routes fall back to `DEFAULT_ROUTE`. Filters survive only on the opportunities route,
    where category synonyms map to their canonical label and malformed values become null.

    Raises:
        ValueError: If `obj` is not a JSON object.
    """

    if not isinstance(obj, dict):
        raise ValueError("intent must be a JSON object")

    route = _coerce_route(obj.get("route"))
    if route != OPPORTUNITIES_ROUTE:
        return Intent(route=route)

    raw = obj.get("subKeywords")
    if not isinstance(raw, dict):
        raw = {}

    return Intent(
        route=route,
        sub_keywords=SubKeywords(
            category=normalize_category(raw.get("category")),
            roi=_coerce_amount(raw.get("roi"), percent=True),
            location=_coerce_location(raw.get("location")),
            min_investment=_coerce_amount(raw.get("minInvestment")),
            max_investment=_coerce_amount(raw.get("maxInvestment")),
        ),
    )
