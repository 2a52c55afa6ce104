"""Rupee amount and ROI parsing utilities.

Amounts are written the way Indian franchise listings write them: plain digits with optional
commas ("5,00,000"), optionally prefixed with a currency marker ("₹", "rs", "inr") and optionally
suffixed with a South Asian scale unit:
    - lakh ("l", "lakh", "lac"): x 100,000
    - crore ("cr", "crore"): x 10,000,000
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal

LAKH = 100_000
CRORE = 10_000_000

_UNIT_MULTIPLIERS: tuple[tuple[tuple[str, ...], int], ...] = (
    (("crores", "crore", "cr"), CRORE),
    (("lakhs", "lakh", "lacs", "lac", "l"), LAKH),
)

_CURRENCY_PREFIX_RE = re.compile(r"^(?:₹|\$|rs\.?|inr)")
_PLAIN_AMOUNT_RE = re.compile(r"(?P<number>\d+(?:\.\d+)?)(?P<unit>[a-z]*)")

_UNIT_PATTERN = "crores?|cr|lakhs?|lacs?|l"

# A currency-like amount inside free text. Percentages ("8%") and digits glued to words are not
# amounts.
AMOUNT_PATTERN = (
    r"(?<![\w.,])(?:(?:₹|rs\.?|inr)\s*)?\d[\d,]*(?:\.\d+)?"
    rf"(?:\s*(?:{_UNIT_PATTERN}))?(?![\w%]|\.\d)"
)

_AMOUNT_RE = re.compile(AMOUNT_PATTERN)
_ROI_RE = re.compile(r"(?<![\d.])(?P<value>\d{1,3}(?:\.\d+)?)%")

_BETWEEN_RE = re.compile(
    rf"\bbetween\s+(?P<low>{AMOUNT_PATTERN})\s*(?:and|to|-)\s*(?P<high>{AMOUNT_PATTERN})"
)
_UPPER_BOUND_RE = re.compile(
    rf"\b(?:up\s+to|upto|less\s+than|under|below|maximum|max)\s+(?P<amount>{AMOUNT_PATTERN})"
)
_LOWER_BOUND_RE = re.compile(
    rf"\b(?:at\s+least|minimum|min|above|more\s+than)\s+(?P<amount>{AMOUNT_PATTERN})"
)


@dataclass(frozen=True)
class InvestmentRange:
    """Investment bounds in rupees; either side may be open."""

    min_investment: float | None = None
    max_investment: float | None = None


def parse_currency(text: str) -> float | None:
    """Parse a single amount like "5l", "₹2 cr" or "5,00,000" into rupees.

    Returns:
        The amount, or `None` if the text is not a recognizable amount.
    """

    value = (text or "").strip().lower()
    value = _CURRENCY_PREFIX_RE.sub("", value)
    value = value.replace("₹", "").replace(",", "")
    value = "".join(value.split())

    match = _PLAIN_AMOUNT_RE.fullmatch(value)
    if not match:
        return None

    number = Decimal(match.group("number"))
    unit = match.group("unit")
    if unit:
        for names, multiplier in _UNIT_MULTIPLIERS:
            if unit in names:
                number *= multiplier
                break
        else:
            return None

    amount = float(number)
    if not math.isfinite(amount):
        return None
    return amount


def extract_roi(text: str) -> float | None:
    """Extract the first percentage in the text ("8%", "12.5%")."""

    match = _ROI_RE.search(text)
    if not match:
        return None
    return float(match.group("value"))


def extract_investment_range(text: str) -> InvestmentRange:
    """Extract investment bounds from lower-cased text.

    Priority:
        1) "between A and B" (or "A - B", "A to B") sets both bounds.
        2) Otherwise "up to/under/less than X" sets the max and "at least/minimum X" sets the min;
           both may fire.
        3) If neither bound is set, the first bare amount becomes the minimum.
    """

    between = _BETWEEN_RE.search(text)
    if between:
        return InvestmentRange(
            min_investment=parse_currency(between.group("low")),
            max_investment=parse_currency(between.group("high")),
        )

    min_investment = None
    max_investment = None

    upper = _UPPER_BOUND_RE.search(text)
    if upper:
        max_investment = parse_currency(upper.group("amount"))

    lower = _LOWER_BOUND_RE.search(text)
    if lower:
        min_investment = parse_currency(lower.group("amount"))

    if min_investment is None and max_investment is None:
        bare = _AMOUNT_RE.search(text)
        if bare:
            min_investment = parse_currency(bare.group(0))

    return InvestmentRange(min_investment=min_investment, max_investment=max_investment)
