"""Tests for rupee amount, ROI and investment range parsing."""

from __future__ import annotations

import pytest

from intent_relay.intent.amounts import extract_investment_range, extract_roi, parse_currency


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5l", 500_000),
        ("2cr", 20_000_000),
        ("1.5 cr", 15_000_000),
        ("2.3l", 230_000),
        ("10 lakhs", 1_000_000),
        ("₹5,00,000", 500_000),
        ("rs. 75,000", 75_000),
        ("INR 3 crore", 30_000_000),
        ("250000", 250_000),
    ],
)
def test_parse_currency(text: str, expected: float) -> None:
    assert parse_currency(text) == expected


@pytest.mark.parametrize("text", ["abc", "", "5 kg", "lakh", "1" + "0" * 400])
def test_parse_currency_rejects_non_amounts(text: str) -> None:
    assert parse_currency(text) is None


def test_extract_roi_first_percentage_wins() -> None:
    assert extract_roi("with 8% roi") == 8
    assert extract_roi("roi 12.5% or 20%") == 12.5
    assert extract_roi("1000% returns") is None
    assert extract_roi("good returns") is None


def test_between_sets_both_bounds() -> None:
    rng = extract_investment_range("sports shop between 5l and 10l")
    assert rng.min_investment == 500_000
    assert rng.max_investment == 1_000_000

    rng = extract_investment_range("between ₹20 lakh - ₹1 cr")
    assert rng.min_investment == 2_000_000
    assert rng.max_investment == 10_000_000


def test_upper_bound_only() -> None:
    rng = extract_investment_range("food franchise under 20 lakhs.")
    assert rng.min_investment is None
    assert rng.max_investment == 2_000_000

    rng = extract_investment_range("upto 50l")
    assert rng.max_investment == 5_000_000


def test_lower_and_upper_bounds_both_fire() -> None:
    rng = extract_investment_range("at least 5l and up to 1cr")
    assert rng.min_investment == 500_000
    assert rng.max_investment == 10_000_000


def test_bare_amount_defaults_to_minimum() -> None:
    rng = extract_investment_range("retail franchise 15l investment")
    assert rng.min_investment == 1_500_000
    assert rng.max_investment is None


def test_percentages_are_not_amounts() -> None:
    rng = extract_investment_range("food franchise with 8% roi")
    assert rng.min_investment is None
    assert rng.max_investment is None
