"""English dictionaries for categories and city names.

These tables are used by the rules-based parser and by LLM output normalization. They are ordered
tuples rather than dicts because scanning is first-match-wins: when keywords of several categories
(or several city aliases) co-occur, the earlier entry takes precedence.
"""

from __future__ import annotations

from typing import Any

from intent_relay.intent.schema import Category

# Matched as substrings: short words that hide inside common ones ("tea" in "team") are left out.
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (
        Category.food,
        (
            "food",
            "restaurant",
            "cafe",
            "café",
            "bakery",
            "bakeries",
            "kitchen",
            "qsr",
            "pizza",
            "burger",
            "biryani",
            "coffee",
            "juice",
            "ice cream",
            "dessert",
            "snack",
            "beverage",
            "dining",
            "eatery",
            "eateries",
        ),
    ),
    (
        Category.retail,
        (
            "retail",
            "supermarket",
            "grocery",
            "groceries",
            "kirana",
            "convenience store",
            "departmental store",
            "fashion",
            "apparel",
            "clothing",
            "garment",
            "boutique",
            "footwear",
            "jewellery",
            "jewelry",
            "pharmacy",
            "pharmacies",
            "electronics",
            "stationery",
            "optical",
        ),
    ),
    (
        Category.sports_equipment,
        (
            "sport",
            "equipment",
            "fitness",
            "gym",
            "cricket",
            "football",
            "badminton",
            "tennis",
            "yoga",
            "athletic",
            "cycling",
            "bicycle",
        ),
    ),
)

# Canonical labels and common synonyms an LLM may answer with.
CATEGORY_ALIASES: tuple[tuple[str, Category], ...] = (
    ("food", Category.food),
    ("food & beverage", Category.food),
    ("food and beverage", Category.food),
    ("f&b", Category.food),
    ("retail", Category.retail),
    ("sports & equipment", Category.sports_equipment),
    ("sports and equipment", Category.sports_equipment),
    ("sports equipment", Category.sports_equipment),
    ("sports", Category.sports_equipment),
    ("sport", Category.sports_equipment),
    ("equipment", Category.sports_equipment),
)

CANONICAL_CITIES: tuple[str, ...] = (
    "Bangalore",
    "Mumbai",
    "Delhi",
    "Chennai",
    "Kolkata",
    "Hyderabad",
    "Pune",
    "Ahmedabad",
    "Gurugram",
    "Noida",
    "Jaipur",
    "Lucknow",
    "Chandigarh",
    "Kochi",
    "Indore",
    "Coimbatore",
)

# Matched as substrings, same as the category keywords.
CITY_ALIASES: tuple[tuple[str, str], ...] = (
    ("bengaluru", "Bangalore"),
    ("bengalore", "Bangalore"),
    ("banglore", "Bangalore"),
    ("bangaluru", "Bangalore"),
    ("blr", "Bangalore"),
    ("navi mumbai", "Mumbai"),
    ("bombay", "Mumbai"),
    ("mumbay", "Mumbai"),
    ("new delhi", "Delhi"),
    ("dilli", "Delhi"),
    ("madras", "Chennai"),
    ("chenai", "Chennai"),
    ("calcutta", "Kolkata"),
    ("kolkatta", "Kolkata"),
    ("secunderabad", "Hyderabad"),
    ("hyderbad", "Hyderabad"),
    ("hyd", "Hyderabad"),
    ("poona", "Pune"),
    ("amdavad", "Ahmedabad"),
    ("ahmadabad", "Ahmedabad"),
    ("gurgaon", "Gurugram"),
    ("greater noida", "Noida"),
    ("cochin", "Kochi"),
    ("kochin", "Kochi"),
)


_CATEGORY_ALIAS_LOOKUP: dict[str, Category] = {alias: category for alias, category in CATEGORY_ALIASES}


def detect_category(text: str) -> Category | None:
    """Return the first category with a keyword contained in the text.

    Keywords are plain substrings ("sport" matches "sportswear", "food" matches "foodcourt").
    Groups are tried in table order and the first group with any hit wins.
    """

    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return None


def detect_location(text: str) -> str | None:
    """Return the canonical city mentioned in the text.

    Aliases (misspellings, old names, metro abbreviations) are checked first as substrings, in
    table order.
    Otherwise the first canonical city name literally present in the text wins.
    """

    lowered = text.lower()
    for alias, city in CITY_ALIASES:
        if alias in lowered:
            return city

    for city in CANONICAL_CITIES:
        if city.lower() in lowered:
            return city
    return None


def canonical_location(value: str) -> str | None:
    """Map a single city name (any case, alias or canonical) to its canonical form."""

    key = " ".join(value.lower().split())
    for alias, city in CITY_ALIASES:
        if key == alias:
            return city
    for city in CANONICAL_CITIES:
        if key == city.lower():
            return city
    return None


def normalize_category(value: Any) -> Category | None:
    """Map a category label or synonym to its canonical `Category`; unknown values map to `None`."""

    if not isinstance(value, str):
        return None
    key = " ".join(value.lower().split())
    return _CATEGORY_ALIAS_LOOKUP.get(key)
