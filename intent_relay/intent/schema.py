"""Intent JSON schema (Pydantic models).

This schema is the contract between the query parsers (rules/LLM) and the HTTP clients consuming
`/api/parse-query`. Both parsers produce an `Intent` validated against these models; raw LLM output
goes through `normalize_intent`, which coerces it into the closed enumerations first.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Route(StrEnum):
    """Frontend destinations an intent can point to."""

    franchise_opportunities = "/franchise/oppurtunties"
    startups_zone_opportunities = "/startups-zone-opportunities"
    startups_zone_investorhub = "/startups-zone-investorhub"
    government_scheme_listing = "/government-scheme-listing"
    product_category = "/product-category"
    software_hunt_home = "/software-hunt-home"
    research = "/research"
    expert_listing = "/expert-listing"
    project_reports_listing = "/project-reports-listing"
    data_listing = "/data-listing"
    coming_soon = "/coming-soon"


DEFAULT_ROUTE = Route.franchise_opportunities
OPPORTUNITIES_ROUTE = Route.franchise_opportunities


class Category(StrEnum):
    """Franchise categories understood by the opportunities listing."""

    food = "Food"
    retail = "Retail"
    sports_equipment = "Sports & Equipment"


class SubKeywords(BaseModel):
    """Opportunity filters. Every field is nullable; amounts are in rupees."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    category: Category | None = None
    roi: float | None = Field(default=None, ge=0)
    location: str | None = None
    min_investment: float | None = Field(default=None, ge=0, alias="minInvestment")
    max_investment: float | None = Field(default=None, ge=0, alias="maxInvestment")

    @property
    def is_empty(self) -> bool:
        """Whether every filter is null."""

        return all(
            value is None
            for value in (
                self.category,
                self.roi,
                self.location,
                self.min_investment,
                self.max_investment,
            )
        )


class Intent(BaseModel):
    """A fully validated query intent."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    route: Route
    sub_keywords: SubKeywords = Field(default_factory=SubKeywords, alias="subKeywords")

    @model_validator(mode="after")
    def validate_sub_keywords(self) -> Intent:
        """Only the opportunities route carries filters."""

        if self.route != OPPORTUNITIES_ROUTE and not self.sub_keywords.is_empty:
            raise ValueError(f"subKeywords must be empty for route={self.route}")
        return self

    def to_json(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape returned to clients."""

        return self.model_dump(mode="json", by_alias=True)
