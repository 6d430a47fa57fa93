"""
Core data models / schemas for the Market Analysis Extractor.

Entities are frozen: they are built once by the entity builders and only
ever copied (``dataclasses.replace``) when enriched.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Extracted entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Competitor:
    name: str
    description: str
    headquarters: str
    revenue: str                    # free-form, e.g. "$10B (2023 est.)"

    REQUIRED = ("name", "description", "headquarters", "revenue")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "headquarters": self.headquarters,
            "revenue": self.revenue,
        }


@dataclass(frozen=True)
class Application:
    name: str
    description: str
    market_size: str
    growth_rate: str                # free-form, e.g. "12% CAGR"

    REQUIRED = ("name", "description", "market_size", "growth_rate")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "marketSize": self.market_size,
            "growthRate": self.growth_rate,
        }


@dataclass(frozen=True)
class CustomerPersona:
    name: str
    description: str
    cares_most_about: str
    cares_least_about: str
    # filled by the cross-referencer
    potential_customers: Tuple[str, ...] = ()
    # filled by the template renderer, always together
    sales_email: Optional[str] = None
    discovery_email: Optional[str] = None

    REQUIRED = ("name", "description", "cares_most_about", "cares_least_about")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "caresMostAbout": self.cares_most_about,
            "caresLeastAbout": self.cares_least_about,
            "potentialCustomers": list(self.potential_customers),
            "salesEmail": self.sales_email,
            "discoveryEmail": self.discovery_email,
        }


# ---------------------------------------------------------------------------
# Analysis run output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawData:
    """Verbatim prompt / response pair kept for audit."""
    prompt: str
    response: str


@dataclass(frozen=True)
class AnalysisResult:
    competitors: Tuple[Competitor, ...]
    applications: Tuple[Application, ...]
    customer_personas: Tuple[CustomerPersona, ...]
    raw_data: RawData = field(default_factory=lambda: RawData(prompt="", response=""))

    def summary(self) -> str:
        customers = sum(len(p.potential_customers) for p in self.customer_personas)
        return (
            f"{len(self.competitors)} competitors, "
            f"{len(self.applications)} applications, "
            f"{len(self.customer_personas)} personas "
            f"({customers} potential customers)"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "competitors": [c.to_dict() for c in self.competitors],
            "applications": [a.to_dict() for a in self.applications],
            "customerPersonas": [p.to_dict() for p in self.customer_personas],
            "rawData": {
                "prompt": self.raw_data.prompt,
                "response": self.raw_data.response,
            },
        }
