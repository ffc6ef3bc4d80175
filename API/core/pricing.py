"""
Pricing Table — bandwidth tier definitions.

Every tier has an upstream company cost and the resale price charged
to the subscriber. Loaded once at import, never mutated.

Usage:
    from core.pricing import price_of, tier_label

    entry = price_of(tier_label("17"))   # PricingEntry(company_cost=535, resale_price=1400)
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class PricingEntry:
    company_cost: int
    resale_price: int

    @property
    def profit(self) -> int:
        return self.resale_price - self.company_cost


# ==================== TIER DEFINITIONS ====================

PRICING: Mapping[str, PricingEntry] = MappingProxyType({
    "12 MB": PricingEntry(company_cost=485, resale_price=1200),
    "17 MB": PricingEntry(company_cost=535, resale_price=1400),
    "22 MB": PricingEntry(company_cost=625, resale_price=1800),
    "27 MB": PricingEntry(company_cost=710, resale_price=2500),
    "32 MB": PricingEntry(company_cost=810, resale_price=3500),
    "52 MB": PricingEntry(company_cost=1950, resale_price=5000),
})

_MB_SUFFIX = re.compile(r"^(.*?)\s*mb$", re.IGNORECASE)


def tier_label(bandwidth: Optional[str]) -> str:
    """
    Derive the pricing key from a stored bandwidth value.

    "17" -> "17 MB", "17mb" -> "17 MB", "" -> "" (never priced).
    """
    value = (bandwidth or "").strip()
    if not value:
        return ""
    m = _MB_SUFFIX.match(value)
    if m:
        value = m.group(1).strip()
        if not value:
            return ""
    return f"{value} MB"


def price_of(tier: str) -> Optional[PricingEntry]:
    """Exact lookup by tier label. Unknown tiers return None."""
    return PRICING.get(tier)


def tier_order(tier: str) -> int:
    """Position of a tier in the table, unknown tiers last."""
    for idx, key in enumerate(PRICING):
        if key == tier:
            return idx
    return len(PRICING)


def get_all_tiers() -> list:
    """Pricing table for API response."""
    return [
        {
            "tier": key,
            "company_cost": entry.company_cost,
            "resale_price": entry.resale_price,
            "profit": entry.profit,
        }
        for key, entry in PRICING.items()
    ]
