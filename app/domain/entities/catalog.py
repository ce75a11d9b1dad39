from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SqftTier(str, Enum):
    lt2000 = "lt2000"
    t2001_3500 = "2001_3500"
    t3501_5000 = "3501_5000"
    t5001_6500 = "5001_6500"
    over6500 = "over6500"


# Square footage assumed when the property size is unknown; only the smallest
# tier is distinguished, larger tiers sit at the large-property threshold
SMALL_TIER_DEFAULT_SQFT = 1800
LARGE_TIER_DEFAULT_SQFT = 3000


def tier_default_sqft(sqft_tier: SqftTier) -> int:
    if sqft_tier == SqftTier.lt2000:
        return SMALL_TIER_DEFAULT_SQFT
    return LARGE_TIER_DEFAULT_SQFT


def normalize_catalog_id(value: str) -> str:
    """Canonical form of a package key or addon id."""
    return value.lower().strip()


class PriceType(str, Enum):
    flat = "flat"
    per_unit = "per_unit"


@dataclass(frozen=True)
class PackageEntry:
    key: str
    name: str
    tagline: str
    pricing: dict[SqftTier, int] = field(default_factory=dict)
    recommended: bool = False


@dataclass(frozen=True)
class AddonEntry:
    addon_id: str
    name: str
    price: int
    price_type: PriceType = PriceType.flat
    category: str = "photography"  # "staging", "photography", "video", "delivery"
    description: str | None = None
