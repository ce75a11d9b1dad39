from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities.booking_form import AddonSelection
from app.domain.entities.catalog import SqftTier, tier_default_sqft

MAX_RECOMMENDATIONS = 3
LARGE_PROPERTY_SQFT = 3000

PACKAGE_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    # Essentials has no video in the package
    "essentials": ("social-reel", "rush-delivery"),
    "signature": ("aerial-video", "premium-staging"),
}
LARGE_PROPERTY_RECOMMENDATIONS = ("extra-staging", "exterior-drone")
ALWAYS_POPULAR = "rush-delivery"


def resolve_sqft(sqft_tier: SqftTier, property_sqft: int | None = None) -> int:
    if property_sqft:
        return property_sqft
    return tier_default_sqft(sqft_tier)


def recommend_addons(
    package_key: str,
    sqft_tier: SqftTier,
    property_sqft: int | None,
    addons: Iterable[AddonSelection],
) -> tuple[str, ...]:
    """Suggest up to three addons not yet selected, in rule-priority order."""
    selected_ids = {a.addon_id for a in addons}
    candidates: list[str] = []

    candidates.extend(PACKAGE_RECOMMENDATIONS.get(package_key, ()))

    if resolve_sqft(sqft_tier, property_sqft) > LARGE_PROPERTY_SQFT:
        candidates.extend(LARGE_PROPERTY_RECOMMENDATIONS)

    if ALWAYS_POPULAR not in selected_ids:
        candidates.append(ALWAYS_POPULAR)

    recommended: list[str] = []
    for addon_id in candidates:
        if addon_id in selected_ids or addon_id in recommended:
            continue
        recommended.append(addon_id)
    return tuple(recommended[:MAX_RECOMMENDATIONS])
