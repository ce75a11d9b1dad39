from __future__ import annotations

from app.domain.entities.catalog import AddonEntry, PackageEntry, PriceType, SqftTier

LISTING_PACKAGES: dict[str, PackageEntry] = {
    "essentials": PackageEntry(
        key="essentials",
        name="Essentials",
        tagline="PERFECT START",
        pricing={
            SqftTier.lt2000: 315,
            SqftTier.t2001_3500: 375,
            SqftTier.t3501_5000: 425,
            SqftTier.t5001_6500: 485,
            SqftTier.over6500: 580,
        },
    ),
    "signature": PackageEntry(
        key="signature",
        name="Signature",
        tagline="MOST POPULAR",
        recommended=True,
        pricing={
            SqftTier.lt2000: 449,
            SqftTier.t2001_3500: 529,
            SqftTier.t3501_5000: 579,
            SqftTier.t5001_6500: 619,
            SqftTier.over6500: 700,
        },
    ),
    "premier": PackageEntry(
        key="premier",
        name="Premier",
        tagline="COMPLETE PACKAGE",
        pricing={
            SqftTier.lt2000: 649,
            SqftTier.t2001_3500: 729,
            SqftTier.t3501_5000: 819,
            SqftTier.t5001_6500: 899,
            SqftTier.over6500: 1100,
        },
    ),
}

LISTING_ADDONS: dict[str, AddonEntry] = {
    "rush-delivery": AddonEntry(
        addon_id="rush-delivery",
        name="Rush Delivery",
        price=75,
        category="delivery",
        description="Next-morning delivery of edited media",
    ),
    "social-reel": AddonEntry(
        addon_id="social-reel",
        name="Social Reel",
        price=125,
        category="video",
        description="Vertical short-form reel for social media",
    ),
    "aerial-video": AddonEntry(
        addon_id="aerial-video",
        name="Aerial Video",
        price=150,
        category="video",
        description="Drone video flyover of the property",
    ),
    "premium-staging": AddonEntry(
        addon_id="premium-staging",
        name="Premium Staging",
        price=35,
        price_type=PriceType.per_unit,
        category="staging",
        description="Premium virtual staging, per photo",
    ),
    "extra-staging": AddonEntry(
        addon_id="extra-staging",
        name="Extra Virtual Staging",
        price=12,
        price_type=PriceType.per_unit,
        category="staging",
        description="Core virtual staging beyond the package allowance, per photo",
    ),
    "exterior-drone": AddonEntry(
        addon_id="exterior-drone",
        name="Exterior Drone Photos",
        price=75,
        category="photography",
        description="Additional aerial stills of the lot and surroundings",
    ),
    "extra-twilight": AddonEntry(
        addon_id="extra-twilight",
        name="Extra Virtual Twilight",
        price=15,
        price_type=PriceType.per_unit,
        category="photography",
        description="Golden hour edit without a reshoot, per photo",
    ),
    "floor-plan-3d": AddonEntry(
        addon_id="floor-plan-3d",
        name="3D Floor Plan",
        price=75,
        category="photography",
        description="Interactive 3D floor plan",
    ),
}
