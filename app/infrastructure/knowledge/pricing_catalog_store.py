from __future__ import annotations

from app.application.ports.pricing_catalog import PricingCatalogPort
from app.domain.entities.catalog import AddonEntry, PackageEntry, SqftTier, normalize_catalog_id
from app.infrastructure.knowledge.catalog_data import LISTING_ADDONS, LISTING_PACKAGES


class PricingCatalogStore(PricingCatalogPort):
    def __init__(
        self,
        packages: dict[str, PackageEntry] | None = None,
        addons: dict[str, AddonEntry] | None = None,
    ) -> None:
        self._packages = LISTING_PACKAGES if packages is None else packages
        self._addons = LISTING_ADDONS if addons is None else addons

    def get_package(self, package_key: str) -> PackageEntry | None:
        normalized_key = normalize_catalog_id(package_key)
        return self._packages.get(normalized_key)

    def resolve_package_price(self, package_key: str, sqft_tier: SqftTier) -> int | None:
        entry = self.get_package(package_key)
        if not entry:
            return None
        return entry.pricing.get(sqft_tier)

    def resolve_addon(self, addon_id: str) -> AddonEntry | None:
        normalized_id = normalize_catalog_id(addon_id)
        return self._addons.get(normalized_id)

    def list_addons(self, category: str | None = None) -> list[AddonEntry]:
        if category is None:
            return list(self._addons.values())
        return [a for a in self._addons.values() if a.category == category]
