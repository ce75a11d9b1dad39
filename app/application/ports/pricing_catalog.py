from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.catalog import AddonEntry, PackageEntry, SqftTier


class PricingCatalogPort(ABC):
    @abstractmethod
    def get_package(self, package_key: str) -> PackageEntry | None:
        """Get listing package by key."""
        raise NotImplementedError

    @abstractmethod
    def resolve_package_price(self, package_key: str, sqft_tier: SqftTier) -> int | None:
        """Get base price for a package at a size tier. Returns None if not found."""
        raise NotImplementedError

    @abstractmethod
    def resolve_addon(self, addon_id: str) -> AddonEntry | None:
        """Get addon entry (name, unit price, price type) by id."""
        raise NotImplementedError

    @abstractmethod
    def list_addons(self, category: str | None = None) -> list[AddonEntry]:
        raise NotImplementedError
