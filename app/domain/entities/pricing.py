from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BreakdownLine:
    name: str
    price: float
    quantity: int | None = None


@dataclass(frozen=True)
class PricingResult:
    package_price: float = 0
    addons_total: float = 0
    travel_fee: float = 0
    coupon_discount: float = 0
    loyalty_discount: float = 0
    subtotal: float = 0
    tax: float = 0
    total: float = 0
    breakdown: tuple[BreakdownLine, ...] = ()
