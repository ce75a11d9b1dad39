from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from app.application.ports.pricing_catalog import PricingCatalogPort
from app.domain.entities.booking_form import BookingFormData, CouponType
from app.domain.entities.catalog import PriceType
from app.domain.entities.pricing import BreakdownLine, PricingResult

logger = logging.getLogger(__name__)


def round_half_up(amount: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_pricing(form: BookingFormData, catalog: PricingCatalogPort) -> PricingResult:
    """
    Build a full price quote from the current form data.

    The result is rebuilt from scratch on every call; nothing is carried over
    from a previous quote.
    """
    breakdown: list[BreakdownLine] = []

    package_price: float = 0
    if form.package_key:
        package = catalog.get_package(form.package_key)
        price = catalog.resolve_package_price(form.package_key, form.sqft_tier)
        if package and price is not None:
            package_price = price
            breakdown.append(BreakdownLine(name=f"{package.name} Package", price=price))
        else:
            logger.warning(
                "Unknown package or tier, pricing package at 0",
                extra={"package_key": form.package_key, "reason": form.sqft_tier.value},
            )

    addons_total: float = 0
    for selection in form.addons:
        if selection.quantity <= 0:
            continue
        addon = catalog.resolve_addon(selection.addon_id)
        if not addon:
            continue
        if addon.price_type == PriceType.per_unit:
            line_price = addon.price * selection.quantity
            breakdown.append(BreakdownLine(name=addon.name, price=line_price, quantity=selection.quantity))
        else:
            line_price = addon.price
            breakdown.append(BreakdownLine(name=addon.name, price=line_price))
        addons_total += line_price

    travel_fee = form.travel_fee or 0
    subtotal = package_price + addons_total + travel_fee

    coupon_discount = _coupon_discount(form, subtotal)
    loyalty_discount = form.loyalty_points_value or 0
    total = max(0, subtotal - coupon_discount - loyalty_discount)

    if travel_fee > 0:
        breakdown.append(BreakdownLine(name="Travel Fee", price=travel_fee))
    if coupon_discount > 0:
        breakdown.append(BreakdownLine(name=f"Discount ({form.coupon_code})", price=-coupon_discount))
    if loyalty_discount > 0:
        breakdown.append(BreakdownLine(name="Loyalty Points", price=-loyalty_discount))

    return PricingResult(
        package_price=package_price,
        addons_total=addons_total,
        travel_fee=travel_fee,
        coupon_discount=coupon_discount,
        loyalty_discount=loyalty_discount,
        subtotal=subtotal,
        tax=0,
        total=total,
        breakdown=tuple(breakdown),
    )


def _coupon_discount(form: BookingFormData, subtotal: float) -> float:
    # Partially set coupon fields count as no coupon
    if not form.coupon_code or form.coupon_discount is None or form.coupon_type is None:
        return 0
    if form.coupon_type == CouponType.percent:
        return round_half_up(subtotal * form.coupon_discount / 100)
    if form.coupon_type == CouponType.fixed:
        return form.coupon_discount
    return 0
