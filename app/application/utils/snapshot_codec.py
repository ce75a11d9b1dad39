from __future__ import annotations

from typing import Any

from app.domain.entities.booking_form import (
    AddonSelection,
    AirspaceStatus,
    BookingFormData,
    CouponType,
    WeatherDay,
)
from app.domain.entities.booking_snapshot import BookingSnapshot
from app.domain.entities.catalog import SqftTier
from app.domain.entities.pricing import BreakdownLine, PricingResult


def serialize_form_data(form: BookingFormData) -> dict[str, Any]:
    """Serialize BookingFormData to a JSON-safe dict."""
    return {
        "package_key": form.package_key,
        "sqft_tier": form.sqft_tier.value,
        "addons": [{"id": a.addon_id, "quantity": a.quantity} for a in form.addons],
        "property_address": form.property_address,
        "property_city": form.property_city,
        "property_state": form.property_state,
        "property_zip": form.property_zip,
        "property_lat": form.property_lat,
        "property_lng": form.property_lng,
        "property_place_id": form.property_place_id,
        "property_sqft": form.property_sqft,
        "scheduled_date": form.scheduled_date,
        "scheduled_time": form.scheduled_time,
        "coupon_code": form.coupon_code,
        "coupon_discount": form.coupon_discount,
        "coupon_type": form.coupon_type.value if form.coupon_type else None,
        "loyalty_points_to_redeem": form.loyalty_points_to_redeem,
        "loyalty_points_value": form.loyalty_points_value,
        "travel_fee": form.travel_fee,
        "travel_distance": form.travel_distance,
        "travel_duration": form.travel_duration,
        "airspace_status": form.airspace_status.value if form.airspace_status else None,
        "airspace_warnings": list(form.airspace_warnings),
        "weather_forecast": [
            {
                "date": day.date,
                "condition": day.condition,
                "temp_high": day.temp_high,
                "temp_low": day.temp_low,
                "rain_chance": day.rain_chance,
                "icon": day.icon,
            }
            for day in form.weather_forecast
        ],
        "contact_name": form.contact_name,
        "contact_email": form.contact_email,
        "contact_phone": form.contact_phone,
        "session_id": form.session_id,
        "created_at": form.created_at,
        "last_updated_at": form.last_updated_at,
        "utm_source": form.utm_source,
        "utm_medium": form.utm_medium,
        "utm_campaign": form.utm_campaign,
    }


def deserialize_form_data(data: dict[str, Any]) -> BookingFormData:
    """Deserialize dict to BookingFormData, falling back to defaults for bad values."""
    defaults = BookingFormData()

    try:
        sqft_tier = SqftTier(data.get("sqft_tier") or defaults.sqft_tier.value)
    except ValueError:
        sqft_tier = defaults.sqft_tier

    addons: list[AddonSelection] = []
    seen: set[str] = set()
    for item in data.get("addons") or []:
        addon_id = item.get("id")
        quantity = int(item.get("quantity") or 0)
        # Stored selections are unique and never kept at quantity 0
        if not addon_id or addon_id in seen or quantity <= 0:
            continue
        seen.add(addon_id)
        addons.append(AddonSelection(addon_id=addon_id, quantity=quantity))

    coupon_type = _parse_enum(CouponType, data.get("coupon_type"))
    coupon_code = data.get("coupon_code")
    coupon_discount = data.get("coupon_discount")
    if not (coupon_code and coupon_discount is not None and coupon_type is not None):
        coupon_code, coupon_discount, coupon_type = None, None, None

    return BookingFormData(
        package_key=data.get("package_key") or "",
        sqft_tier=sqft_tier,
        addons=tuple(addons),
        property_address=data.get("property_address") or "",
        property_city=data.get("property_city") or "",
        property_state=data.get("property_state") or defaults.property_state,
        property_zip=data.get("property_zip") or "",
        property_lat=data.get("property_lat"),
        property_lng=data.get("property_lng"),
        property_place_id=data.get("property_place_id"),
        property_sqft=data.get("property_sqft"),
        scheduled_date=data.get("scheduled_date"),
        scheduled_time=data.get("scheduled_time"),
        coupon_code=coupon_code,
        coupon_discount=coupon_discount,
        coupon_type=coupon_type,
        loyalty_points_to_redeem=data.get("loyalty_points_to_redeem"),
        loyalty_points_value=data.get("loyalty_points_value"),
        travel_fee=data.get("travel_fee"),
        travel_distance=data.get("travel_distance"),
        travel_duration=data.get("travel_duration"),
        airspace_status=_parse_enum(AirspaceStatus, data.get("airspace_status")),
        airspace_warnings=tuple(data.get("airspace_warnings") or ()),
        weather_forecast=tuple(
            WeatherDay(
                date=day.get("date", ""),
                condition=day.get("condition", ""),
                temp_high=day.get("temp_high", 0),
                temp_low=day.get("temp_low", 0),
                rain_chance=day.get("rain_chance", 0),
                icon=day.get("icon", ""),
            )
            for day in data.get("weather_forecast") or []
        ),
        contact_name=data.get("contact_name") or "",
        contact_email=data.get("contact_email") or "",
        contact_phone=data.get("contact_phone") or "",
        session_id=data.get("session_id"),
        created_at=data.get("created_at"),
        last_updated_at=data.get("last_updated_at"),
        utm_source=data.get("utm_source"),
        utm_medium=data.get("utm_medium"),
        utm_campaign=data.get("utm_campaign"),
    )


def serialize_pricing(pricing: PricingResult) -> dict[str, Any]:
    return {
        "package_price": pricing.package_price,
        "addons_total": pricing.addons_total,
        "travel_fee": pricing.travel_fee,
        "coupon_discount": pricing.coupon_discount,
        "loyalty_discount": pricing.loyalty_discount,
        "subtotal": pricing.subtotal,
        "tax": pricing.tax,
        "total": pricing.total,
        "breakdown": [
            {"name": line.name, "price": line.price, "quantity": line.quantity}
            for line in pricing.breakdown
        ],
    }


def deserialize_pricing(data: dict[str, Any]) -> PricingResult:
    return PricingResult(
        package_price=data.get("package_price", 0),
        addons_total=data.get("addons_total", 0),
        travel_fee=data.get("travel_fee", 0),
        coupon_discount=data.get("coupon_discount", 0),
        loyalty_discount=data.get("loyalty_discount", 0),
        subtotal=data.get("subtotal", 0),
        tax=data.get("tax", 0),
        total=data.get("total", 0),
        breakdown=tuple(
            BreakdownLine(name=line.get("name", ""), price=line.get("price", 0), quantity=line.get("quantity"))
            for line in data.get("breakdown") or []
        ),
    )


def serialize_snapshot(snapshot: BookingSnapshot) -> dict[str, Any]:
    return {
        "current_step": snapshot.current_step,
        "form_data": serialize_form_data(snapshot.form_data),
        "pricing": serialize_pricing(snapshot.pricing),
        "recommended_addons": list(snapshot.recommended_addons),
    }


def deserialize_snapshot(data: dict[str, Any]) -> BookingSnapshot:
    return BookingSnapshot(
        current_step=int(data.get("current_step", 0)),
        form_data=deserialize_form_data(data.get("form_data", {})),
        pricing=deserialize_pricing(data.get("pricing", {})),
        recommended_addons=tuple(data.get("recommended_addons") or ()),
    )


def _parse_enum(enum_cls, value):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        return None
