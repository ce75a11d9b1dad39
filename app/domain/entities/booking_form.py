from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict

from app.domain.entities.catalog import SqftTier


class CouponType(str, Enum):
    percent = "percent"
    fixed = "fixed"


class AirspaceStatus(str, Enum):
    clear = "clear"
    laanc_required = "laanc_required"
    restricted = "restricted"
    unknown = "unknown"


@dataclass(frozen=True)
class AddonSelection:
    addon_id: str
    quantity: int = 1


@dataclass(frozen=True)
class PropertyAddress:
    """Resolved place from the address autocomplete."""

    street: str
    city: str
    state: str
    zip: str
    lat: float | None = None
    lng: float | None = None
    place_id: str | None = None
    formatted: str | None = None


@dataclass(frozen=True)
class WeatherDay:
    date: str  # YYYY-MM-DD
    condition: str
    temp_high: float
    temp_low: float
    rain_chance: float
    icon: str


@dataclass(frozen=True)
class BookingFormData:
    package_key: str = ""
    sqft_tier: SqftTier = SqftTier.lt2000
    addons: tuple[AddonSelection, ...] = ()

    property_address: str = ""
    property_city: str = ""
    property_state: str = "FL"
    property_zip: str = ""
    property_lat: float | None = None
    property_lng: float | None = None
    property_place_id: str | None = None
    property_sqft: int | None = None

    scheduled_date: str | None = None  # YYYY-MM-DD
    scheduled_time: str | None = None  # HH:MM

    # All three set together or all None
    coupon_code: str | None = None
    coupon_discount: float | None = None
    coupon_type: CouponType | None = None

    loyalty_points_to_redeem: int | None = None
    loyalty_points_value: float | None = None  # pre-resolved currency amount

    travel_fee: float | None = None
    travel_distance: float | None = None
    travel_duration: float | None = None

    airspace_status: AirspaceStatus | None = None
    airspace_warnings: tuple[str, ...] = ()
    weather_forecast: tuple[WeatherDay, ...] = ()

    contact_name: str = ""
    contact_email: str = ""
    contact_phone: str = ""

    session_id: str | None = None
    created_at: str | None = None  # ISO-8601
    last_updated_at: str | None = None  # ISO-8601

    utm_source: str | None = None
    utm_medium: str | None = None
    utm_campaign: str | None = None

    def find_addon(self, addon_id: str) -> AddonSelection | None:
        return next((a for a in self.addons if a.addon_id == addon_id), None)


class FormDataUpdate(BaseModel):
    """
    Partial update for fields that do not feed pricing.
    Package, addons, coupon, loyalty and travel fields change only through
    their dedicated session actions. Session identity and UTM attribution
    are set once by init_session and are not writable here.
    """

    model_config = ConfigDict(extra="forbid")

    property_address: str | None = None
    property_city: str | None = None
    property_state: str | None = None
    property_zip: str | None = None
    property_sqft: int | None = None

    scheduled_date: str | None = None
    scheduled_time: str | None = None

    contact_name: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None
