from pydantic import BaseModel, Field

from app.domain.entities.booking_form import AirspaceStatus, CouponType
from app.domain.entities.catalog import PriceType, SqftTier


class AddonSelectionSchema(BaseModel):
    id: str
    quantity: int


class WeatherDaySchema(BaseModel):
    date: str
    condition: str
    temp_high: float
    temp_low: float
    rain_chance: float
    icon: str


class FormDataSchema(BaseModel):
    package_key: str
    sqft_tier: SqftTier
    addons: list[AddonSelectionSchema] = Field(default_factory=list)
    property_address: str
    property_city: str
    property_state: str
    property_zip: str
    property_lat: float | None = None
    property_lng: float | None = None
    property_place_id: str | None = None
    property_sqft: int | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    coupon_code: str | None = None
    coupon_discount: float | None = None
    coupon_type: CouponType | None = None
    loyalty_points_to_redeem: int | None = None
    loyalty_points_value: float | None = None
    travel_fee: float | None = None
    travel_distance: float | None = None
    travel_duration: float | None = None
    airspace_status: AirspaceStatus | None = None
    airspace_warnings: list[str] = Field(default_factory=list)
    weather_forecast: list[WeatherDaySchema] = Field(default_factory=list)
    contact_name: str
    contact_email: str
    contact_phone: str
    session_id: str | None = None
    created_at: str | None = None
    last_updated_at: str | None = None
    utm_source: str | None = None
    utm_medium: str | None = None
    utm_campaign: str | None = None


class BreakdownLineSchema(BaseModel):
    name: str
    price: float
    quantity: int | None = None


class PricingSchema(BaseModel):
    package_price: float
    addons_total: float
    travel_fee: float
    coupon_discount: float
    loyalty_discount: float
    subtotal: float
    tax: float
    total: float
    breakdown: list[BreakdownLineSchema] = Field(default_factory=list)


class ProgressSchema(BaseModel):
    current_step: int
    progress: float
    is_first_step: bool
    is_last_step: bool


class SessionResponseSchema(BaseModel):
    session_id: str
    current_step: int
    form_data: FormDataSchema
    pricing: PricingSchema
    recommended_addons: list[str]
    is_abandoned: bool
    recovery_email_sent: bool
    can_proceed: bool
    progress: ProgressSchema


class CanProceedResponseSchema(BaseModel):
    step: int
    can_proceed: bool


class SetStepRequestSchema(BaseModel):
    step: int


class PackageRequestSchema(BaseModel):
    package_key: str
    sqft_tier: SqftTier


class AddonQuantityRequestSchema(BaseModel):
    quantity: int


class AddressRequestSchema(BaseModel):
    street: str
    city: str
    state: str
    zip: str
    lat: float | None = None
    lng: float | None = None
    place_id: str | None = None
    formatted: str | None = None


class ScheduleRequestSchema(BaseModel):
    date: str
    time: str


class CouponRequestSchema(BaseModel):
    code: str = Field(min_length=1)
    discount: float = Field(ge=0)
    type: CouponType


class LoyaltyRequestSchema(BaseModel):
    points: int = Field(ge=0)
    value: float = Field(ge=0)


class TravelFeeRequestSchema(BaseModel):
    fee: float = Field(ge=0)
    distance: float = Field(ge=0)
    duration: float = Field(ge=0)


class AirspaceRequestSchema(BaseModel):
    status: AirspaceStatus
    warnings: list[str] = Field(default_factory=list)


class WeatherRequestSchema(BaseModel):
    forecast: list[WeatherDaySchema] = Field(default_factory=list)


class AddonCatalogSchema(BaseModel):
    id: str
    name: str
    price: int
    price_type: PriceType
    category: str
    description: str | None = None
