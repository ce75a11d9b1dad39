from __future__ import annotations

from dataclasses import dataclass

from app.domain.entities.booking_form import BookingFormData
from app.domain.entities.pricing import PricingResult


@dataclass(frozen=True)
class BookingSnapshot:
    """Durable subset of a booking session, restored on reload."""

    current_step: int = 0
    form_data: BookingFormData = BookingFormData()
    pricing: PricingResult = PricingResult()
    recommended_addons: tuple[str, ...] = ()
