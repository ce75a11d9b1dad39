from __future__ import annotations

from app.domain.entities.booking_form import BookingFormData

MIN_STEP = 0
MAX_STEP = 4
TOTAL_STEPS = MAX_STEP + 1


def can_proceed(step: int, form: BookingFormData) -> bool:
    """Whether forward navigation is allowed from the given step."""
    if step == 0:
        return bool(form.package_key and form.sqft_tier)
    if step == 1:
        # Addons are optional
        return True
    if step == 2:
        return bool(form.property_address and form.property_city and form.property_zip)
    if step == 3:
        return bool(form.scheduled_date and form.scheduled_time)
    if step == 4:
        return bool(form.contact_name and form.contact_email and form.contact_phone)
    return False
