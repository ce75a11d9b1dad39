from __future__ import annotations

from dataclasses import dataclass

from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.step_gate import MAX_STEP, MIN_STEP, TOTAL_STEPS
from app.domain.entities.booking_form import BookingFormData
from app.domain.entities.catalog import AddonEntry


@dataclass(frozen=True)
class BookingProgress:
    current_step: int
    progress: float  # percent complete, 20.0 per step
    is_first_step: bool
    is_last_step: bool


@dataclass(frozen=True)
class SelectedAddon:
    addon_id: str
    quantity: int
    config: AddonEntry | None


def booking_progress(current_step: int) -> BookingProgress:
    return BookingProgress(
        current_step=current_step,
        progress=(current_step + 1) * 100 / TOTAL_STEPS,
        is_first_step=current_step == MIN_STEP,
        is_last_step=current_step == MAX_STEP,
    )


def selected_addons(form: BookingFormData, catalog: PricingCatalogPort) -> list[SelectedAddon]:
    """Join the selected addons with their catalog entries (None when unknown)."""
    return [
        SelectedAddon(addon_id=a.addon_id, quantity=a.quantity, config=catalog.resolve_addon(a.addon_id))
        for a in form.addons
    ]
