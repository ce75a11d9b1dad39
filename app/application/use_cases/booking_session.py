from __future__ import annotations

import logging
import threading
from dataclasses import replace
from functools import wraps

from app.application.exceptions import InvalidSelectionError
from app.application.ports.booking_session_store import BookingSessionStorePort
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.pricing import calculate_pricing
from app.application.use_cases.recommendations import recommend_addons
from app.application.use_cases.session_tracker import SessionTracker
from app.application.use_cases.step_gate import MAX_STEP, MIN_STEP, can_proceed
from app.application.utils.progress import BookingProgress, SelectedAddon, booking_progress, selected_addons
from app.domain.entities.booking_form import (
    AddonSelection,
    AirspaceStatus,
    BookingFormData,
    CouponType,
    FormDataUpdate,
    PropertyAddress,
    WeatherDay,
)
from app.domain.entities.booking_snapshot import BookingSnapshot
from app.domain.entities.catalog import SqftTier, normalize_catalog_id
from app.domain.entities.pricing import PricingResult

logger = logging.getLogger(__name__)


def _action(name: str, persist: bool = True):
    """Run a session action as one serialized transition, then snapshot it."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(self: BookingSession, *args, **kwargs):
            with self._lock:
                result = fn(self, *args, **kwargs)
                logger.debug(
                    "Booking action applied",
                    extra={"session_id": self._form.session_id, "action": name, "step": self._current_step},
                )
                if persist:
                    self._persist(name)
            return result

        return wrapper

    return decorator


class BookingSession:
    """
    State container for one booking funnel session.

    All mutation goes through the action methods. Actions that change price
    inputs recompute the quote before returning, so readers never see a stale
    price. When a store is attached, the persisted subset is saved after every
    action once the session has an id.
    """

    def __init__(
        self,
        catalog: PricingCatalogPort,
        store: BookingSessionStorePort | None = None,
        tracker: SessionTracker | None = None,
        default_property_state: str = "FL",
        snapshot: BookingSnapshot | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._tracker = tracker or SessionTracker()
        self._default_property_state = default_property_state
        self._lock = threading.RLock()

        self._current_step = MIN_STEP
        self._form = self._initial_form_data()
        self._pricing = PricingResult()
        self._recommended_addons: tuple[str, ...] = ()
        self._is_abandoned = False
        self._recovery_email_sent = False
        self._is_loading = False
        self._error: str | None = None

        if snapshot is not None:
            self._current_step = snapshot.current_step
            self._form = snapshot.form_data
            self._pricing = snapshot.pricing
            self._recommended_addons = snapshot.recommended_addons

    @classmethod
    def restore(
        cls,
        snapshot: BookingSnapshot,
        catalog: PricingCatalogPort,
        store: BookingSessionStorePort | None = None,
        tracker: SessionTracker | None = None,
        default_property_state: str = "FL",
    ) -> BookingSession:
        """Seed a new in-memory session from the last persisted snapshot."""
        return cls(
            catalog=catalog,
            store=store,
            tracker=tracker,
            default_property_state=default_property_state,
            snapshot=snapshot,
        )

    # State

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def form_data(self) -> BookingFormData:
        return self._form

    @property
    def pricing(self) -> PricingResult:
        return self._pricing

    @property
    def recommended_addons(self) -> tuple[str, ...]:
        return self._recommended_addons

    @property
    def is_abandoned(self) -> bool:
        return self._is_abandoned

    @property
    def recovery_email_sent(self) -> bool:
        return self._recovery_email_sent

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def session_id(self) -> str | None:
        return self._form.session_id

    # Navigation

    @_action("set_step")
    def set_step(self, step: int) -> None:
        # Not clamped: callers pass a valid step
        self._current_step = step

    @_action("next_step")
    def next_step(self) -> None:
        self._current_step = min(self._current_step + 1, MAX_STEP)
        self._form = self._touch(self._form)

    @_action("prev_step")
    def prev_step(self) -> None:
        self._current_step = max(self._current_step - 1, MIN_STEP)

    # Form updates

    @_action("update_form_data")
    def update_form_data(self, update: FormDataUpdate) -> None:
        changes = update.model_dump(exclude_unset=True)
        for key, value in changes.items():
            if value is None and isinstance(getattr(self._form, key), str):
                changes[key] = ""
        self._form = self._touch(replace(self._form, **changes))

    @_action("set_package")
    def set_package(self, package_key: str, sqft_tier: SqftTier | str) -> None:
        tier = _coerce(SqftTier, sqft_tier, "sqft tier")
        self._form = self._touch(
            replace(self._form, package_key=normalize_catalog_id(package_key), sqft_tier=tier)
        )
        self.recalculate_pricing()
        self.calculate_recommendations()

    @_action("toggle_addon")
    def toggle_addon(self, addon_id: str) -> None:
        addon_id = normalize_catalog_id(addon_id)
        addons = self._form.addons
        if self._form.find_addon(addon_id):
            addons = tuple(a for a in addons if a.addon_id != addon_id)
        else:
            addons = addons + (AddonSelection(addon_id=addon_id, quantity=1),)
        self._form = self._touch(replace(self._form, addons=addons))
        self.recalculate_pricing()

    @_action("set_addon_quantity")
    def set_addon_quantity(self, addon_id: str, quantity: int) -> None:
        """
        Set the quantity of an addon. A quantity of 0 or less removes it;
        selections are never stored at quantity 0.
        """
        addon_id = normalize_catalog_id(addon_id)
        addons = self._form.addons
        if self._form.find_addon(addon_id):
            if quantity <= 0:
                addons = tuple(a for a in addons if a.addon_id != addon_id)
            else:
                addons = tuple(
                    replace(a, quantity=quantity) if a.addon_id == addon_id else a for a in addons
                )
        elif quantity > 0:
            addons = addons + (AddonSelection(addon_id=addon_id, quantity=quantity),)
        self._form = self._touch(replace(self._form, addons=addons))
        self.recalculate_pricing()

    # Property & scheduling

    @_action("set_property_address")
    def set_property_address(self, address: PropertyAddress) -> None:
        self._form = self._touch(
            replace(
                self._form,
                property_address=address.street,
                property_city=address.city,
                property_state=address.state,
                property_zip=address.zip,
                property_lat=address.lat,
                property_lng=address.lng,
                property_place_id=address.place_id,
            )
        )

    @_action("set_schedule")
    def set_schedule(self, scheduled_date: str, scheduled_time: str) -> None:
        self._form = self._touch(
            replace(self._form, scheduled_date=scheduled_date, scheduled_time=scheduled_time)
        )

    # Discounts

    @_action("apply_coupon")
    def apply_coupon(self, code: str, discount: float, coupon_type: CouponType | str) -> None:
        """Apply an already validated coupon; the discount is not re-checked here."""
        kind = _coerce(CouponType, coupon_type, "coupon type")
        self._form = self._touch(
            replace(self._form, coupon_code=code, coupon_discount=discount, coupon_type=kind)
        )
        self.recalculate_pricing()

    @_action("remove_coupon")
    def remove_coupon(self) -> None:
        self._form = self._touch(
            replace(self._form, coupon_code=None, coupon_discount=None, coupon_type=None)
        )
        self.recalculate_pricing()

    @_action("set_loyalty_points")
    def set_loyalty_points(self, points: int, value: float) -> None:
        self._form = self._touch(
            replace(self._form, loyalty_points_to_redeem=points, loyalty_points_value=value)
        )
        self.recalculate_pricing()

    # Site conditions & travel

    @_action("set_airspace_status")
    def set_airspace_status(self, status: AirspaceStatus | str, warnings: list[str] | None = None) -> None:
        airspace = _coerce(AirspaceStatus, status, "airspace status")
        self._form = replace(self._form, airspace_status=airspace, airspace_warnings=tuple(warnings or ()))

    @_action("set_weather_forecast")
    def set_weather_forecast(self, forecast: list[WeatherDay]) -> None:
        self._form = replace(self._form, weather_forecast=tuple(forecast))

    @_action("set_travel_fee")
    def set_travel_fee(self, fee: float, distance: float, duration: float) -> None:
        self._form = replace(self._form, travel_fee=fee, travel_distance=distance, travel_duration=duration)
        self.recalculate_pricing()

    # Derived state

    @_action("recalculate_pricing", persist=False)
    def recalculate_pricing(self) -> None:
        self._pricing = calculate_pricing(self._form, self._catalog)

    @_action("calculate_recommendations", persist=False)
    def calculate_recommendations(self) -> None:
        self._recommended_addons = recommend_addons(
            self._form.package_key,
            self._form.sqft_tier,
            self._form.property_sqft,
            self._form.addons,
        )

    # Cart recovery

    @_action("mark_as_abandoned")
    def mark_as_abandoned(self) -> None:
        if not self._is_abandoned:
            logger.info("Booking session marked abandoned", extra={"session_id": self._form.session_id})
        self._is_abandoned = True

    @_action("mark_recovery_email_sent")
    def mark_recovery_email_sent(self) -> None:
        self._recovery_email_sent = True

    # Session lifecycle

    @_action("init_session")
    def init_session(self, query_string: str | None = None) -> None:
        """
        Start the session on first interaction. The id, creation time and UTM
        parameters are only set the first time; later calls just refresh
        last_updated_at.
        """
        now = self._tracker.now_iso()
        form = self._form
        if not form.session_id:
            utm = self._tracker.capture_utm(query_string)
            form = replace(
                form,
                session_id=self._tracker.generate_session_id(),
                created_at=now,
                utm_source=utm.source,
                utm_medium=utm.medium,
                utm_campaign=utm.campaign,
            )
            logger.info(
                "Booking session started",
                extra={"session_id": form.session_id, "reason": utm.source or "direct"},
            )
        self._form = replace(form, last_updated_at=now)

    @_action("reset")
    def reset(self) -> None:
        previous_id = self._form.session_id
        self._current_step = MIN_STEP
        self._form = self._initial_form_data()
        self._pricing = PricingResult()
        self._recommended_addons = ()
        self._is_abandoned = False
        self._recovery_email_sent = False
        self._is_loading = False
        self._error = None

        if previous_id and self._store is not None:
            try:
                self._store.delete(previous_id)
            except Exception:
                logger.exception("Failed to delete booking snapshot", extra={"session_id": previous_id})
        logger.info("Booking session reset", extra={"session_id": previous_id})

    # UI state

    @_action("set_loading", persist=False)
    def set_loading(self, loading: bool) -> None:
        self._is_loading = loading

    @_action("set_error", persist=False)
    def set_error(self, error: str | None) -> None:
        self._error = error

    # Queries

    def can_proceed(self) -> bool:
        with self._lock:
            return can_proceed(self._current_step, self._form)

    def progress(self) -> BookingProgress:
        return booking_progress(self._current_step)

    def selected_addons(self) -> list[SelectedAddon]:
        return selected_addons(self._form, self._catalog)

    def snapshot(self) -> BookingSnapshot:
        with self._lock:
            return BookingSnapshot(
                current_step=self._current_step,
                form_data=self._form,
                pricing=self._pricing,
                recommended_addons=self._recommended_addons,
            )

    # Internals

    def _initial_form_data(self) -> BookingFormData:
        return BookingFormData(property_state=self._default_property_state)

    def _touch(self, form: BookingFormData) -> BookingFormData:
        return replace(form, last_updated_at=self._tracker.now_iso())

    def _persist(self, action: str) -> None:
        session_id = self._form.session_id
        if self._store is None or not session_id:
            return
        try:
            self._store.save(session_id, self.snapshot())
        except Exception:
            # Memory stays authoritative; the next action snapshots again
            logger.exception(
                "Failed to save booking snapshot",
                extra={"session_id": session_id, "action": action},
            )


def _coerce(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidSelectionError(f"Unknown {label}: {value!r}") from e
