from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from app.api.v1.schemas import (
    AddonCatalogSchema,
    AddonQuantityRequestSchema,
    AddressRequestSchema,
    AirspaceRequestSchema,
    CanProceedResponseSchema,
    CouponRequestSchema,
    FormDataSchema,
    LoyaltyRequestSchema,
    PackageRequestSchema,
    PricingSchema,
    ProgressSchema,
    ScheduleRequestSchema,
    SessionResponseSchema,
    SetStepRequestSchema,
    TravelFeeRequestSchema,
    WeatherRequestSchema,
)
from app.application.exceptions import InvalidSelectionError, SessionNotFoundError
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.session_manager import BookingSessionManager
from app.application.utils.snapshot_codec import serialize_form_data, serialize_pricing
from app.domain.entities.booking_form import FormDataUpdate, PropertyAddress, WeatherDay
from app.wiring.dependencies import get_pricing_catalog, get_session_manager

router = APIRouter()
logger = logging.getLogger(__name__)


def _load(manager: BookingSessionManager, session_id: str) -> BookingSession:
    try:
        return manager.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _to_response(session: BookingSession) -> SessionResponseSchema:
    snapshot = session.snapshot()
    progress = session.progress()
    return SessionResponseSchema(
        session_id=snapshot.form_data.session_id or "",
        current_step=snapshot.current_step,
        form_data=FormDataSchema.model_validate(serialize_form_data(snapshot.form_data)),
        pricing=PricingSchema.model_validate(serialize_pricing(snapshot.pricing)),
        recommended_addons=list(snapshot.recommended_addons),
        is_abandoned=session.is_abandoned,
        recovery_email_sent=session.recovery_email_sent,
        can_proceed=session.can_proceed(),
        progress=ProgressSchema(
            current_step=progress.current_step,
            progress=progress.progress,
            is_first_step=progress.is_first_step,
            is_last_step=progress.is_last_step,
        ),
    )


@router.post("/sessions", response_model=SessionResponseSchema, status_code=201)
def create_session(
    request: Request,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    # UTM parameters come from the funnel landing URL query string
    session = manager.create(request.url.query)
    return _to_response(session)


@router.get("/sessions/{session_id}", response_model=SessionResponseSchema)
def get_session(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    return _to_response(_load(manager, session_id))


@router.delete("/sessions/{session_id}", status_code=204)
def reset_session(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    try:
        manager.discard(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.post("/sessions/{session_id}/steps/next", response_model=SessionResponseSchema)
def next_step(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    session.next_step()
    return _to_response(session)


@router.post("/sessions/{session_id}/steps/prev", response_model=SessionResponseSchema)
def prev_step(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    session.prev_step()
    return _to_response(session)


@router.put("/sessions/{session_id}/steps", response_model=SessionResponseSchema)
def set_step(
    session_id: str,
    req: SetStepRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_step(req.step)
    return _to_response(session)


@router.get("/sessions/{session_id}/can-proceed", response_model=CanProceedResponseSchema)
def can_proceed(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    return CanProceedResponseSchema(step=session.current_step, can_proceed=session.can_proceed())


@router.patch("/sessions/{session_id}/form", response_model=SessionResponseSchema)
def update_form(
    session_id: str,
    req: FormDataUpdate,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.update_form_data(req)
    return _to_response(session)


@router.put("/sessions/{session_id}/package", response_model=SessionResponseSchema)
def set_package(
    session_id: str,
    req: PackageRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    try:
        session.set_package(req.package_key, req.sqft_tier)
    except InvalidSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(
        "Package selected",
        extra={"session_id": session_id, "package_key": req.package_key, "reason": req.sqft_tier.value},
    )
    return _to_response(session)


@router.post("/sessions/{session_id}/addons/{addon_id}/toggle", response_model=SessionResponseSchema)
def toggle_addon(
    session_id: str,
    addon_id: str,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.toggle_addon(addon_id)
    return _to_response(session)


@router.put("/sessions/{session_id}/addons/{addon_id}", response_model=SessionResponseSchema)
def set_addon_quantity(
    session_id: str,
    addon_id: str,
    req: AddonQuantityRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_addon_quantity(addon_id, req.quantity)
    return _to_response(session)


@router.put("/sessions/{session_id}/address", response_model=SessionResponseSchema)
def set_address(
    session_id: str,
    req: AddressRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_property_address(PropertyAddress(**req.model_dump()))
    return _to_response(session)


@router.put("/sessions/{session_id}/schedule", response_model=SessionResponseSchema)
def set_schedule(
    session_id: str,
    req: ScheduleRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_schedule(req.date, req.time)
    return _to_response(session)


@router.put("/sessions/{session_id}/coupon", response_model=SessionResponseSchema)
def apply_coupon(
    session_id: str,
    req: CouponRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    try:
        session.apply_coupon(req.code, req.discount, req.type)
    except InvalidSelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _to_response(session)


@router.delete("/sessions/{session_id}/coupon", response_model=SessionResponseSchema)
def remove_coupon(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    session.remove_coupon()
    return _to_response(session)


@router.put("/sessions/{session_id}/loyalty", response_model=SessionResponseSchema)
def set_loyalty_points(
    session_id: str,
    req: LoyaltyRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_loyalty_points(req.points, req.value)
    return _to_response(session)


@router.put("/sessions/{session_id}/travel-fee", response_model=SessionResponseSchema)
def set_travel_fee(
    session_id: str,
    req: TravelFeeRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_travel_fee(req.fee, req.distance, req.duration)
    return _to_response(session)


@router.put("/sessions/{session_id}/airspace", response_model=SessionResponseSchema)
def set_airspace(
    session_id: str,
    req: AirspaceRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_airspace_status(req.status, req.warnings)
    return _to_response(session)


@router.put("/sessions/{session_id}/weather", response_model=SessionResponseSchema)
def set_weather(
    session_id: str,
    req: WeatherRequestSchema,
    manager: BookingSessionManager = Depends(get_session_manager),
):
    session = _load(manager, session_id)
    session.set_weather_forecast([WeatherDay(**day.model_dump()) for day in req.forecast])
    return _to_response(session)


@router.post("/sessions/{session_id}/abandon", response_model=SessionResponseSchema)
def mark_abandoned(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    session.mark_as_abandoned()
    return _to_response(session)


@router.post("/sessions/{session_id}/recovery-email", response_model=SessionResponseSchema)
def mark_recovery_email_sent(session_id: str, manager: BookingSessionManager = Depends(get_session_manager)):
    session = _load(manager, session_id)
    session.mark_recovery_email_sent()
    return _to_response(session)


@router.get("/catalog/addons", response_model=list[AddonCatalogSchema])
def list_addons(
    category: str | None = None,
    catalog: PricingCatalogPort = Depends(get_pricing_catalog),
):
    return [
        AddonCatalogSchema(
            id=a.addon_id,
            name=a.name,
            price=a.price,
            price_type=a.price_type,
            category=a.category,
            description=a.description,
        )
        for a in catalog.list_addons(category)
    ]
