from __future__ import annotations

from app.application.use_cases.step_gate import can_proceed
from app.domain.entities.booking_form import BookingFormData


def test_step_zero_requires_package():
    assert can_proceed(0, BookingFormData()) is False
    assert can_proceed(0, BookingFormData(package_key="essentials")) is True


def test_step_one_addons_optional():
    assert can_proceed(1, BookingFormData()) is True


def test_step_two_requires_address_city_zip():
    assert can_proceed(2, BookingFormData(property_address="123 Main St", property_city="Orlando")) is False
    form = BookingFormData(property_address="123 Main St", property_city="Orlando", property_zip="32801")
    assert can_proceed(2, form) is True


def test_step_three_requires_date_and_time():
    assert can_proceed(3, BookingFormData(scheduled_date="2024-01-15")) is False
    assert can_proceed(3, BookingFormData(scheduled_date="2024-01-15", scheduled_time="10:00")) is True


def test_step_four_requires_contact():
    form = BookingFormData(contact_name="Jane", contact_email="jane@example.com")
    assert can_proceed(4, form) is False
    form = BookingFormData(contact_name="Jane", contact_email="jane@example.com", contact_phone="4075550100")
    assert can_proceed(4, form) is True


def test_out_of_range_steps_are_blocked():
    form = BookingFormData(package_key="essentials")
    assert can_proceed(-1, form) is False
    assert can_proceed(5, form) is False
