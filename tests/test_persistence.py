"""
Tests for durable booking session snapshots.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.session_manager import BookingSessionManager
from app.domain.entities.booking_form import (
    AddonSelection,
    BookingFormData,
    CouponType,
    FormDataUpdate,
    WeatherDay,
)
from app.domain.entities.booking_snapshot import BookingSnapshot
from app.domain.entities.catalog import SqftTier
from app.infrastructure.knowledge.pricing_catalog_store import PricingCatalogStore
from app.infrastructure.store.json_store import JsonBookingSessionStore
from app.infrastructure.store.memory_store import MemoryBookingSessionStore


class FailingStore(MemoryBookingSessionStore):
    def save(self, session_id, snapshot):
        raise OSError("disk full")


def test_json_store_persistence():
    """Test that JSON store persists and retrieves a snapshot correctly."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingSessionStore(data_dir=tmpdir)
        session_id = "bk_1705309200000_abc123xyz"

        snapshot = BookingSnapshot(
            current_step=2,
            form_data=BookingFormData(
                package_key="signature",
                sqft_tier=SqftTier.t2001_3500,
                addons=(AddonSelection("premium-staging", 3),),
                coupon_code="SAVE10",
                coupon_discount=10,
                coupon_type=CouponType.percent,
                weather_forecast=(WeatherDay("2024-01-15", "Sunny", 78, 62, 10, "sun"),),
                session_id=session_id,
            ),
            recommended_addons=("aerial-video",),
        )
        store.save(session_id, snapshot)

        retrieved = store.load(session_id)

        assert retrieved is not None
        assert retrieved.current_step == 2
        assert retrieved.form_data == snapshot.form_data
        assert retrieved.recommended_addons == ("aerial-video",)


def test_json_store_missing_and_corrupted():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingSessionStore(data_dir=tmpdir)

        assert store.load("bk_missing") is None

        Path(tmpdir, "bk_broken.json").write_text("{not json", encoding="utf-8")
        assert store.load("bk_broken") is None


def test_json_store_delete():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingSessionStore(data_dir=tmpdir)
        store.save("bk_1", BookingSnapshot())
        store.delete("bk_1")
        store.delete("bk_1")

        assert store.load("bk_1") is None


def test_session_snapshots_after_actions():
    store = MemoryBookingSessionStore()
    session = BookingSession(catalog=PricingCatalogStore(), store=store)

    # No id yet, nothing to key the snapshot on
    session.set_package("essentials", "lt2000")
    assert store._snapshots == {}

    session.init_session()
    session.toggle_addon("rush-delivery")

    saved = store.load(session.session_id)
    assert saved is not None
    assert saved.form_data.addons == (AddonSelection("rush-delivery", 1),)
    assert saved.pricing == session.pricing
    assert saved.recommended_addons == session.recommended_addons


def test_restore_from_json_snapshot():
    """A reload seeds a new session from the last snapshot."""
    with tempfile.TemporaryDirectory() as tmpdir:
        catalog = PricingCatalogStore()
        session = BookingSession(catalog=catalog, store=JsonBookingSessionStore(data_dir=tmpdir))
        session.init_session("utm_source=google")
        session.set_package("signature", "lt2000")
        session.toggle_addon("rush-delivery")
        session.next_step()
        session.update_form_data(FormDataUpdate(contact_name="Jane"))

        store = JsonBookingSessionStore(data_dir=tmpdir)
        restored = BookingSession.restore(store.load(session.session_id), catalog=catalog, store=store)

        assert restored.session_id == session.session_id
        assert restored.current_step == 1
        assert restored.form_data == session.form_data
        assert restored.pricing == session.pricing
        assert restored.recommended_addons == session.recommended_addons

        restored.init_session("utm_source=facebook")
        assert restored.session_id == session.session_id
        assert restored.form_data.utm_source == "google"


def test_reset_deletes_snapshot():
    store = MemoryBookingSessionStore()
    session = BookingSession(catalog=PricingCatalogStore(), store=store)
    session.init_session()
    session_id = session.session_id
    session.next_step()
    assert store.load(session_id) is not None

    session.reset()

    assert store.load(session_id) is None


def test_store_failure_does_not_fail_action():
    session = BookingSession(catalog=PricingCatalogStore(), store=FailingStore())
    session.init_session()
    session.set_package("signature", "lt2000")

    assert session.pricing.package_price == 449


def test_manager_restores_after_restart():
    store = MemoryBookingSessionStore()
    catalog = PricingCatalogStore()
    first = BookingSessionManager(catalog=catalog, store=store)
    session = first.create("utm_campaign=spring")
    session.set_package("essentials", "lt2000")

    second = BookingSessionManager(catalog=catalog, store=store)
    restored = second.get(session.session_id)

    assert restored.form_data.package_key == "essentials"
    assert restored.pricing.package_price == 315
    assert second.get(session.session_id) is restored


def test_manager_discard():
    store = MemoryBookingSessionStore()
    manager = BookingSessionManager(catalog=PricingCatalogStore(), store=store)
    session = manager.create()
    session_id = session.session_id

    manager.discard(session_id)

    assert store.load(session_id) is None
    try:
        manager.get(session_id)
    except LookupError:
        pass
    else:
        raise AssertionError("discarded session should not be found")


def test_manager_evicts_least_recently_used_session():
    store = MemoryBookingSessionStore()
    manager = BookingSessionManager(catalog=PricingCatalogStore(), store=store, max_live_sessions=1)
    first = manager.create()
    first.set_package("signature", "lt2000")
    second = manager.create()

    assert manager.live_session_count == 1
    assert manager.get(second.session_id) is second

    # Evicted from memory, restored from its snapshot
    restored = manager.get(first.session_id)
    assert restored is not first
    assert restored.form_data.package_key == "signature"
    assert restored.pricing.package_price == 449
    assert manager.live_session_count == 1


def test_manager_rejects_empty_capacity():
    try:
        BookingSessionManager(catalog=PricingCatalogStore(), store=MemoryBookingSessionStore(), max_live_sessions=0)
    except ValueError:
        pass
    else:
        raise AssertionError("capacity below one should be rejected")


def test_catalog_store_keeps_explicit_empty_catalog():
    catalog = PricingCatalogStore(packages={}, addons={})

    assert catalog.get_package("signature") is None
    assert catalog.resolve_addon("rush-delivery") is None
    assert catalog.list_addons() == []

    session = BookingSession(catalog=catalog)
    session.set_package("signature", "lt2000")
    assert session.pricing.package_price == 0
    assert session.pricing.total == 0


if __name__ == "__main__":
    test_json_store_persistence()
    test_json_store_missing_and_corrupted()
    test_json_store_delete()
    test_session_snapshots_after_actions()
    test_restore_from_json_snapshot()
    test_reset_deletes_snapshot()
    test_store_failure_does_not_fail_action()
    test_manager_restores_after_restart()
    test_manager_discard()
    test_manager_evicts_least_recently_used_session()
    test_manager_rejects_empty_capacity()
    test_catalog_store_keeps_explicit_empty_catalog()
    print("All tests passed!")
