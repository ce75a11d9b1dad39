from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.booking_session_store import BookingSessionStorePort
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.session_manager import BookingSessionManager
from app.infrastructure.knowledge.pricing_catalog_store import PricingCatalogStore
from app.infrastructure.store.json_store import JsonBookingSessionStore
from app.infrastructure.store.memory_store import MemoryBookingSessionStore


@lru_cache
def get_pricing_catalog() -> PricingCatalogPort:
    return PricingCatalogStore()


@lru_cache
def get_session_store() -> BookingSessionStorePort:
    logger = logging.getLogger(__name__)
    if settings.BOOKING_STORE_PROVIDER.lower() == "json":
        logger.info("Using JsonBookingSessionStore (dir=%s)", settings.BOOKING_DATA_DIR)
        return JsonBookingSessionStore(data_dir=settings.BOOKING_DATA_DIR)
    logger.info("Using MemoryBookingSessionStore")
    return MemoryBookingSessionStore()


@lru_cache
def get_session_manager() -> BookingSessionManager:
    return BookingSessionManager(
        catalog=get_pricing_catalog(),
        store=get_session_store(),
        default_property_state=settings.DEFAULT_PROPERTY_STATE,
        max_live_sessions=settings.BOOKING_MAX_LIVE_SESSIONS,
    )
