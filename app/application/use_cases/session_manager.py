from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from app.application.exceptions import SessionNotFoundError
from app.application.ports.booking_session_store import BookingSessionStorePort
from app.application.ports.pricing_catalog import PricingCatalogPort
from app.application.use_cases.booking_session import BookingSession
from app.application.use_cases.session_tracker import SessionTracker

DEFAULT_MAX_LIVE_SESSIONS = 1000


class BookingSessionManager:
    """
    Keeps recently used sessions in memory and falls back to the store for
    the rest. At most max_live_sessions are held; the least recently used one
    is dropped from memory (its snapshot stays in the store) when a new one
    comes in.
    """

    def __init__(
        self,
        catalog: PricingCatalogPort,
        store: BookingSessionStorePort,
        tracker: SessionTracker | None = None,
        default_property_state: str = "FL",
        max_live_sessions: int = DEFAULT_MAX_LIVE_SESSIONS,
    ) -> None:
        if max_live_sessions < 1:
            raise ValueError("max_live_sessions must be at least 1")
        self._catalog = catalog
        self._store = store
        self._tracker = tracker or SessionTracker()
        self._default_property_state = default_property_state
        self._max_live_sessions = max_live_sessions
        self._sessions: OrderedDict[str, BookingSession] = OrderedDict()
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def live_session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, query_string: str | None = None) -> BookingSession:
        session = BookingSession(
            catalog=self._catalog,
            store=self._store,
            tracker=self._tracker,
            default_property_state=self._default_property_state,
        )
        session.init_session(query_string)
        with self._lock:
            self._remember(session.session_id, session)
        return session

    def get(self, session_id: str) -> BookingSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                self._sessions.move_to_end(session_id)
                return session

            snapshot = self._store.load(session_id)
            if snapshot is None:
                raise SessionNotFoundError(f"Booking session not found: {session_id}")

            session = BookingSession.restore(
                snapshot,
                catalog=self._catalog,
                store=self._store,
                tracker=self._tracker,
                default_property_state=self._default_property_state,
            )
            self._remember(session_id, session)
            self._logger.info("Booking session restored from snapshot", extra={"session_id": session_id})
            return session

    def discard(self, session_id: str) -> None:
        session = self.get(session_id)
        session.reset()
        with self._lock:
            self._sessions.pop(session_id, None)

    def _remember(self, session_id: str, session: BookingSession) -> None:
        # Caller holds self._lock
        self._sessions[session_id] = session
        self._sessions.move_to_end(session_id)
        while len(self._sessions) > self._max_live_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            self._logger.debug("Booking session evicted from memory", extra={"session_id": evicted_id})
