from __future__ import annotations

from app.application.ports.booking_session_store import BookingSessionStorePort
from app.domain.entities.booking_snapshot import BookingSnapshot


class MemoryBookingSessionStore(BookingSessionStorePort):
    def __init__(self) -> None:
        self._snapshots: dict[str, BookingSnapshot] = {}

    def save(self, session_id: str, snapshot: BookingSnapshot) -> None:
        self._snapshots[session_id] = snapshot

    def load(self, session_id: str) -> BookingSnapshot | None:
        return self._snapshots.get(session_id)

    def delete(self, session_id: str) -> None:
        self._snapshots.pop(session_id, None)
