from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any

from app.application.ports.booking_session_store import BookingSessionStorePort
from app.application.utils.snapshot_codec import deserialize_snapshot, serialize_snapshot
from app.domain.entities.booking_snapshot import BookingSnapshot

_SAFE_ID = re.compile(r"[^A-Za-z0-9_\-]")


class JsonBookingSessionStore(BookingSessionStorePort):
    def __init__(self, data_dir: str = "./data/booking_sessions") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, session_id: str) -> threading.Lock:
        """Get or create a lock for a session_id."""
        with self._lock_lock:
            if session_id not in self._locks:
                self._locks[session_id] = threading.Lock()
            return self._locks[session_id]

    def _get_file_path(self, session_id: str) -> Path:
        """Get the file path for a session_id."""
        return self._data_dir / f"{_SAFE_ID.sub('_', session_id)}.json"

    def _save_data(self, session_id: str, data: dict[str, Any]) -> None:
        """Save session data to JSON file atomically."""
        file_path = self._get_file_path(session_id)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            # Atomic rename
            temp_path.replace(file_path)
        except Exception:
            # Clean up temp file on error
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def save(self, session_id: str, snapshot: BookingSnapshot) -> None:
        data = {
            "session_id": session_id,
            "snapshot": serialize_snapshot(snapshot),
            "version": 1,
        }
        with self._get_lock(session_id):
            self._save_data(session_id, data)

    def load(self, session_id: str) -> BookingSnapshot | None:
        file_path = self._get_file_path(session_id)
        with self._get_lock(session_id):
            if not file_path.exists():
                return None
            try:
                with open(file_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return deserialize_snapshot(data.get("snapshot", {}))
            except (json.JSONDecodeError, OSError, AttributeError, TypeError, ValueError) as e:
                # Corrupted file, treat as no snapshot
                self._logger.warning(
                    "Unreadable booking snapshot",
                    extra={"session_id": session_id, "reason": type(e).__name__},
                )
                return None

    def delete(self, session_id: str) -> None:
        with self._get_lock(session_id):
            self._get_file_path(session_id).unlink(missing_ok=True)
