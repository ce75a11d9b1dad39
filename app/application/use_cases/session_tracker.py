from __future__ import annotations

import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import parse_qs

_ID_ALPHABET = string.ascii_lowercase + string.digits


@dataclass(frozen=True)
class UtmParams:
    source: str | None = None
    medium: str | None = None
    campaign: str | None = None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionTracker:
    """Session identity, timestamps and UTM capture for the booking funnel."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or _utc_now

    def generate_session_id(self) -> str:
        # Time-ordered prefix plus random suffix, not used for auth
        millis = int(self._clock().timestamp() * 1000)
        suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
        return f"bk_{millis}_{suffix}"

    def now_iso(self) -> str:
        return self._clock().isoformat()

    def capture_utm(self, query_string: str | None) -> UtmParams:
        if not query_string:
            return UtmParams()
        params = parse_qs(query_string.lstrip("?"))

        def first(key: str) -> str | None:
            values = [v.strip() for v in params.get(key, []) if v.strip()]
            return values[0] if values else None

        return UtmParams(
            source=first("utm_source"),
            medium=first("utm_medium"),
            campaign=first("utm_campaign"),
        )
