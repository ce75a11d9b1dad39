import logging

from fastapi import FastAPI

from app.api.v1.booking import router as booking_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "action", "step", "package_key", "addon_id", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Listing Media Booking", version="1.0.0")

app.include_router(booking_router, prefix="/api/v1/booking", tags=["booking"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
