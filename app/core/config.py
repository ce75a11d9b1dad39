from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BOOKING_STORE_PROVIDER: str = "memory"  # "memory" | "json"
    BOOKING_DATA_DIR: str = "./data/booking_sessions"
    DEFAULT_PROPERTY_STATE: str = "FL"
    BOOKING_MAX_LIVE_SESSIONS: int = 1000


settings = Settings()
