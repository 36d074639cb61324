from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    activity_api_base_url: str = "http://localhost:8080/api/internal"
    activity_api_token: str | None = None
    activity_api_timeout_seconds: float = 15.0
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 60
    rate_limit_window_seconds: int = 60
    heatmap_cache_max_age_seconds: int = 3600
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
