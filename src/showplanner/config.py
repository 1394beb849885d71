"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote booking API (persistence of screens, movies and shows)
    booking_api_url: str = "http://localhost:5000/api"
    booking_api_token: str = ""
    request_timeout: int = 30

    # Booking window
    default_max_advance_days: int = 3
    max_advance_days_limit: int = 14

    # Customer-facing availability
    showtime_buffer_minutes: int = 30

    # Cached identity records used when the profile call fails
    owner_cache_path: str = ".cache/theatre_owner.json"
    user_cache_path: str = ".cache/user.json"

    # Past-show cleanup job
    cleanup_enabled: bool = True
    cleanup_hour: int = 4

    log_level: str = "INFO"

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global settings instance
settings = Settings()
