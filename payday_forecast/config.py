"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "payday-forecast"
    log_level: str = "INFO"

    # Forecast
    default_horizon_days: int = 90
    max_horizon_days: int = 730  # Upper bound accepted from API callers

    # History
    default_period_length_days: int = 30


settings = Settings()
