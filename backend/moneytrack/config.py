"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "MoneyTrack"

    # Database
    database_url: str = "sqlite:///./moneytrack.sqlite"

    # Logging
    log_level: str = "INFO"
    log_format: str = "standard"  # standard, json

    # Recurring generation
    first_weekday: int = 6  # 0=Mon..6=Sun, start of the weekly dedupe bucket
    generate_on_startup: bool = True

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
