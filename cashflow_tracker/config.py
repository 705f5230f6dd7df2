"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./cashflow_tracker.db"

    # Service
    service_name: str = "cashflow-tracker"
    log_level: str = "INFO"

    # Dashboard
    currency: str = "PHP"
    upcoming_window_days: int = 30


settings = Settings()
