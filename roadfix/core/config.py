"""
Roadfix Connect - Configuration Management
Centralized configuration using pydantic-settings.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Database
    database_url: Optional[str] = None
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_isolation_level: Optional[str] = None
    db_busy_timeout_seconds: float = 30.0
    db_auto_create_tables: bool = True

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Community reports
    recent_reports_limit: int = 50
    max_reports_limit: int = 200
    points_per_confirmation: int = 1
    image_suppressed_issue_types: List[str] = ["Wrong Parking"]

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
