"""
Application configuration.

Settings are read from environment variables and an optional ``.env`` file.
"""
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "moodflow-dev-secret-change-me"


class Settings(BaseSettings):
    """Runtime settings for the API and the local CLI."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "MoodFlow"
    environment: str = "development"
    debug: bool = False
    api_prefix: str = "/api"

    # Database
    database_url: str = "sqlite:///./moodflow.db"

    # Auth
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    min_password_length: int = 6

    # Day bucketing for statistics
    time_zone: str = "UTC"

    # Local mode
    local_data_file: Path = Path.home() / ".moodflow" / "moodflow_data.json"

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Rate limiting
    rate_limiting_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    rate_limit_default_limits: List[str] = []
    rate_limit_config: Optional[Dict[str, Dict[str, str]]] = None

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        allowed = {"development", "production", "test"}
        value = v.strip().lower()
        if value not in allowed:
            raise ValueError(f"environment must be one of {sorted(allowed)}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def check_production_secret(self) -> "Settings":
        if self.environment == "production" and self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set in production")
        return self


settings = Settings()
