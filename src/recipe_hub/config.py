"""Application configuration."""

import os

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
PRODUCTION_MIN_BCRYPT_ROUNDS = 12


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expires_in_days: int = 7
    bcrypt_rounds: int = 12
    store_connect_timeout_seconds: float = 5.0
    cors_allow_origins: str = "*"
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Return True when running with production error exposure rules."""
        return self.environment.lower() == "production"

    @model_validator(mode="after")
    def _check_production_work_factor(self) -> "Settings":
        if self.is_production and self.bcrypt_rounds < PRODUCTION_MIN_BCRYPT_ROUNDS:
            raise ValueError(
                f"bcrypt_rounds must be at least {PRODUCTION_MIN_BCRYPT_ROUNDS} in production"
            )
        return self


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse a comma-separated CORS origin list from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value:
            origins.append(value)
    return origins or ["*"]
