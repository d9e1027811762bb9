"""Application settings loaded from environment / .env file."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Database ──────────────────────────────────────────
    database_url: str = Field(min_length=1)  # required, no default
    db_pool_size: int = 20
    db_max_overflow: int = 10

    # ── Security ──────────────────────────────────────────
    jwt_secret_key: str = Field(min_length=1)  # required, no default
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # ── HTTP ──────────────────────────────────────────────
    allowed_origins: str = "*"
    host: str = "0.0.0.0"
    port: int = 5000

    # ── Logging ───────────────────────────────────────────
    log_level: str = "INFO"
    log_dir: str = "logs"  # empty string disables file logs


@lru_cache
def get_settings() -> Settings:
    return Settings()
