import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from timeledger.calculator import DEFAULT_BREAK_HOURS

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Crew Time Ledger"
    data_path: Path = Field(default=Path("data/ledger.json"), description="JSON store for tasks and time entries")
    break_hours: float = Field(
        default=DEFAULT_BREAK_HOURS,
        ge=0,
        description="Fixed lunch break subtracted from entries that deduct a break",
    )
    cors_origins: str = Field(default="", description="Comma-separated origins allowed by the API")
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")

    model_config = SettingsConfigDict(env_prefix="TIMELEDGER_", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def env_file_for(env: str) -> Path | None:
    """Pick ``.env.<env>`` over ``.env``; ``None`` when neither is present."""
    for candidate in (BASE_DIR / f".env.{env}", BASE_DIR / ".env"):
        if candidate.exists():
            return candidate
    return None


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=env_file_for(os.getenv("TIMELEDGER_ENV", "dev")))
