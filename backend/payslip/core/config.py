import os
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import AnyHttpUrl, Field, PostgresDsn, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Payslip Generator API"
    database_url: PostgresDsn | str = Field(
        default="postgresql://postgres:postgres@db:5432/payslip",
        description="Database connection string",
    )
    auto_create_schema: bool = Field(
        default=False, description="Create missing tables on startup instead of relying on alembic"
    )
    cors_origins: list[AnyHttpUrl] = []
    log_level: str = "INFO"
    json_logs: bool = True
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")

    hours_per_day: int = Field(default=8, gt=0, description="Divisor turning a daily rate into an hourly rate")
    overtime_multiplier: Decimal = Field(default=Decimal("2"), gt=0)
    max_overtime_hours: float = Field(default=3, gt=0, description="Upper bound for one overtime submission")
    overtime_opens_at_hour: int = Field(default=17, ge=0, le=23)
    seed_employee_count: int = 100

    model_config = SettingsConfigDict(env_prefix="PAYSLIP_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[AnyHttpUrl]) -> list[AnyHttpUrl]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin]
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("PAYSLIP_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


settings = get_settings()
