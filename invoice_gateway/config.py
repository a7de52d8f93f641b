"""Configuration management using Pydantic Settings"""

from dateutil.tz import gettz
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "invoice-gateway"
    log_level: str = "INFO"

    # Calendar
    timezone: str = "America/Sao_Paulo"  # resolves "today" when no reference date is sent
    projection_months: int = Field(default=12, ge=1)

    @field_validator("timezone")
    @classmethod
    def _ensure_known_timezone(cls, value: str) -> str:
        # unknown zones fail when settings load
        normalized = value.strip()
        if not normalized or gettz(normalized) is None:
            raise ValueError(f"Unknown time zone: {value!r}")
        return normalized


settings = Settings()
