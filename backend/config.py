"""ComplianceLens configuration loaded from environment variables."""

from __future__ import annotations

import json
from datetime import datetime

from pydantic_settings import BaseSettings
from pydantic import Field

from backend.utils.time import parse_instant


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    cors_origins: str = Field(default='["http://localhost:3000"]', alias="CORS_ORIGINS")
    app_env: str = Field(default="development", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    strict_startup_validation: bool = Field(default=False, alias="STRICT_STARTUP_VALIDATION")

    # Scoring windows
    expiring_soon_window_days: int = Field(default=30, ge=0, alias="EXPIRING_SOON_WINDOW_DAYS")
    sla_at_risk_hours: float = Field(default=24.0, ge=0, alias="SLA_AT_RISK_HOURS")

    # Clock pinning; the demo fixtures are dated around early March 2025
    reference_now: str = Field(default="", alias="REFERENCE_NOW")

    # Record store
    enable_demo_data: bool = Field(default=True, alias="ENABLE_DEMO_DATA")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"production", "prod"}

    @property
    def pinned_now(self) -> datetime | None:
        raw = (self.reference_now or "").strip()
        if not raw:
            return None
        return parse_instant(raw)

    @property
    def cors_origins_list(self) -> list[str]:
        raw = (self.cors_origins or "").strip()
        if not raw:
            return []

        # Supports JSON list format and comma-separated format.
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(origin).strip() for origin in parsed if str(origin).strip()]
            except json.JSONDecodeError:
                pass

        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
