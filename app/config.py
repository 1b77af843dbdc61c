"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC offset) used to compute the scan day",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    scan_enabled: bool = Field(
        default=True,
        description="Start the daily notification scan together with the API",
    )
    scan_hour: int = Field(default=0, ge=0, le=23)
    scan_minute: int = Field(default=0, ge=0, le=59)

    salary_cap: float = Field(default=1500, gt=0)
    salary_step: float = Field(default=200, gt=0)
    salary_threshold: float = Field(default=1400, gt=0)
    salary_increase_interval_months: int = Field(default=6, gt=0)
    reminder_lead_days: int = Field(
        default=30,
        gt=0,
        description="Days in advance a birthday or raise reminder is emitted",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    email_notifications_enabled: bool = Field(
        default=False,
        description="Also email every administrator a copy of scan notifications",
    )

    default_admin_email: str | None = Field(
        default=None,
        description="Email of the administrator created on startup when none exists",
    )
    default_admin_password: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_salary_bounds(self) -> "Settings":
        if self.salary_threshold > self.salary_cap:
            raise ValueError("SALARY_THRESHOLD cannot exceed SALARY_CAP")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    from app.utils.datetime import get_app_timezone

    get_settings.cache_clear()
    get_app_timezone.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
