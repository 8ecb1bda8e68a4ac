"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The hCaptcha site and secret keys are NOT environment settings: they are
global host settings kept in the settings store (see
repositories/settings_repository.py) and entered by an administrator.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongodb_uri: str
    db_name: str = "phplist"


class HCaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    hcaptcha_verify_url: str = "https://hcaptcha.com/siteverify"
    hcaptcha_api_url: str = "https://hcaptcha.com/1/api.js"

    # The verify call blocks the submission; never wait on it indefinitely
    hcaptcha_timeout_seconds: float = 5.0

    # What to do when the provider cannot be reached or answers garbage:
    # "closed" rejects the submission, "open" lets it through
    hcaptcha_failure_policy: Literal["closed", "open"] = "closed"

    @property
    def fail_open(self) -> bool:
        return self.hcaptcha_failure_policy == "open"


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class SentrySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    sentry_dsn: str = ""
    sentry_send_pii: bool = False
    sentry_traces_sample_rate: float = 0.1


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_name: str = "hcaptcha-subscribe"

    # OpenAPI docs URL (None disables the docs UI in production)
    docs_url: Optional[str] = "/docs"

    # Sub-configs (composed via model_validator below)
    db: Optional[DatabaseSettings] = None
    hcaptcha: Optional[HCaptchaSettings] = None
    logging: Optional[LoggingSettings] = None
    sentry: Optional[SentrySettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.db is None:
            self.db = DatabaseSettings()
        if self.hcaptcha is None:
            self.hcaptcha = HCaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        if self.sentry is None:
            self.sentry = SentrySettings()

        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
