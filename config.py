"""
Application configuration via pydantic-settings.

All settings are loaded from environment variables (and .env file).

The reCAPTCHA secret defaults to an empty string so settings can always be
instantiated; the verifier factory refuses to build from an empty secret
(see services.captcha_service.CaptchaVerifier.from_settings).
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


class RecaptchaSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    recaptcha_secret: str = ""
    recaptcha_min_score: float = 0.5

    # Empty string disables the corresponding check
    recaptcha_hostname: str = ""
    recaptcha_action: str = ""

    recaptcha_verify_url: str = RECAPTCHA_VERIFY_URL
    recaptcha_timeout_seconds: float = 10.0


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"
    log_format: str = "console"  # "json" in production


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: str = "development"
    app_name: str = "recaptcha-verifier"

    # Sub-configs (composed via model_validator below)
    recaptcha: Optional[RecaptchaSettings] = None
    logging: Optional[LoggingSettings] = None

    @model_validator(mode="after")
    def _populate_sub_configs(self) -> "AppSettings":
        # Populate sub-configs from the same env/dotenv source
        if self.recaptcha is None:
            self.recaptcha = RecaptchaSettings()
        if self.logging is None:
            self.logging = LoggingSettings()
        return self

    @property
    def is_production(self) -> bool:
        return self.env == "production"
