"""
Unit test configuration.

Patches dotenv so pydantic-settings never reads the project's real .env file
during unit tests. Tests control config exclusively through monkeypatch.setenv().
"""

import pytest


@pytest.fixture(autouse=True)
def disable_dotenv_loading(monkeypatch):
    """Prevent pydantic-settings from loading .env files in all unit tests."""
    import pydantic_settings.sources.providers.dotenv as ps_dotenv

    monkeypatch.setattr(ps_dotenv, "dotenv_values", lambda *a, **kw: {})


@pytest.fixture(autouse=True)
def clear_recaptcha_env(monkeypatch):
    """Start every test without reCAPTCHA or logging variables from the shell."""
    for var in (
        "RECAPTCHA_SECRET",
        "RECAPTCHA_MIN_SCORE",
        "RECAPTCHA_HOSTNAME",
        "RECAPTCHA_ACTION",
        "RECAPTCHA_VERIFY_URL",
        "RECAPTCHA_TIMEOUT_SECONDS",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "ENV",
    ):
        monkeypatch.delenv(var, raising=False)
