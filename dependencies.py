"""
FastAPI dependency providers.

All injectable dependencies are defined here as plain functions used with
FastAPI's Depends() system. Routes that protect a form submission resolve
the verifier through get_captcha_verifier and call verify_captcha.
"""

from __future__ import annotations

from fastapi import Request

from config import AppSettings
from services.captcha_service import CaptchaVerifier
from shared.ip_utils import get_client_ip


def get_settings(request: Request) -> AppSettings:
    """Return the AppSettings instance stored on app.state."""
    return request.app.state.settings


def get_captcha_verifier(request: Request) -> CaptchaVerifier:
    """Return the app-wide verifier, building it from settings on first use.

    Raises ConfigurationError when no reCAPTCHA secret is configured.
    """
    verifier = getattr(request.app.state, "captcha_verifier", None)
    if verifier is None:
        settings = get_settings(request)
        verifier = CaptchaVerifier.from_settings(
            settings.recaptcha, production=settings.is_production
        )
        request.app.state.captcha_verifier = verifier
    return verifier


def verify_captcha(request: Request, token: str, verifier: CaptchaVerifier) -> bool:
    """Validate *token* for the client that sent *request*."""
    return verifier.validate(token, get_client_ip(request))
