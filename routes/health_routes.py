"""
Health check endpoint.

GET /health reports whether the reCAPTCHA verifier can be built.
Rules:
- Secret configured → "healthy" (200).
- Secret missing → "unhealthy" (503), since every validation would fail.

No request is sent to the verification endpoint; a token is single-use.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    settings = request.app.state.settings
    checks: dict[str, str] = {}
    overall = "healthy"

    if settings.recaptcha.recaptcha_secret:
        checks["recaptcha"] = "configured"
    else:
        checks["recaptcha"] = "not_configured"
        overall = "unhealthy"

    status_code = 503 if overall == "unhealthy" else 200
    return JSONResponse(
        status_code=status_code,
        content={"status": overall, "checks": checks},
    )
