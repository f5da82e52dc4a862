"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors raised by the verification core.
Each subclass separates "could not determine" failures from a plain ``False``
verdict, so callers never have to inspect a boolean to learn that the
remote service misbehaved.

Non-AppError exceptions bubble up as 500s when a FastAPI host registers the
handlers below.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidInputError(AppError):
    """A local precondition failed: empty secret or empty token."""

    status_code = 400
    error_code = "invalid_input"


class ValidationFailedError(AppError):
    """The transport reported network, decoding or remote error-code failures."""

    status_code = 502
    error_code = "captcha_validation_failed"


class MalformedRemoteResponseError(AppError):
    """The remote service claimed success without the fields it must send."""

    status_code = 502
    error_code = "malformed_remote_response"

    def __init__(
        self,
        message: str = "reCAPTCHA response does not contain required attributes",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ConfigurationError(AppError):
    """The verifier was used without a transport or a configured secret."""

    status_code = 500
    error_code = "configuration_error"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal_error"},
        )
