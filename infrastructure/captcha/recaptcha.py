"""reCAPTCHA v3 implementation of VerificationTransport.

One HTTPS round-trip per ``send``. Network, HTTP-status and decoding
failures are recorded in the result's error list; only local precondition
violations and success-without-data replies raise.
"""

from __future__ import annotations

import json
from functools import partial
from typing import Any, Callable, Optional

import httpx

from config import RECAPTCHA_VERIFY_URL
from errors import InvalidInputError, MalformedRemoteResponseError
from infrastructure.http_client import HttpClient
from schemas.models.verification import VerificationResult
from shared.logging import get_logger

log = get_logger(__name__)

REQUEST_TIMEOUT_SECONDS = 10.0
MAX_RESPONSE_DEPTH = 3
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

ERROR_MESSAGES: dict[str, str] = {
    "missing-input-secret": "The secret parameter is missing.",
    "invalid-input-secret": "The secret parameter is invalid or malformed.",
    "missing-input-response": "The response parameter is missing.",
    "invalid-input-response": "The response parameter is invalid or malformed.",
    "bad-request": "The request is invalid or malformed.",
    "timeout-or-duplicate": (
        "The response is no longer valid: either is too old or has been used previously."
    ),
}
UNKNOWN_ERROR_MESSAGE = "Unknown error code"


def error_text_for_code(code: str) -> str:
    return ERROR_MESSAGES.get(code, UNKNOWN_ERROR_MESSAGE)


def _exceeds_depth(value: Any, limit: int) -> bool:
    if not isinstance(value, (dict, list)):
        return False
    if limit <= 0:
        return True
    children = value.values() if isinstance(value, dict) else value
    return any(_exceeds_depth(child, limit - 1) for child in children)


def _decode_payload(body: str) -> dict:
    """Decode a siteverify body, raising ValueError on anything untrusted."""
    try:
        payload = json.loads(body)
    except RecursionError:
        raise ValueError("Maximum stack depth exceeded") from None
    if _exceeds_depth(payload, MAX_RESPONSE_DEPTH):
        raise ValueError("Maximum stack depth exceeded")
    if not isinstance(payload, dict):
        raise ValueError(f"expected an object, got {type(payload).__name__}")
    return payload


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_codes(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(code) for code in value]
    if isinstance(value, dict):
        return [str(code) for code in value.values()]
    return []


class RecaptchaTransport:
    def __init__(
        self,
        verify_url: str = RECAPTCHA_VERIFY_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        http_client_factory: Optional[Callable[[], HttpClient]] = None,
    ) -> None:
        self._verify_url = verify_url
        self._client_factory = http_client_factory or partial(
            HttpClient, timeout=timeout
        )

    def send(
        self, secret: str, token: str, client_ip: str = ""
    ) -> VerificationResult:
        if not secret or not token:
            raise InvalidInputError(
                "One or more of required reCAPTCHA arguments is empty."
            )

        result = VerificationResult()
        form = {"secret": secret, "response": token}
        if client_ip:
            form["remoteip"] = client_ip

        try:
            with self._client_factory() as http:
                response = http.post(
                    self._verify_url,
                    data=form,
                    headers={"Content-Type": FORM_CONTENT_TYPE},
                )
        except httpx.HTTPError as e:
            log.warning(
                "recaptcha_request_failed", error=str(e), error_type=type(e).__name__
            )
            result.add_error(f"HTTP transport error: {str(e) or type(e).__name__}")
            return result

        if response.status_code != 200:
            log.error(
                "recaptcha_unexpected_status",
                status_code=response.status_code,
                response_text=response.text[:200],
            )
            result.add_error(f"HTTP error: unexpected status {response.status_code}")
            return result

        try:
            payload = _decode_payload(response.text)
        except ValueError as e:
            log.warning("recaptcha_decode_failed", error=str(e))
            result.add_error(f"JSON decoding error: {e}")
            return result

        success = bool(payload.get("success"))
        score = _as_float(payload.get("score"))
        hostname = _as_str(payload.get("hostname"))
        action = _as_str(payload.get("action"))

        if not success and payload.get("error-codes") is not None:
            codes = _as_codes(payload["error-codes"])
            log.info("recaptcha_error_codes", error_codes=codes)
            for code in codes:
                result.add_error(error_text_for_code(code))
            return result

        # A genuine verdict always carries a nonzero score, hostname and action
        fields = {
            "success": success,
            "score": score,
            "hostname": hostname,
            "action": action,
        }
        missing = [name for name, value in fields.items() if not value]
        if missing:
            log.error("recaptcha_malformed_response", missing=missing)
            raise MalformedRemoteResponseError(details={"missing": missing})

        return result.fill(success, score, hostname, action)
