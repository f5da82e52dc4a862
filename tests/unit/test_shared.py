"""
Unit tests for the shared/ utility modules.

Covers:
- shared.validators  (sanitize_input)
- shared.ip_utils    (get_client_ip)
- shared.logging     (redact_sensitive_fields, hash_ip, get_logger, setup_logging)
"""

from __future__ import annotations

import hashlib
from unittest.mock import MagicMock

import pytest
import structlog

from config import LoggingSettings
from shared.ip_utils import get_client_ip
from shared.logging import get_logger, hash_ip, redact_sensitive_fields, setup_logging
from shared.validators import sanitize_input


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_request(headers: dict, client_host: str | None = "10.0.0.1") -> MagicMock:
    """Minimal mock of a FastAPI Request."""
    req = MagicMock()
    req.headers = headers
    if client_host is None:
        req.client = None
    else:
        req.client = MagicMock()
        req.client.host = client_host
    return req


# ---------------------------------------------------------------------------
# shared.validators: sanitize_input
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("03AGdBq24abc-_XYZ", "03AGdBq24abc-_XYZ"),
        ("  padded-token  ", "padded-token"),
        ("<b>bold</b>", "bold"),
        ("tok<script>alert(1)</script>en", "tokalert(1)en"),
        ("token<img src=x", "token"),
        ("to\x00ken\n", "token"),
        ('say "hi"', "say &#34;hi&#34;"),
        ("it's", "it&#39;s"),
        ("", ""),
        ("   ", ""),
        ("<b></b>", ""),
        ("\x01\x02\x7f", ""),
    ],
)
def test_sanitize_input(raw, expected):
    assert sanitize_input(raw) == expected


def test_sanitize_input_keeps_ip_addresses():
    assert sanitize_input("2001:db8::1") == "2001:db8::1"
    assert sanitize_input("192.168.0.1") == "192.168.0.1"


# ---------------------------------------------------------------------------
# shared.ip_utils: get_client_ip
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "headers, client_host, expected_ip",
    [
        (
            {"CF-Connecting-IP": "1.2.3.4", "X-Real-IP": "9.9.9.9"},
            "10.0.0.1",
            "1.2.3.4",
        ),
        ({"X-Forwarded-For": "5.6.7.8, 10.0.0.2"}, "10.0.0.1", "5.6.7.8"),
        ({"X-Real-IP": "9.9.9.9"}, "10.0.0.1", "9.9.9.9"),
        ({}, "10.0.0.1", "10.0.0.1"),
        ({"X-Forwarded-For": "not-an-ip"}, "10.0.0.1", "10.0.0.1"),
        ({"True-Client-IP": "2001:db8::1"}, "10.0.0.1", "2001:db8::1"),
        ({}, "testclient", ""),
        ({}, None, ""),
    ],
    ids=[
        "cloudflare_wins",
        "forwarded_first_hop",
        "real_ip",
        "socket_fallback",
        "garbage_header_ignored",
        "ipv6",
        "non_ip_peer",
        "no_client",
    ],
)
def test_get_client_ip(headers, client_host, expected_ip):
    assert get_client_ip(_make_request(headers, client_host)) == expected_ip


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestRedactSensitiveFields:
    def test_redacts_secret_and_token(self):
        event = {"event": "x", "secret": "s3cret", "token": "abc", "api_key": "k"}
        out = redact_sensitive_fields(None, "info", event)
        assert out["secret"] == "***REDACTED***"
        assert out["token"] == "***REDACTED***"
        assert out["api_key"] == "***REDACTED***"

    def test_redacts_by_fragment(self):
        out = redact_sensitive_fields(None, "info", {"recaptcha_secret": "s"})
        assert out["recaptcha_secret"] == "***REDACTED***"

    def test_keeps_protected_and_plain_keys(self):
        event = {"event": "captcha_validated", "level": "info", "score": 0.9}
        out = redact_sensitive_fields(None, "info", dict(event))
        assert out == event


class TestHashIp:
    def test_none_passthrough(self):
        assert hash_ip(None) is None

    def test_development_returns_original(self):
        assert hash_ip("1.2.3.4") == "1.2.3.4"

    def test_production_hashes(self):
        expected = hashlib.sha256(b"1.2.3.4").hexdigest()[:16]
        assert hash_ip("1.2.3.4", production=True) == expected


class TestLoggingSetup:
    def test_get_logger_returns_structlog_logger(self):
        log = get_logger(__name__)
        assert hasattr(log, "info")
        assert hasattr(log, "bind")

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_setup_logging_configures_structlog(self, log_format):
        setup_logging(LoggingSettings(log_format=log_format))
        assert structlog.is_configured()
        structlog.reset_defaults()
