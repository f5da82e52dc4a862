"""
CaptchaVerifier: reduces a verification round-trip to a pass/fail verdict.

``validate`` returns False only when the remote verdict definitely fails the
local policy. Anything that prevents a verdict (bad input, missing
configuration, transport or protocol failure) is raised instead, so callers
must not treat an exception as "not a human".
"""

from __future__ import annotations

from typing import Optional

from config import RecaptchaSettings
from errors import ConfigurationError, InvalidInputError, ValidationFailedError
from infrastructure.captcha.protocol import VerificationTransport
from infrastructure.captcha.recaptcha import RecaptchaTransport
from schemas.models.verification import VerificationPolicy
from shared.logging import get_logger, hash_ip
from shared.validators import sanitize_input

log = get_logger(__name__)


class CaptchaVerifier:
    def __init__(
        self,
        policy: VerificationPolicy,
        transport: Optional[VerificationTransport] = None,
        *,
        production: bool = False,
    ) -> None:
        self._policy = policy
        self._transport = transport
        self._production = production

    @classmethod
    def create(
        cls,
        secret: str,
        min_score: float = 0.5,
        hostname: str = "",
        action: str = "",
        *,
        transport: Optional[VerificationTransport] = None,
        production: bool = False,
    ) -> "CaptchaVerifier":
        policy = VerificationPolicy(
            secret=secret, min_score=min_score, hostname=hostname, action=action
        )
        return cls(policy, transport, production=production)

    @classmethod
    def from_settings(
        cls,
        settings: RecaptchaSettings,
        transport: Optional[VerificationTransport] = None,
        *,
        production: bool = False,
    ) -> "CaptchaVerifier":
        """Build a verifier wired to the production transport unless one is given."""
        if not settings.recaptcha_secret:
            raise ConfigurationError(
                "reCAPTCHA secret is not configured", field="recaptcha_secret"
            )
        if transport is None:
            transport = RecaptchaTransport(
                verify_url=settings.recaptcha_verify_url,
                timeout=settings.recaptcha_timeout_seconds,
            )
        return cls.create(
            settings.recaptcha_secret,
            settings.recaptcha_min_score,
            settings.recaptcha_hostname,
            settings.recaptcha_action,
            transport=transport,
            production=production,
        )

    @property
    def policy(self) -> VerificationPolicy:
        return self._policy

    def with_policy(self, policy: VerificationPolicy) -> "CaptchaVerifier":
        """Return a new verifier sharing this one's transport."""
        return CaptchaVerifier(policy, self._transport, production=self._production)

    def validate(self, token: str, client_ip: str = "") -> bool:
        """Verify *token* remotely and judge the verdict against the policy.

        Raises:
            InvalidInputError: *token* is empty after sanitization.
            ConfigurationError: no transport has been configured.
            ValidationFailedError: the round-trip produced errors.
            MalformedRemoteResponseError: propagated from the transport.
        """
        token = sanitize_input(token)
        client_ip = sanitize_input(client_ip)
        if not token:
            raise InvalidInputError(
                "One or more of required reCAPTCHA arguments is empty.",
                field="token",
            )
        if self._transport is None:
            raise ConfigurationError("HTTP transport is not set.")

        result = self._transport.send(self._policy.secret, token, client_ip)
        if result.has_errors:
            raise ValidationFailedError(
                "Errors during request occurred: " + ". ".join(result.errors),
                details=list(result.errors),
            )

        policy = self._policy
        passed = result.success and result.score >= policy.min_score
        if policy.hostname:
            passed = passed and result.hostname == policy.hostname
        if policy.action:
            passed = passed and result.action == policy.action

        log.debug(
            "captcha_validated",
            passed=passed,
            score=result.score,
            hostname=result.hostname,
            action=result.action,
            client_ip=hash_ip(client_ip, self._production),
        )
        return passed
