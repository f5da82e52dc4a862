"""VerificationTransport protocol. The verifier depends on this, not on the concrete implementation."""

from typing import Protocol

from schemas.models.verification import VerificationResult


class VerificationTransport(Protocol):
    def send(
        self, secret: str, token: str, client_ip: str = ""
    ) -> VerificationResult: ...
