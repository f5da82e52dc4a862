"""
Verification policy and result models.

VerificationPolicy is the immutable local configuration a remote verdict is
judged against. VerificationResult is the decoded siteverify reply: either
it carries transport/protocol errors, or a trustworthy
success/score/hostname/action tuple, never both.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from errors import InvalidInputError


@dataclass(frozen=True)
class VerificationPolicy:
    """Local policy for judging a verification result.

    Empty ``hostname`` or ``action`` disables that check. To reconfigure,
    build a new policy (``dataclasses.replace``) instead of mutating one
    that may be shared between concurrent requests.
    """

    secret: str
    min_score: float = 0.5
    hostname: str = ""
    action: str = ""

    def __post_init__(self) -> None:
        if not self.secret:
            raise InvalidInputError("reCAPTCHA secret is not set", field="secret")


@dataclass
class VerificationResult:
    """Decoded response of one verification round-trip."""

    success: bool = False
    score: float = 0.0
    hostname: str = ""
    action: str = ""
    errors: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        if error:
            self.errors.append(error)

    def fill(
        self, success: bool, score: float, hostname: str, action: str
    ) -> "VerificationResult":
        self.success = success
        self.score = score
        self.hostname = hostname
        self.action = action
        return self
