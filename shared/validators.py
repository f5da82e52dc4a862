"""
Input sanitizers: framework-agnostic, pure functions.

Tokens and client IPs come straight from submitted forms, so they are
cleaned before being forwarded to the verification endpoint.
"""

from __future__ import annotations

import re

# Unterminated tags ("<script") are dropped up to the end of the string
_TAG_RE = re.compile(r"<[^>]*(>|$)")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_QUOTE_ENTITIES = {'"': "&#34;", "'": "&#39;"}


def sanitize_input(value: str) -> str:
    """Return *value* with markup and control characters neutralized.

    Rules:
    - HTML/XML tags are removed (including an unterminated trailing tag)
    - ASCII control characters are removed
    - Single and double quotes are encoded as numeric entities
    - Leading and trailing whitespace is trimmed

    Args:
        value: Raw string from the client.

    Returns:
        The sanitized string; may be empty when *value* held only markup,
        control characters or whitespace.
    """
    cleaned = _TAG_RE.sub("", value)
    cleaned = _CONTROL_RE.sub("", cleaned)
    for quote, entity in _QUOTE_ENTITIES.items():
        cleaned = cleaned.replace(quote, entity)
    return cleaned.strip()
