"""Synchronous HTTP client with configurable timeout."""

from typing import Any

import httpx


class HttpClient:
    """Thin wrapper around httpx.Client with a configurable timeout.

    Meant to be used as a context manager around a single round-trip so the
    underlying connection is released on every exit path. Extra keyword
    arguments (e.g. ``transport=``) are passed through to ``httpx.Client``.
    """

    def __init__(self, timeout: float = 10.0, **client_kwargs: Any) -> None:
        self._client = httpx.Client(timeout=timeout, **client_kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return self._client.post(url, **kwargs)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
