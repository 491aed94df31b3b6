"""Thin HTTP layer over ``requests`` used by every fetch step."""

from __future__ import annotations

import json
from typing import Any

import requests
from requests import Response

from .errors import FetchError, ParseError

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "version-check-script"


class HttpClient:
    """Issue GET requests with a shared session, timeout and optional bearer token.

    The session is injectable so callers (and tests) can supply any object with a
    ``requests.Session``-compatible ``get`` method.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = USER_AGENT,
        session: Any | None = None,
    ) -> None:
        self.token = token
        self.timeout = timeout
        self.user_agent = user_agent
        self.session = session if session is not None else requests.Session()

    def _headers(self, authenticated: bool) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if authenticated:
            headers["Accept"] = "application/vnd.github+json"
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        authenticated: bool = False,
    ) -> Response:
        """Return the response for ``url``; transport failures raise ``FetchError``."""
        try:
            return self.session.get(
                url,
                params=params,
                headers=self._headers(authenticated),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if close is not None:
            close()


def is_success(response: Response) -> bool:
    return 200 <= response.status_code < 300


def decode_json(response: Response, url: str) -> Any:
    """Decode a response body as JSON, raising ``ParseError`` on malformed content."""
    try:
        return json.loads(response.text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON from {url}: {exc.msg}") from exc
