"""HTTP page fetching for the crawler and the GitHub reader."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import DEFAULT_USER_AGENT
from .errors import FetchError

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetch page bodies over a shared session. One attempt per URL."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._timeout = timeout
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": user_agent})
        self._session = session

    def fetch(self, url: str) -> str:
        """Return the body of ``url``.

        Raises FetchError on transport failure or a non-2xx response.
        """
        logger.debug("Fetching %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        if not 200 <= resp.status_code < 300:
            raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp.text

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
