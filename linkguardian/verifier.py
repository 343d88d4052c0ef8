"""Concurrent link verification."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Iterator, List, Optional

import requests
from requests.adapters import HTTPAdapter

from .classifier import TransportFailure, classify_failure, classify_response, failure_from_exception
from .config import VerifierConfig
from .errors import ConfigError
from .models import LinkCheckResult

logger = logging.getLogger(__name__)


def build_session(config: VerifierConfig) -> requests.Session:
    """Build the pooled session shared by every request of one verify call."""
    try:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=config.concurrency_limit,
            pool_maxsize=config.concurrency_limit,
            max_retries=0,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.max_redirects = config.max_redirects
        session.headers.update({"User-Agent": config.user_agent})
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Failed to create HTTP client: {exc}") from exc
    return session


class LinkVerifier:
    """Check URLs with at most ``concurrency_limit`` HEAD requests in flight.

    Every URL yields exactly one LinkCheckResult; failures are reported as
    statuses, never raised. Each URL gets a single attempt.
    """

    def __init__(
        self,
        config: Optional[VerifierConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config or VerifierConfig()
        self._config.validate()
        self._owns_session = session is None
        self._session = session or build_session(self._config)

    def check(self, url: str) -> LinkCheckResult:
        """Probe one URL and classify the outcome."""
        try:
            resp = self._session.head(url, timeout=self._config.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            result = classify_failure(url, failure_from_exception(exc))
        except ValueError as exc:
            # URLs urllib3 rejects before any request is sent.
            result = classify_failure(url, TransportFailure(str(exc)))
        else:
            result = self._classify(url, resp)
        logger.debug("%s -> %s", url, result.status)
        return result

    @staticmethod
    def _classify(url: str, resp: requests.Response) -> LinkCheckResult:
        # The whole chain has been followed. A live target after one or more
        # hops is reported as a redirect to the first Location.
        if resp.history and 200 <= resp.status_code < 300:
            first = resp.history[0]
            return classify_response(url, first.status_code, first.headers.get("Location"))
        return classify_response(url, resp.status_code, resp.headers.get("Location"))

    def iter_verify(self, urls: Iterable[str]) -> Iterator[LinkCheckResult]:
        """Yield results in completion order."""
        urls = list(urls)
        if not urls:
            return
        workers = min(self._config.concurrency_limit, len(urls))
        logger.info("Checking %d link(s) with %d worker(s)", len(urls), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.check, url) for url in urls]
            for future in as_completed(futures):
                yield future.result()

    def verify(self, urls: Iterable[str]) -> List[LinkCheckResult]:
        results = list(self.iter_verify(urls))
        broken = sum(1 for r in results if not r.is_ok())
        logger.info("Checked %d link(s), %d not ok", len(results), broken)
        return results

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "LinkVerifier":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def verify(
    urls: Iterable[str],
    config: Optional[VerifierConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[LinkCheckResult]:
    """Check every URL in ``urls`` and return the results, unordered.

    Raises ConfigError before any request is made if ``config`` is invalid.
    """
    with LinkVerifier(config, session=session) as verifier:
        return verifier.verify(urls)
