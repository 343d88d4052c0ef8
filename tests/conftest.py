from __future__ import annotations

import threading
import time
from typing import Callable, Dict, List, Optional, Union

import pytest
import requests

from linkguardian.errors import FetchError


def _response(status: int, headers: Optional[dict] = None, history=(), body: bytes = b"") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.headers.update(headers or {})
    resp.history = list(history)
    resp._content = body
    resp.encoding = "utf-8"
    return resp


class FakeFetcher:
    """Serves pages from a dict; unknown URLs fail like a 404."""

    def __init__(self, pages: Dict[str, str], failing: Optional[Dict[str, int]] = None) -> None:
        self.pages = pages
        self.failing = failing or {}
        self.fetched: List[str] = []
        self.closed = False

    def fetch(self, url: str) -> str:
        self.fetched.append(url)
        if url in self.pages:
            return self.pages[url]
        status = self.failing.get(url, 404)
        raise FetchError(url, f"HTTP {status}", status_code=status)

    def close(self) -> None:
        self.closed = True


Outcome = Union[requests.Response, Exception, Callable[[], requests.Response]]


class FakeSession:
    """Stands in for requests.Session in the verifier.

    Tracks how many head() calls are running at the same time.
    """

    def __init__(self, outcomes: Optional[Dict[str, Outcome]] = None, delay: float = 0.0) -> None:
        self.outcomes = outcomes or {}
        self.delay = delay
        self.headers: dict = {}
        self.calls: List[dict] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False
        self._lock = threading.Lock()

    def head(self, url: str, **kwargs) -> requests.Response:
        with self._lock:
            self.calls.append({"url": url, **kwargs})
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            outcome = self.outcomes.get(url, _response(200))
            if isinstance(outcome, Exception):
                raise outcome
            if callable(outcome):
                return outcome()
            return outcome
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def no_sleep():
    calls: List[float] = []

    def sleep(seconds: float) -> None:
        calls.append(seconds)

    sleep.calls = calls
    return sleep
