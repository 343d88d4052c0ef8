"""Map HTTP outcomes to link statuses.

Everything here is pure. DNS and TLS failures are recognised from the
exception chain first (urllib3's ``NameResolutionError`` or a
``socket.gaierror``, and requests' ``SSLError``). When a failure carries no
such cause, marker substrings are looked for in the error text after URLs and
host names have been removed from it.
"""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass
from typing import Iterator, Optional
from urllib.parse import urlsplit

import requests
from urllib3.exceptions import NameResolutionError

from .models import LinkCheckResult, LinkStatus, StatusKind

DNS_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "failed to resolve",
    "name resolution",
    "getaddrinfo failed",
    "no address associated with hostname",
)

TLS_MARKERS = (
    "certificate",
    "ssl",
    "tls",
)

# URLs, pool host names and request paths that requests and urllib3 echo
# back in their messages.
_URL_TEXT = re.compile(r"[a-z][a-z0-9+.-]*://\S*|host='[^']*'|url: \S+", re.IGNORECASE)


@dataclass(frozen=True)
class TransportFailure:
    """A request that produced no HTTP response."""

    description: str
    timeout: bool = False
    too_many_redirects: bool = False
    connect: bool = False
    dns: bool = False
    tls: bool = False


def _contains_any(text: str, markers) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def _scrub(text: str, url: str) -> str:
    """Remove ``url``, its host and any other URL-like text from ``text``."""
    text = text.replace(url, " ")
    try:
        host = urlsplit(url).hostname
    except ValueError:
        host = None
    if host:
        text = re.sub(rf"(?<![\w.-]){re.escape(host)}(?![\w.-])", " ", text, flags=re.IGNORECASE)
    return _URL_TEXT.sub(" ", text)


def classify_response(url: str, status_code: int, location: Optional[str] = None) -> LinkCheckResult:
    if 200 <= status_code < 300:
        return LinkCheckResult(url, LinkStatus(StatusKind.OK), f"HTTP {status_code}")
    if 300 <= status_code < 400:
        status = LinkStatus.redirect(location)
        return LinkCheckResult(url, status, f"HTTP {status_code} -> {status.target}")
    if status_code in (404, 410):
        return LinkCheckResult(url, LinkStatus(StatusKind.BROKEN), f"HTTP {status_code}")
    return LinkCheckResult(url, LinkStatus(StatusKind.ERROR), f"HTTP {status_code}")


def classify_failure(url: str, failure: TransportFailure) -> LinkCheckResult:
    """Classify a failed request. Checks run in priority order."""
    text = _scrub(failure.description, url)
    if failure.timeout:
        kind, message = StatusKind.TIMEOUT, "Request timed out"
    elif failure.too_many_redirects:
        kind, message = StatusKind.TOO_MANY_REDIRECTS, "Too many redirects"
    elif failure.connect:
        if failure.dns or _contains_any(text, DNS_MARKERS):
            kind, message = StatusKind.DNS_ERROR, "Could not resolve hostname"
        else:
            kind, message = StatusKind.ERROR, "Connection failed"
    elif failure.tls or _contains_any(text, TLS_MARKERS):
        kind, message = StatusKind.SSL_ERROR, "SSL certificate error"
    else:
        kind, message = StatusKind.ERROR, failure.description
    return LinkCheckResult(url, LinkStatus(kind), message)


def _causes(exc: BaseException) -> Iterator[BaseException]:
    """Walk ``exc`` and everything it wraps: args, ``reason``, cause, context."""
    seen = set()
    stack = [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        linked = [getattr(current, "reason", None), current.__cause__, current.__context__]
        linked.extend(current.args)
        stack.extend(e for e in linked if isinstance(e, BaseException))


def failure_from_exception(exc: Exception) -> TransportFailure:
    """Translate a ``requests`` exception into a TransportFailure.

    SSLError subclasses ConnectionError in requests but is not flagged as a
    connect failure, so it reaches the TLS check.
    """
    is_tls = isinstance(exc, requests.exceptions.SSLError)
    return TransportFailure(
        description=str(exc) or type(exc).__name__,
        timeout=isinstance(exc, requests.Timeout),
        too_many_redirects=isinstance(exc, requests.TooManyRedirects),
        connect=isinstance(exc, requests.ConnectionError) and not is_tls,
        dns=any(isinstance(e, (NameResolutionError, socket.gaierror)) for e in _causes(exc)),
        tls=is_tls,
    )
