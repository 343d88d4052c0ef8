"""URL resolution and domain restriction."""

from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, List, Optional
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)

_SKIP_PREFIXES = ("#", "mailto:", "tel:", "javascript:")
_SCHEMES = ("http", "https")


def resolve_link(base_url: str, href: str) -> Optional[str]:
    """Resolve ``href`` against ``base_url`` to an absolute http(s) URL.

    Returns None for fragment-only links, ``mailto:``/``tel:``/``javascript:``
    targets, other schemes and anything that does not parse. The fragment is
    dropped and an empty path becomes ``/``, so resolving an already resolved
    URL gives the same string back.
    """
    href = href.strip()
    if not href or href.lower().startswith(_SKIP_PREFIXES):
        return None
    try:
        parsed = urlparse(urljoin(base_url, href))
        # Accessing .port validates it.
        parsed.port
    except ValueError:
        return None
    if parsed.scheme not in _SCHEMES or not parsed.hostname:
        return None
    return parsed._replace(path=parsed.path or "/", fragment="").geturl()


def url_domain(url: str) -> Optional[str]:
    """Return the lower-cased domain name of ``url``, or None for IP hosts."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host.lower()
    return None


class SameDomainFilter:
    """Keep only http(s) URLs whose domain equals the seed's domain."""

    def __init__(self, base_domain: str) -> None:
        self._base_domain = base_domain.lower()

    @property
    def base_domain(self) -> str:
        return self._base_domain

    def allows(self, url: str) -> bool:
        if urlparse(url).scheme not in _SCHEMES:
            return False
        return url_domain(url) == self._base_domain

    def filter(self, urls: Iterable[str]) -> List[str]:
        result: List[str] = []
        for url in urls:
            if self.allows(url):
                result.append(url)
            else:
                logger.debug("Off-domain link skipped: %s", url)
        return result
