"""Data models shared by the crawler and the link verifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional


@dataclass(frozen=True)
class CrawlItem:
    """A URL waiting in the crawl queue."""

    url: str
    depth: int


@dataclass
class CrawledPage:
    """A page fetched during a crawl."""

    url: str
    content: str
    depth: int = 1

    def __iter__(self) -> Iterator[str]:
        # Lets callers unpack a page as ``url, content``.
        return iter((self.url, self.content))


@dataclass
class CrawlProgress:
    """Progress update from the crawl frontier."""

    pages_crawled: int
    current_url: str
    current_depth: int = 1
    event_type: str = "crawled"  # "crawled" or "failed"


class StatusKind(str, Enum):
    OK = "ok"
    REDIRECT = "redirect"
    BROKEN = "broken"
    TIMEOUT = "timeout"
    SSL_ERROR = "ssl_error"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    DNS_ERROR = "dns_error"
    ERROR = "error"


@dataclass(frozen=True)
class LinkStatus:
    """Outcome of checking one link. ``target`` is only set for redirects."""

    kind: StatusKind
    target: Optional[str] = None

    @classmethod
    def redirect(cls, target: Optional[str]) -> "LinkStatus":
        return cls(StatusKind.REDIRECT, target or "unknown")

    def __str__(self) -> str:
        if self.kind is StatusKind.REDIRECT:
            return f"redirect({self.target})"
        return self.kind.value


@dataclass(frozen=True)
class LinkCheckResult:
    """Result of checking a single URL."""

    url: str
    status: LinkStatus
    message: Optional[str] = None

    def is_ok(self) -> bool:
        return self.status.kind in (StatusKind.OK, StatusKind.REDIRECT)

    def to_dict(self) -> dict:
        data = {"url": self.url, "status": self.status.kind.value}
        if self.status.target is not None:
            data["target"] = self.status.target
        if self.message is not None:
            data["message"] = self.message
        return data
