"""Exceptions raised by link-guardian.

Only call-level problems are raised. Per-page fetch failures are recovered by
the crawler and per-link failures are reported as a ``LinkStatus``.
"""

from __future__ import annotations

from typing import Optional


class LinkGuardianError(Exception):
    """Base class for all link-guardian errors."""


class InputError(LinkGuardianError, ValueError):
    """Malformed user input."""


class InvalidStartUrl(InputError):
    """Start URL is not an absolute http(s) URL with a domain."""


class InvalidRepoUrl(InputError):
    """URL does not point at a GitHub repository."""


class FetchError(LinkGuardianError):
    """A single page could not be fetched."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status_code = status_code


class ConfigError(LinkGuardianError):
    """Verifier configuration is invalid or the HTTP client cannot be built."""
