"""Crawl and verification settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

DEFAULT_USER_AGENT = "link-guardian/0.1 (+https://github.com/link-guardian/link-guardian)"


@dataclass
class CrawlConfig:
    """Configuration for a site crawl."""

    max_depth: int = 1
    delay: float = 0.1
    timeout: float = 10.0
    max_pages: Optional[int] = None
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class VerifierConfig:
    """Configuration for one verification call."""

    concurrency_limit: int = 50
    timeout: float = 10.0
    max_redirects: int = 5
    user_agent: str = DEFAULT_USER_AGENT

    def validate(self) -> None:
        if self.concurrency_limit < 1:
            raise ConfigError(f"concurrency_limit must be >= 1, got {self.concurrency_limit}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.max_redirects < 0:
            raise ConfigError(f"max_redirects must be >= 0, got {self.max_redirects}")
