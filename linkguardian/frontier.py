"""Breadth-first crawl frontier restricted to one domain."""

from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import replace
from typing import Callable, Deque, List, Optional, Set

from .config import CrawlConfig
from .errors import FetchError, InvalidStartUrl
from .fetcher import Fetcher
from .filters import SameDomainFilter, resolve_link, url_domain
from .models import CrawlItem, CrawledPage, CrawlProgress
from .parser import extract_html_links

logger = logging.getLogger(__name__)


class CrawlFrontier:
    """Sequential BFS crawler.

    Pages are fetched one at a time with ``config.delay`` seconds between
    successful fetches. Only links on the start URL's domain are followed.
    Pages that fail to load are logged and skipped.
    """

    def __init__(
        self,
        start_url: str,
        config: Optional[CrawlConfig] = None,
        fetcher: Optional[Fetcher] = None,
        progress_callback: Optional[Callable[[CrawlProgress], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config or CrawlConfig()
        if self._config.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self._config.max_depth}")

        self._start_url = self._normalize_start(start_url)
        self._filter = SameDomainFilter(url_domain(self._start_url))
        self._owns_fetcher = fetcher is None
        self._fetcher = fetcher or Fetcher(
            timeout=self._config.timeout, user_agent=self._config.user_agent,
        )
        self._progress_callback = progress_callback
        self._sleep = sleep

    @property
    def start_url(self) -> str:
        return self._start_url

    @property
    def base_domain(self) -> str:
        return self._filter.base_domain

    @staticmethod
    def _normalize_start(start_url: str) -> str:
        url = resolve_link(start_url, start_url)
        if url is None or url_domain(url) is None:
            raise InvalidStartUrl(f"Invalid start URL: {start_url!r}")
        return url

    def run(self) -> List[CrawledPage]:
        try:
            return self._crawl()
        finally:
            if self._owns_fetcher:
                self._fetcher.close()

    def _crawl(self) -> List[CrawledPage]:
        max_depth = self._config.max_depth
        max_pages = self._config.max_pages
        pages: List[CrawledPage] = []
        visited: Set[str] = set()
        queue: Deque[CrawlItem] = deque([CrawlItem(self._start_url, 1)])

        logger.info("Crawling %s (max depth %d)", self._start_url, max_depth)

        while queue:
            if max_pages is not None and len(pages) >= max_pages:
                logger.info("Reached max pages (%d), stopping crawl", max_pages)
                break

            item = queue.popleft()
            if item.url in visited:
                continue
            visited.add(item.url)

            logger.info("  Crawling [depth %d]: %s", item.depth, item.url)
            try:
                html = self._fetcher.fetch(item.url)
            except FetchError as exc:
                logger.warning("Failed to fetch %s: %s", item.url, exc.reason)
                self._report(len(pages), item, "failed")
                continue

            pages.append(CrawledPage(url=item.url, content=html, depth=item.depth))
            self._report(len(pages), item, "crawled")

            if item.depth < max_depth:
                for link in self._filter.filter(extract_html_links(html, item.url)):
                    if link not in visited:
                        queue.append(CrawlItem(link, item.depth + 1))

            while queue and queue[0].url in visited:
                queue.popleft()
            if queue and self._config.delay > 0:
                self._sleep(self._config.delay)

        logger.info("Crawl finished: %d page(s), %d visited", len(pages), len(visited))
        return pages

    def _report(self, pages_crawled: int, item: CrawlItem, event_type: str) -> None:
        if self._progress_callback:
            self._progress_callback(CrawlProgress(
                pages_crawled=pages_crawled,
                current_url=item.url,
                current_depth=item.depth,
                event_type=event_type,
            ))


def crawl(
    start_url: str,
    max_depth: int = 1,
    config: Optional[CrawlConfig] = None,
    fetcher: Optional[Fetcher] = None,
    progress_callback: Optional[Callable[[CrawlProgress], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[CrawledPage]:
    """Crawl ``start_url`` breadth-first down to ``max_depth`` levels.

    Depth 1 is the start page alone. Returns the pages that loaded, in the
    order they were fetched. Raises InvalidStartUrl if ``start_url`` has no
    usable domain.
    """
    config = replace(config or CrawlConfig(), max_depth=max_depth)
    frontier = CrawlFrontier(
        start_url,
        config=config,
        fetcher=fetcher,
        progress_callback=progress_callback,
        sleep=sleep,
    )
    return frontier.run()
