"""Wire content sources, link extraction and verification together."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .config import CrawlConfig, VerifierConfig
from .fetcher import Fetcher
from .frontier import crawl
from .github import fetch_repo_files
from .markdown import extract_markdown_links
from .models import CrawlProgress, LinkCheckResult
from .parser import extract_html_links
from .report import sort_results
from .verifier import verify

logger = logging.getLogger(__name__)


def unique_links(links: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping first-seen order."""
    return list(dict.fromkeys(links))


def scan_site(
    website_url: str,
    crawl_config: Optional[CrawlConfig] = None,
    verifier_config: Optional[VerifierConfig] = None,
    fetcher: Optional[Fetcher] = None,
    progress_callback: Optional[Callable[[CrawlProgress], None]] = None,
) -> List[LinkCheckResult]:
    """Crawl ``website_url`` and check every link found on the crawled pages."""
    crawl_config = crawl_config or CrawlConfig()
    pages = crawl(
        website_url,
        crawl_config.max_depth,
        config=crawl_config,
        fetcher=fetcher,
        progress_callback=progress_callback,
    )
    logger.info("Crawled %d page(s)", len(pages))

    links: List[str] = []
    for page in pages:
        found = extract_html_links(page.content, page.url)
        logger.info("   %d links found on %s", len(found), page.url)
        links.extend(found)
    return _check(links, verifier_config)


def scan_github(
    repo_url: str,
    verifier_config: Optional[VerifierConfig] = None,
    fetcher: Optional[Fetcher] = None,
) -> List[LinkCheckResult]:
    """Check every link in the repository's README."""
    files = fetch_repo_files(repo_url, fetcher=fetcher)
    if not files:
        logger.warning("No markdown files found in repository")
        return []
    logger.info("Found %d file(s) to scan", len(files))

    links: List[str] = []
    for filename, content in files:
        found = extract_markdown_links(content)
        logger.info("   %d links found in %s", len(found), filename)
        links.extend(found)
    return _check(links, verifier_config)


def _check(links: List[str], verifier_config: Optional[VerifierConfig]) -> List[LinkCheckResult]:
    links = unique_links(links)
    if not links:
        logger.info("No links found to check")
        return []
    logger.info("Checking %d unique link(s)...", len(links))
    return sort_results(verify(links, verifier_config))


def exit_code_for(results: Iterable[LinkCheckResult]) -> int:
    """0 when every link is ok or redirected, 1 otherwise."""
    return 1 if any(not r.is_ok() for r in results) else 0
