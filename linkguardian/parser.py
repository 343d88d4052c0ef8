"""HTML parsing: extract links from pages."""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup

from .filters import resolve_link

logger = logging.getLogger(__name__)


def extract_html_links(html: str, base_url: str) -> List[str]:
    """Return absolute http(s) URLs of every ``<a href>`` in document order.

    Relative links are resolved against ``base_url``. Duplicates are kept;
    callers deduplicate.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        absolute = resolve_link(base_url, tag["href"])
        if absolute is not None:
            links.append(absolute)
    logger.debug("Extracted %d link(s) from %s", len(links), base_url)
    return links
