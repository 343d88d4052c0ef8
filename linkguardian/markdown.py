"""Markdown parsing: extract links from README files."""

from __future__ import annotations

from typing import Iterable, List

from markdown_it import MarkdownIt
from markdown_it.token import Token

_md = MarkdownIt("commonmark")


def _is_http_link(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _walk(tokens: Iterable[Token]) -> Iterable[Token]:
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def extract_markdown_links(text: str) -> List[str]:
    """Return absolute http(s) link destinations found in ``text``.

    Inline links, reference links and autolinks are picked up. Relative
    links and other schemes such as ``mailto:`` are skipped.
    """
    links: List[str] = []
    for token in _walk(_md.parse(text)):
        if token.type != "link_open":
            continue
        href = str(token.attrGet("href") or "")
        if _is_http_link(href):
            links.append(href)
    return links
