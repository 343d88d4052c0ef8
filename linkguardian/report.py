"""Render check results as a table or JSON."""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Sequence, TextIO

from .models import LinkCheckResult, StatusKind

logger = logging.getLogger(__name__)

_LABELS: Dict[StatusKind, str] = {
    StatusKind.OK: "OK",
    StatusKind.REDIRECT: "REDIRECT",
    StatusKind.BROKEN: "BROKEN",
    StatusKind.TIMEOUT: "TIMEOUT",
    StatusKind.SSL_ERROR: "SSL ERROR",
    StatusKind.TOO_MANY_REDIRECTS: "TOO MANY REDIRECTS",
    StatusKind.DNS_ERROR: "DNS ERROR",
    StatusKind.ERROR: "ERROR",
}

_URL_WIDTH = 60


def format_status(result: LinkCheckResult) -> str:
    return _LABELS[result.status.kind]


def _truncate(url: str) -> str:
    if len(url) > _URL_WIDTH - 3:
        return url[:_URL_WIDTH - 3] + "..."
    return url


def sort_results(results: Sequence[LinkCheckResult]) -> List[LinkCheckResult]:
    return sorted(results, key=lambda r: r.url)


def to_json(results: Sequence[LinkCheckResult]) -> str:
    return json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2)


def write_table(results: Sequence[LinkCheckResult], out: TextIO) -> None:
    out.write(f"{'URL':<60} {'STATUS':<20} {'MESSAGE':<30}\n")
    out.write("=" * 110 + "\n")
    for result in results:
        out.write(f"{_truncate(result.url):<60} {format_status(result):<20} {result.message or '':<30}\n")
    out.write("\n")
    write_summary(results, out)


def write_summary(results: Sequence[LinkCheckResult], out: TextIO) -> None:
    ok = sum(1 for r in results if r.is_ok())
    out.write("Summary:\n")
    out.write(f"   OK:     {ok}\n")
    out.write(f"   Broken: {len(results) - ok}\n")
    out.write(f"   Total:  {len(results)}\n")


def save_json(results: Sequence[LinkCheckResult], path: str) -> str:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json(results))
    logger.info("Saved JSON → %s", path)
    return path
