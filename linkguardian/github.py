"""Read markdown documents from a public GitHub repository."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .errors import FetchError, InvalidRepoUrl
from .fetcher import Fetcher

logger = logging.getLogger(__name__)

RAW_URL = "https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{path}"
BRANCHES = ("main", "master")


def parse_github_url(url: str) -> Tuple[str, str]:
    """Return ``(owner, repo)`` for ``https://github.com/owner/repo[.git]``."""
    path = url.strip()
    for prefix in ("https://", "http://"):
        if path.startswith(prefix):
            path = path[len(prefix):]
    if path.startswith("www."):
        path = path[len("www."):]
    if not path.startswith("github.com/"):
        raise InvalidRepoUrl(f"Not a GitHub URL: {url}")

    parts = [p for p in path[len("github.com/"):].split("/") if p]
    if len(parts) < 2:
        raise InvalidRepoUrl(f"Invalid GitHub URL format: {url}")

    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[:-len(".git")]
    return owner, repo


def fetch_repo_files(repo_url: str, fetcher: Optional[Fetcher] = None) -> List[Tuple[str, str]]:
    """Fetch README.md from the default branch as ``[(filename, content)]``.

    ``main`` is tried first, then ``master``. Returns an empty list when
    neither branch has a README.
    """
    owner, repo = parse_github_url(repo_url)
    own_fetcher = fetcher is None
    fetcher = fetcher or Fetcher()
    files: List[Tuple[str, str]] = []
    try:
        for branch in BRANCHES:
            url = RAW_URL.format(owner=owner, repo=repo, branch=branch, path="README.md")
            try:
                files.append(("README.md", fetcher.fetch(url)))
                break
            except FetchError as exc:
                logger.debug("No README on %s: %s", branch, exc.reason)
        else:
            logger.warning("Could not fetch README.md for %s/%s", owner, repo)
    finally:
        if own_fetcher:
            fetcher.close()
    return files
