"""Find broken links in websites and GitHub READMEs."""

from .frontier import crawl
from .models import LinkCheckResult, LinkStatus, StatusKind
from .verifier import verify

__version__ = "0.1.0"
__all__ = ["crawl", "verify", "LinkCheckResult", "LinkStatus", "StatusKind"]
