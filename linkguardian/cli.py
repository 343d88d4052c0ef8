"""Command-line interface for link-guardian."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .config import CrawlConfig, VerifierConfig
from .errors import LinkGuardianError
from .report import save_json, to_json, write_table
from .scanner import exit_code_for, scan_github, scan_site

EXIT_ERROR = 2


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--json", action="store_true",
        help="Print results as JSON instead of a table",
    )
    p.add_argument(
        "-o", "--out",
        help="Also write JSON results to this file",
    )
    p.add_argument(
        "--concurrency", type=int, default=50,
        help="Maximum simultaneous link checks (default: 50)",
    )
    p.add_argument(
        "--timeout", type=float, default=10.0,
        help="Per-request timeout in seconds (default: 10)",
    )
    p.add_argument(
        "--max-redirects", type=int, default=5,
        help="Redirects to follow per link (default: 5)",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose logging",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="link-guardian",
        description="Scan GitHub repositories and websites for broken links",
    )
    p.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    sub = p.add_subparsers(dest="command", required=True)

    gh = sub.add_parser("github", help="Scan a GitHub repository README for broken links")
    gh.add_argument("repo_url", help="Repository URL (e.g. https://github.com/user/repo)")
    _add_common(gh)

    site = sub.add_parser("site", help="Crawl a website and scan it for broken links")
    site.add_argument("website_url", help="Website URL to scan (e.g. https://example.com)")
    site.add_argument(
        "-d", "--max-depth", type=int, default=1,
        help="Maximum crawl depth; 1 scans only the start page (default: 1)",
    )
    site.add_argument(
        "--delay", type=float, default=0.1,
        help="Delay between page fetches in seconds (default: 0.1)",
    )
    site.add_argument(
        "-n", "--max-pages", type=int, default=None,
        help="Stop crawling after this many pages (default: no limit)",
    )
    _add_common(site)
    return p


def run(args: argparse.Namespace) -> int:
    verifier_config = VerifierConfig(
        concurrency_limit=args.concurrency,
        timeout=args.timeout,
        max_redirects=args.max_redirects,
    )
    verifier_config.validate()

    if args.command == "github":
        results = scan_github(args.repo_url, verifier_config)
    else:
        crawl_config = CrawlConfig(
            max_depth=args.max_depth,
            delay=args.delay,
            timeout=args.timeout,
            max_pages=args.max_pages,
        )
        results = scan_site(args.website_url, crawl_config, verifier_config)

    if args.json:
        print(to_json(results))
    else:
        write_table(results, sys.stdout)
    if args.out:
        save_json(results, args.out)

    return exit_code_for(results)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    try:
        return run(args)
    except (LinkGuardianError, ValueError) as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
