"""CLI entrypoint for email-scraper."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from .config import (
    DEFAULT_MAX_CRAWL_TIME,
    DEFAULT_MAX_PAGES,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_WORKERS,
    BatchConfig,
    CrawlConfig,
)
from .errors import ConfigError
from .logging_utils import configure_logging, get_logger
from .pipeline import run_pipeline
from .validation import load_lines_from_file


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description="Email Scraper - find a contact email for each website with a bounded crawl."
    )
    source_group = parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--websites", nargs="+", help="Website URLs to crawl.")
    source_group.add_argument(
        "--websites-file", help="Path to website file (one URL per line)."
    )
    parser.add_argument("--output", default="emails_output.csv", help="Output CSV path.")
    parser.add_argument(
        "--workers",
        type=int,
        default=DEFAULT_WORKERS,
        help="Number of websites crawled in parallel.",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        default=DEFAULT_MAX_PAGES,
        help="Pages fetched per website before giving up.",
    )
    parser.add_argument(
        "--max-crawl-time",
        type=float,
        default=DEFAULT_MAX_CRAWL_TIME,
        help="Seconds spent per website before giving up.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Disable tqdm progress bars.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def _materialize_websites(args: argparse.Namespace) -> tuple[str, ...]:
    if args.websites:
        return tuple(args.websites)
    return tuple(load_lines_from_file(args.websites_file))


def namespace_to_config(args: argparse.Namespace) -> BatchConfig:
    """Convert CLI args to validated BatchConfig."""
    try:
        websites = _materialize_websites(args)
    except OSError as exc:
        raise ConfigError(f"Cannot read websites file: {exc}") from exc
    crawl = CrawlConfig(
        max_pages=args.max_pages,
        max_crawl_time=args.max_crawl_time,
        request_timeout=args.timeout,
    )
    return BatchConfig(
        websites=websites,
        output=args.output,
        workers=args.workers,
        show_progress=not args.no_progress,
        crawl=crawl,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    output = run_pipeline(config, logger=logger)
    logger.info("Wrote results to %s", output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
