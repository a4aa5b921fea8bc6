"""Batch orchestration: independent crawls for many websites."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone

from tqdm import tqdm

from .config import BatchConfig, CrawlConfig
from .crawler import ClockFn, crawl_website
from .errors import InvalidTargetError
from .fetchers import RequestsFetcher, make_session
from .io_csv import write_rows
from .models import CrawlResult, Fetcher
from .validation import dedupe_websites

FetcherFactory = Callable[[], Fetcher]
INVALID_STATE = "invalid"
ERROR_STATE = "error"


def crawl_one(
    website: str,
    *,
    fetcher_factory: FetcherFactory,
    config: CrawlConfig,
    logger: logging.Logger,
    clock: ClockFn,
) -> CrawlResult:
    """Crawl one website with a fetcher of its own, closing it afterwards."""
    fetcher = fetcher_factory()
    try:
        return crawl_website(website, fetcher=fetcher, config=config, logger=logger, clock=clock)
    finally:
        close_fn = getattr(fetcher, "close", None)
        if callable(close_fn):
            close_fn()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _result_row(result: CrawlResult) -> dict[str, str]:
    return {
        "website": result.target,
        "state": result.state.value,
        "emails": ";".join(result.emails),
        "pages_fetched": str(result.pages_fetched),
        "pages_attempted": str(result.pages_attempted),
        "elapsed_seconds": f"{result.elapsed:.2f}",
        "date_scraped_utc": _utc_now(),
        "notes": "",
    }


def _failed_row(website: str, state: str, reason: str) -> dict[str, str]:
    return {
        "website": website,
        "state": state,
        "emails": "",
        "pages_fetched": "0",
        "pages_attempted": "0",
        "elapsed_seconds": "0.00",
        "date_scraped_utc": _utc_now(),
        "notes": reason,
    }


def scrape_records(
    config: BatchConfig,
    *,
    fetcher_factory: FetcherFactory,
    logger: logging.Logger,
    clock: ClockFn = time.monotonic,
) -> list[dict[str, str]]:
    """Run one crawl per website and return CSV rows in input order."""
    websites = dedupe_websites(list(config.websites))
    logger.info("Total websites to crawl: %d", len(websites))

    rows: dict[str, dict[str, str]] = {}
    with ThreadPoolExecutor(max_workers=config.workers) as executor:
        futures = {
            executor.submit(
                crawl_one,
                website,
                fetcher_factory=fetcher_factory,
                config=config.crawl,
                logger=logger,
                clock=clock,
            ): website
            for website in websites
        }
        iterator = as_completed(futures)
        if config.show_progress:
            iterator = tqdm(iterator, total=len(futures), desc="crawling websites")
        for future in iterator:
            website = futures[future]
            try:
                rows[website] = _result_row(future.result())
            except InvalidTargetError as exc:
                logger.warning("Skipping invalid website %s: %s", website, exc)
                rows[website] = _failed_row(website, INVALID_STATE, str(exc))
            except Exception as exc:
                logger.error("Crawl failed for %s: %s", website, exc)
                rows[website] = _failed_row(website, ERROR_STATE, f"{type(exc).__name__}: {exc}")

    found = sum(1 for row in rows.values() if row["emails"])
    logger.info("Websites with emails: %d/%d", found, len(rows))
    return [rows[website] for website in websites]


def run_pipeline(config: BatchConfig, *, logger: logging.Logger) -> str:
    """Build concrete fetchers, crawl every website, and write CSV output."""

    def fetcher_factory() -> Fetcher:
        return RequestsFetcher(
            session=make_session(config.crawl.user_agent),
            timeout=config.crawl.request_timeout,
            logger=logger,
        )

    rows = scrape_records(config, fetcher_factory=fetcher_factory, logger=logger)
    write_rows(config.output, rows)
    return config.output
