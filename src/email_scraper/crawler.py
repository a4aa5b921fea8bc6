"""Bounded breadth-first crawl that stops at the first page yielding an email."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable
from urllib.parse import urljoin, urlsplit, urlunsplit

from requests import Session

from .config import CrawlConfig
from .extraction import extract_emails, extract_links
from .fetchers import RequestsFetcher, make_session
from .logging_utils import get_logger
from .models import CrawlResult, CrawlState, Fetcher
from .validation import origin_from_url

ClockFn = Callable[[], float]
SessionFactory = Callable[[str], Session]


def rebase_on_origin(url: str, origin: str) -> str:
    """Rewrite ``url`` onto ``origin``, keeping its path and query."""
    parts = urlsplit(url.strip())
    return origin + urlunsplit(("", "", parts.path, parts.query, ""))


def seed_frontier(target: str, origin: str, contact_paths: tuple[str, ...]) -> deque[str]:
    """Return the initial frontier: the target, then contact paths on the origin."""
    frontier: deque[str] = deque([target])
    frontier.extend(urljoin(origin, path) for path in contact_paths)
    return frontier


def crawl_website(
    target: str,
    *,
    fetcher: Fetcher,
    config: CrawlConfig | None = None,
    logger: logging.Logger | None = None,
    clock: ClockFn = time.monotonic,
) -> CrawlResult:
    """Crawl ``target`` until an email is found or a budget runs out.

    The frontier is drained in FIFO order. A URL may be queued more than once
    but is fetched at most once, since the visited check happens at dequeue.
    Fetch failures only mark the URL visited; they do not count as pages.

    Raises InvalidTargetError before any fetch when ``target`` has no usable
    http(s) origin.
    """
    config = config or CrawlConfig()
    logger = logger or get_logger("crawler")
    origin = origin_from_url(target)
    target = rebase_on_origin(target, origin)

    frontier = seed_frontier(target, origin, config.contact_paths)
    visited: set[str] = set()
    attempts: list[str] = []
    emails: list[str] = []
    pages_fetched = 0
    state = CrawlState.SEEDED
    logger.debug("%s %d URLs for %s", state.value, len(frontier), origin)

    started_at = clock()
    state = CrawlState.RUNNING
    while True:
        if clock() - started_at > config.max_crawl_time:
            logger.info("Crawl time exceeded for %s", target)
            state = CrawlState.TIMED_OUT
            break
        if not frontier or pages_fetched >= config.max_pages or emails:
            state = CrawlState.SUCCEEDED if emails else CrawlState.EXHAUSTED
            break

        url = frontier.popleft()
        if url in visited:
            continue
        visited.add(url)
        attempts.append(url)

        html = fetcher.fetch(url)
        if html is None:
            logger.debug("Unavailable: %s", url)
            continue
        pages_fetched += 1

        found = extract_emails(html)
        if found:
            logger.debug("Found %d email(s) on %s", len(found), url)
            emails.extend(found)
            state = CrawlState.SUCCEEDED
            break

        for link in extract_links(html, origin):
            if link not in visited:
                frontier.append(link)

    elapsed = clock() - started_at
    logger.info(
        "Crawl of %s finished: %s after %d page(s), %d email(s)",
        target,
        state.value,
        pages_fetched,
        len(emails),
    )
    return CrawlResult(
        target=target,
        origin=origin,
        state=state,
        emails=tuple(emails),
        pages_fetched=pages_fetched,
        visited=tuple(attempts),
        elapsed=elapsed,
    )


def scrape_emails(
    website: str,
    *,
    config: CrawlConfig | None = None,
    logger: logging.Logger | None = None,
    session_factory: SessionFactory = make_session,
) -> list[str]:
    """Discover contact emails for one website.

    Every call owns its session, frontier and results, so concurrent callers
    share nothing.
    """
    config = config or CrawlConfig()
    logger = logger or get_logger("crawler")
    origin_from_url(website)
    fetcher = RequestsFetcher(
        session=session_factory(config.user_agent),
        timeout=config.request_timeout,
        logger=logger,
    )
    try:
        result = crawl_website(website, fetcher=fetcher, config=config, logger=logger)
    finally:
        fetcher.close()
    return list(result.emails)
