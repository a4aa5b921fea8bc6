"""Protocols and lightweight model types."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol


class Fetcher(Protocol):
    """Contract for HTML fetchers."""

    def fetch(self, url: str) -> str | None:
        """Return HTML content for a URL, or None when the page is unavailable."""


class CrawlState(str, enum.Enum):
    """Lifecycle of one crawl. Only the last three are terminal."""

    SEEDED = "seeded"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in {CrawlState.SUCCEEDED, CrawlState.EXHAUSTED, CrawlState.TIMED_OUT}


@dataclass(frozen=True)
class CrawlResult:
    """Outcome of a single website crawl."""

    target: str
    origin: str
    state: CrawlState
    emails: tuple[str, ...]
    pages_fetched: int
    visited: tuple[str, ...]
    elapsed: float

    @property
    def succeeded(self) -> bool:
        return self.state is CrawlState.SUCCEEDED

    @property
    def pages_attempted(self) -> int:
        return len(self.visited)
