"""Runtime configuration models."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigError
from .validation import (
    validate_batch_constraints,
    validate_crawl_constraints,
    validate_service_constraints,
)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; EmailScraper/1.0)"
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_PAGES = 40
DEFAULT_MAX_CRAWL_TIME = 30.0
DEFAULT_WORKERS = 4
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
CONTACT_PATHS = (
    "/contact",
    "/contact-us",
    "/contactus",
    "/about",
    "/about-us",
    "/aboutus",
    "/impressum",
)


@dataclass(frozen=True)
class CrawlConfig:
    """Budgets and fixed request settings for a single website crawl."""

    max_pages: int = DEFAULT_MAX_PAGES
    max_crawl_time: float = DEFAULT_MAX_CRAWL_TIME
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    contact_paths: tuple[str, ...] = CONTACT_PATHS

    def __post_init__(self) -> None:
        validate_crawl_constraints(
            max_pages=self.max_pages,
            max_crawl_time=self.max_crawl_time,
            request_timeout=self.request_timeout,
            contact_paths=self.contact_paths,
        )


@dataclass(frozen=True)
class BatchConfig:
    """Validated configuration used by the batch CLI pipeline."""

    websites: tuple[str, ...]
    output: str
    workers: int = DEFAULT_WORKERS
    show_progress: bool = True
    crawl: CrawlConfig = field(default_factory=CrawlConfig)

    def __post_init__(self) -> None:
        validate_batch_constraints(
            websites=self.websites, workers=self.workers, output=self.output
        )


@dataclass(frozen=True)
class ServiceConfig:
    """Network binding for the HTTP service."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        validate_service_constraints(host=self.host, port=self.port)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        """Read ``HOST`` and ``PORT`` from the environment."""
        env = os.environ if environ is None else environ
        raw_port = env.get("PORT") or str(DEFAULT_PORT)
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ConfigError(f"PORT must be an integer, got {raw_port!r}.") from exc
        return cls(host=env.get("HOST") or DEFAULT_HOST, port=port)
