"""HTTP service exposing the crawl as ``POST /scrape-emails``."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence

from flask import Flask, jsonify, request

from .config import CrawlConfig, ServiceConfig
from .crawler import scrape_emails
from .errors import ConfigError
from .logging_utils import configure_logging, get_logger

ScrapeFn = Callable[..., list[str]]


def create_app(
    config: CrawlConfig | None = None,
    *,
    scrape_fn: ScrapeFn = scrape_emails,
    logger: logging.Logger | None = None,
) -> Flask:
    """Build the Flask app. ``scrape_fn`` is swappable for tests."""
    crawl_config = config or CrawlConfig()
    log = logger or get_logger("server")
    app = Flask(__name__)

    @app.post("/scrape-emails")
    def scrape_emails_endpoint():
        payload = request.get_json(silent=True)
        website = payload.get("website") if isinstance(payload, dict) else None
        if not isinstance(website, str) or not website.strip():
            return jsonify({"error": "Website URL is required"}), 400

        try:
            emails = scrape_fn(website, config=crawl_config, logger=log)
        except Exception:
            log.exception("Error in scrape-emails for %s", website)
            return jsonify({"error": "Internal Server Error"}), 500
        return jsonify({"emails": emails})

    return app


def build_parser(defaults: ServiceConfig) -> argparse.ArgumentParser:
    """Build service CLI parser."""
    parser = argparse.ArgumentParser(description="Email Scraper HTTP service.")
    parser.add_argument("--host", default=defaults.host, help="Interface to bind (env HOST).")
    parser.add_argument("--port", type=int, default=defaults.port, help="Port to bind (env PORT).")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Service entrypoint."""
    logger = get_logger("server")
    try:
        defaults = ServiceConfig.from_env()
        args = build_parser(defaults).parse_args(argv)
        service = ServiceConfig(host=args.host, port=args.port)
    except ConfigError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return 2

    configure_logging(args.verbose)
    app = create_app(logger=logger)
    logger.info("Email scraper service is running on port %d", service.port)
    app.run(host=service.host, port=service.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
