"""Logging helpers shared by the CLI, the HTTP service and the crawler."""

from __future__ import annotations

import logging

LOGGER_NAME = "email_scraper"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
NOISY_LOGGERS = ("urllib3", "werkzeug")


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging once per process.

    Third-party loggers that chatter on every request are held at WARNING
    unless verbose output was requested.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level if verbose else logging.WARNING)


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or a child logger for one component."""
    if component:
        return logging.getLogger(f"{LOGGER_NAME}.{component}")
    return logging.getLogger(LOGGER_NAME)
