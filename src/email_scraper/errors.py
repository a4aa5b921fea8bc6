"""Custom exceptions for the scraper domain."""


class ScraperError(Exception):
    """Base exception for this project."""


class ConfigError(ScraperError):
    """Raised when runtime configuration is invalid."""


class InvalidTargetError(ScraperError):
    """Raised when a crawl target cannot be parsed into an http(s) origin."""
