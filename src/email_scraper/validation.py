"""Validation and runtime guardrails."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

from .errors import ConfigError, InvalidTargetError

SUPPORTED_SCHEMES = frozenset({"http", "https"})


def is_supported_url(url: str) -> bool:
    """Allow only absolute HTTP(S) URLs with a hostname."""
    try:
        parsed = urlsplit(url)
    except ValueError:
        return False
    return parsed.scheme.lower() in SUPPORTED_SCHEMES and bool(parsed.hostname)


def origin_from_url(url: str) -> str:
    """Return the ``scheme://host[:port]`` origin of a crawl target.

    Raises InvalidTargetError when the value is not an absolute http(s) URL,
    so that no crawl ever starts with an unusable origin.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidTargetError("Website URL is required.")
    value = url.strip()
    try:
        parsed = urlsplit(value)
        port = parsed.port
    except ValueError as exc:
        raise InvalidTargetError(f"Malformed website URL {value!r}: {exc}") from exc

    scheme = parsed.scheme.lower()
    host = parsed.hostname
    if scheme not in SUPPORTED_SCHEMES or not host:
        raise InvalidTargetError(
            f"Website URL must be an absolute http(s) URL, got {value!r}."
        )
    if ":" in host:
        host = f"[{host}]"
    if port is not None:
        return f"{scheme}://{host}:{port}"
    return f"{scheme}://{host}"


def dedupe_websites(websites: list[str]) -> list[str]:
    """Strip and dedupe website inputs while preserving first-seen order.

    Malformed entries are kept so that the pipeline can report them.
    """
    output: list[str] = []
    seen: set[str] = set()
    for raw in websites:
        value = raw.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        output.append(value)
    return output


def load_lines_from_file(path: str) -> list[str]:
    """Load non-empty, non-comment lines from a UTF-8 text file."""
    content = Path(path).read_text(encoding="utf-8")
    return [
        line.strip()
        for line in content.splitlines()
        if line.strip() and not line.lstrip().startswith("#")
    ]


def validate_crawl_constraints(
    *,
    max_pages: int,
    max_crawl_time: float,
    request_timeout: float,
    contact_paths: tuple[str, ...],
) -> None:
    """Validate crawl budgets and raise ConfigError on invalid values."""
    if max_pages < 1:
        raise ConfigError("--max-pages must be >= 1.")
    if max_crawl_time <= 0:
        raise ConfigError("--max-crawl-time must be > 0.")
    if request_timeout <= 0:
        raise ConfigError("--timeout must be > 0.")
    for path in contact_paths:
        if not path.startswith("/"):
            raise ConfigError(f"Contact path {path!r} must start with '/'.")


def validate_batch_constraints(*, websites: tuple[str, ...], workers: int, output: str) -> None:
    """Validate batch CLI configuration and raise ConfigError on invalid values."""
    if not websites:
        raise ConfigError("Provide --websites or --websites-file.")
    if workers < 1:
        raise ConfigError("--workers must be >= 1.")
    if not output:
        raise ConfigError("--output must not be empty.")


def validate_service_constraints(*, host: str, port: int) -> None:
    """Validate HTTP service binding."""
    if not host:
        raise ConfigError("Host must not be empty.")
    if not 0 < port < 65536:
        raise ConfigError(f"Port must be between 1 and 65535, got {port}.")
