"""HTTP page fetcher."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from requests import Response, Session
from requests.exceptions import RequestException
from urllib3.exceptions import HTTPError as TransportError

from .validation import is_supported_url

CHUNK_SIZE = 8192
FALLBACK_ENCODING = "utf-8"


def make_session(user_agent: str) -> Session:
    """Create a requests session carrying the fixed client header.

    The default adapter performs no retries; a failed page is never re-fetched.
    """
    session = Session()
    session.headers.update({"User-Agent": user_agent})
    return session


def iter_available(response: Response) -> Iterator[bytes]:
    """Yield body bytes as they arrive instead of waiting for full chunks."""
    while True:
        chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
        if not chunk:
            return
        yield chunk


def _decode(body: bytes, encoding: str | None) -> str:
    try:
        return body.decode(encoding or FALLBACK_ENCODING, errors="replace")
    except LookupError:
        return body.decode(FALLBACK_ENCODING, errors="replace")


class RequestsFetcher:
    """Requests-based fetcher that reports failures as unavailable pages.

    ``timeout`` caps the whole response, not just each socket read: the body
    is streamed and abandoned once the deadline passes.
    """

    def __init__(
        self,
        *,
        session: Session,
        timeout: float,
        logger: logging.Logger,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._timeout = timeout
        self._logger = logger
        self._clock = clock

    def fetch(self, url: str) -> str | None:
        if not is_supported_url(url):
            self._logger.debug("Skipping unsupported URL: %s", url)
            return None
        deadline = self._clock() + self._timeout
        try:
            response = self._session.get(url, timeout=self._timeout, stream=True)
        except RequestException as exc:
            self._logger.debug("Fetch failed for %s: %s", url, exc)
            return None
        try:
            response.raise_for_status()
            body = bytearray()
            for chunk in iter_available(response):
                if self._clock() > deadline:
                    self._logger.debug("Fetch of %s exceeded %.1fs", url, self._timeout)
                    return None
                body.extend(chunk)
            return _decode(bytes(body), response.encoding)
        except (RequestException, TransportError) as exc:
            self._logger.debug("Fetch failed for %s: %s", url, exc)
            return None
        finally:
            response.close()

    def close(self) -> None:
        self._session.close()
