import logging
from collections.abc import Callable
from typing import Any

import requests
from urllib3.exceptions import ProtocolError

from email_scraper.fetchers import RequestsFetcher, make_session


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class FakeRaw:
    """Serves body chunks; ``on_read`` runs before each read."""

    def __init__(self, chunks: list[bytes], on_read: Callable[[], None] | None = None) -> None:
        self._chunks = list(chunks)
        self._on_read = on_read
        self.reads = 0

    def read1(self, _amt: int, decode_content: bool = False) -> bytes:
        assert decode_content is True
        self.reads += 1
        if self._on_read is not None:
            self._on_read()
        if not self._chunks:
            return b""
        chunk = self._chunks.pop(0)
        if isinstance(chunk, Exception):
            raise chunk
        return chunk


class FakeResponse:
    def __init__(
        self,
        *,
        status_code: int = 200,
        text: str = "",
        encoding: str | None = "utf-8",
        raw: FakeRaw | None = None,
    ) -> None:
        self.status_code = status_code
        self.encoding = encoding
        self.raw = raw or FakeRaw([text.encode("utf-8")] if text else [])
        self.closed = False

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError("bad status")

    def close(self) -> None:
        self.closed = True


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response

    def close(self) -> None:
        self.closed = True


def _fetcher(session: FakeSession, clock: FakeClock | None = None) -> RequestsFetcher:
    return RequestsFetcher(
        session=session,  # type: ignore[arg-type]
        timeout=10.0,
        logger=logging.getLogger("test"),
        clock=clock or FakeClock(),
    )


def test_fetcher_rejects_unsupported_urls() -> None:
    session = FakeSession(FakeResponse(text="<html/>"))
    fetcher = _fetcher(session)
    assert fetcher.fetch("file:///tmp/test") is None
    assert fetcher.fetch("example.com/contact") is None
    assert session.calls == []


def test_fetcher_streams_html_with_timeout() -> None:
    response = FakeResponse(text="<p>Hello</p>")
    session = FakeSession(response)
    assert _fetcher(session).fetch("https://example.com") == "<p>Hello</p>"
    assert session.calls == [("https://example.com", {"timeout": 10.0, "stream": True})]
    assert response.closed is True


def test_fetcher_joins_chunks_and_decodes_with_response_encoding() -> None:
    raw = FakeRaw(["café ".encode("latin-1"), b"info@example.com"])
    fetcher = _fetcher(FakeSession(FakeResponse(encoding="ISO-8859-1", raw=raw)))
    assert fetcher.fetch("https://example.com") == "café info@example.com"


def test_fetcher_falls_back_to_utf8_for_unknown_encoding() -> None:
    raw = FakeRaw(["café".encode("utf-8")])
    fetcher = _fetcher(FakeSession(FakeResponse(encoding="no-such-codec", raw=raw)))
    assert fetcher.fetch("https://example.com") == "café"


def test_fetcher_returns_empty_body_as_text() -> None:
    fetcher = _fetcher(FakeSession(FakeResponse(text="")))
    assert fetcher.fetch("https://example.com") == ""


def test_fetcher_abandons_trickling_body_at_deadline() -> None:
    clock = FakeClock()

    def tick() -> None:
        clock.now += 0.3

    raw = FakeRaw([b"x"] * 100, on_read=tick)
    response = FakeResponse(raw=raw)
    fetcher = _fetcher(FakeSession(response), clock)

    assert fetcher.fetch("https://example.com/slow") is None
    assert clock.now <= 10.0 + 0.3
    assert raw.reads < 100
    assert response.closed is True


def test_fetcher_reports_error_status_as_unavailable() -> None:
    response = FakeResponse(status_code=404, text="not found")
    assert _fetcher(FakeSession(response)).fetch("https://example.com/contact") is None
    assert response.closed is True


def test_fetcher_reports_broken_body_as_unavailable() -> None:
    raw = FakeRaw([b"<p>", ProtocolError("connection reset")])  # type: ignore[list-item]
    assert _fetcher(FakeSession(FakeResponse(raw=raw))).fetch("https://example.com") is None


def test_fetcher_reports_network_failures_as_unavailable() -> None:
    for error in (
        requests.Timeout("slow"),
        requests.ConnectionError("refused"),
        requests.exceptions.ContentDecodingError("garbled"),
    ):
        session = FakeSession(error=error)
        assert _fetcher(session).fetch("https://example.com") is None
        assert len(session.calls) == 1


def test_fetcher_close_releases_session() -> None:
    session = FakeSession(FakeResponse())
    _fetcher(session).close()
    assert session.closed is True


def test_make_session_sets_user_agent_without_retries() -> None:
    session = make_session("my-agent")
    assert session.headers["User-Agent"] == "my-agent"
    assert session.get_adapter("https://example.com").max_retries.total == 0
