"""Pure extraction and URL scoping utilities."""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}", re.IGNORECASE)
# Asset filenames such as "logo@2x.png" match the address pattern.
BLACKLISTED_EXTENSIONS = (
    ".jpg",
    ".jpeg",
    ".png",
    ".svg",
    ".gif",
    ".tga",
    ".bmp",
    ".zip",
    ".pdf",
    ".webp",
)
NON_NAVIGABLE_SCHEMES = ("mailto:", "javascript:")
DEGENERATE_HREFS = frozenset({"", "/", "http://", "https://", "//"})
ORIGIN_BOUNDARY_CHARS = ("", "/", "?")


def dedupe_preserve_order(items: Iterable[str]) -> list[str]:
    """Dedupe values by exact string while preserving first-seen order."""
    output: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output


def extract_emails(text: str | None) -> list[str]:
    """Return distinct email-like tokens from text, minus asset filenames."""
    matches = (match.group(0) for match in EMAIL_REGEX.finditer(text or ""))
    return dedupe_preserve_order(
        email for email in matches if not email.lower().endswith(BLACKLISTED_EXTENSIONS)
    )


def strip_fragment(href: str) -> str:
    """Drop the ``#fragment`` part and surrounding whitespace."""
    return href.split("#", maxsplit=1)[0].strip()


def normalize_url_case(url: str) -> str:
    """Lowercase the scheme and host of ``url``, leaving the rest untouched."""
    parts = urlsplit(url)
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"
    return urlunsplit((parts.scheme.lower(), netloc, parts.path, parts.query, parts.fragment))


def is_same_origin(url: str, origin: str) -> bool:
    """Return True when ``url`` lives under ``origin``.

    The URL must start with the origin string, and the prefix must end on a
    host boundary so that ``http://a.com.evil.net`` or ``http://a.com:8080``
    are not mistaken for ``http://a.com``.
    """
    if not url.startswith(origin):
        return False
    return url[len(origin) : len(origin) + 1] in ORIGIN_BOUNDARY_CHARS


def extract_links(html: str | None, origin: str) -> list[str]:
    """Return absolute same-origin URLs linked from anchors in ``html``.

    Relative targets are resolved against ``origin``. Links that cannot be
    resolved are dropped one by one.
    """
    links: list[str] = []
    soup = BeautifulSoup(html or "", "html.parser")
    for anchor in soup.find_all("a", href=True):
        href = strip_fragment(str(anchor["href"]))
        if href in DEGENERATE_HREFS or href.lower().startswith(NON_NAVIGABLE_SCHEMES):
            continue
        try:
            resolved = normalize_url_case(urljoin(origin, href))
        except ValueError:
            continue
        if is_same_origin(resolved, origin):
            links.append(resolved)
    return dedupe_preserve_order(links)
