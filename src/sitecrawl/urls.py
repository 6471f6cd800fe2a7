"""
URL records and same-origin link classification.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlparse

from requests.utils import requote_uri

# Source sentinels for URLs that were not discovered on a page
SEED_SOURCE = "seed"
PATHS_SOURCE = "--specific-paths"

# First path segments that belong to infrastructure, not content (e.g. Cloudflare)
RESERVED_PREFIXES: frozenset[str] = frozenset(("cdn-cgi",))


@dataclass(frozen=True, slots=True)
class UrlRecord:
    """A URL waiting to be fetched and the page (or option) it came from."""
    url: str
    source: str = SEED_SOURCE


def base_url_of(url: str) -> str:
    """Return scheme://netloc of an absolute URL."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def request_url(url: str) -> str:
    """Percent-encode a URL for the wire, leaving already-encoded parts alone."""
    return requote_uri(url)


def classify_href(href: str, page_url: str) -> Optional[UrlRecord]:
    """
    Decide whether an href found on page_url should be crawled.

    - Drops links into reserved infrastructure directories (/cdn-cgi/...)
    - Drops absolute links to another hostname, and non-http schemes
    - Drops fragment- or query-only links (#top, ?page=2)
    - Keeps everything else as base URL + resolved path, percent-encoded so
      "/a b" and "/a%20b" are the same URL

    Returns None for skipped links.
    """
    raw = urlparse(href.strip())
    page = urlparse(page_url)
    resolved = urlparse(urljoin(page_url, href.strip()))

    segments = resolved.path.split("/")
    if len(segments) > 1 and segments[1] in RESERVED_PREFIXES:
        return None

    if (raw.scheme or raw.netloc) and raw.hostname != page.hostname:
        return None

    if not raw.netloc and not raw.path:
        return None

    return UrlRecord(url=request_url(base_url_of(page_url) + (resolved.path or "/")), source=page_url)
