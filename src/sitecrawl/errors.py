"""
Errors raised while fetching pages.
"""
from __future__ import annotations

from typing import Optional


class CrawlError(Exception):
    """A failed fetch, tied to the URL and the page that linked to it."""

    def __init__(self, url: str, source: str, message: str, reason: str = "") -> None:
        super().__init__(message)
        self.url = url
        self.source = source
        self.reason = reason or message


class TransportError(CrawlError):
    """The request never produced a response (connection refused, DNS, timeout)."""

    def __init__(self, url: str, source: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            url, source, f"Error occurred when requesting {url}: {cause}", reason=f"connection error: {cause}"
        )
        self.cause = cause


class StatusError(CrawlError):
    """The server answered with something other than 200."""

    def __init__(self, url: str, source: str, status_code: int) -> None:
        super().__init__(
            url, source, f"non-200 status code '{status_code}' returned from {url}", reason=f"HTTP {status_code}"
        )
        self.status_code = status_code


class PageError(CrawlError):
    """A 200 response whose body could not be decoded or parsed."""

    def __init__(self, url: str, source: str, cause: BaseException) -> None:
        super().__init__(
            url, source, f"Could not read page {url}: {cause!r}", reason=f"unreadable page: {cause!r}"
        )
        self.cause = cause


class FatalCrawlError(Exception):
    """Raised by the crawler to stop at the first error."""

    def __init__(self, error: CrawlError) -> None:
        super().__init__(str(error))
        self.error = error
