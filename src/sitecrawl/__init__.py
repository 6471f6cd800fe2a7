"""
Bounded-concurrency crawler that checks every same-host page of a local site returns 200.
"""
from sitecrawl.config import CrawlConfig
from sitecrawl.core import Crawler, CrawlState
from sitecrawl.errors import CrawlError, FatalCrawlError, PageError, StatusError, TransportError
from sitecrawl.report import CrawlResult, ErrorSourceRecord

__version__ = "1.0.0"
__all__ = [
    "Crawler",
    "CrawlConfig",
    "CrawlError",
    "CrawlResult",
    "CrawlState",
    "ErrorSourceRecord",
    "FatalCrawlError",
    "PageError",
    "StatusError",
    "TransportError",
]
