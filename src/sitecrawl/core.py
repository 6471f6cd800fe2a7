"""
Core crawling logic: work queue, bounded-concurrency dispatch and completion detection.

All crawl state (queue, visited set, in-flight count, errors) lives on one
Crawler and is only touched from the thread calling Crawler.run(). Worker
threads do nothing but network I/O and HTML parsing, and hand their result
back as a PageOutcome.
"""
from __future__ import annotations

import sys
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional, Set, TextIO

import requests
from bs4 import BeautifulSoup, SoupStrainer

from sitecrawl.config import CrawlConfig
from sitecrawl.errors import CrawlError, FatalCrawlError, PageError, StatusError, TransportError
from sitecrawl.report import CrawlResult, ErrorAggregator
from sitecrawl.urls import UrlRecord, classify_href, request_url

# SoupStrainer to parse only <a> tags (faster link extraction)
LINK_STRAINER = SoupStrainer("a", href=True)


class CrawlState(Enum):
    DISPATCH = "dispatch"
    WAIT = "wait"
    DONE = "done"


@dataclass(slots=True)
class PageOutcome:
    """Result of fetching one page, produced on a worker thread."""
    record: UrlRecord
    status_code: Optional[int] = None
    links: List[str] = field(default_factory=list)
    error: Optional[CrawlError] = None


def extract_links(html: str) -> List[str]:
    """Extract all href values from <a> tags using optimized parsing."""
    soup = BeautifulSoup(html, "lxml", parse_only=LINK_STRAINER)
    return [a["href"] for a in soup.find_all("a", href=True) if a["href"]]


def fetch_page(
    session: requests.Session,
    record: UrlRecord,
    discover: bool,
    timeout_s: Optional[float] = None,
) -> PageOutcome:
    """
    GET a single URL and turn the response into a PageOutcome.

    Never raises for network, HTTP or parse failures; those come back in outcome.error.
    """
    try:
        resp = session.get(request_url(record.url), timeout=timeout_s)
    except requests.RequestException as e:
        return PageOutcome(record=record, error=TransportError(record.url, record.source, e))

    if resp.status_code != 200:
        return PageOutcome(
            record=record,
            status_code=resp.status_code,
            error=StatusError(record.url, record.source, resp.status_code),
        )

    try:
        body = resp.text
        links = extract_links(body) if discover and body else []
    except Exception as e:
        return PageOutcome(
            record=record,
            status_code=resp.status_code,
            error=PageError(record.url, record.source, e),
        )
    return PageOutcome(record=record, status_code=resp.status_code, links=links)


def print_visit(url: str, out: TextIO) -> None:
    out.write(f"visiting {url}\n")
    out.flush()


def print_in_flight(count: int, queue_size: int, out: TextIO) -> None:
    out.write(f"Current amount of unanswered requests: {count} (queued: {queue_size})\n")
    out.flush()


def print_error(error: CrawlError, err: TextIO) -> None:
    err.write(f"{error} (linked from {error.source})\n")
    err.flush()


class Crawler:
    """
    Crawl a locally running site and check that every reachable page returns 200.

    Newly discovered links go to the front of the queue, so the traversal is
    depth-first-ish. A URL is marked visited when it is dispatched, and the
    dispatcher skips anything already visited, so no URL is fetched twice.
    """

    def __init__(
        self,
        config: CrawlConfig,
        session: Optional[requests.Session] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.config = config
        self.out = out or sys.stdout
        self.err = err or sys.stderr

        if session is None:
            session = requests.Session()
        session.headers["User-Agent"] = config.user_agent
        self._session = session

        # Crawl state
        self._queue: Deque[UrlRecord] = deque()
        self._visited: Set[str] = set()
        self._in_flight = 0
        self._pending: Set[Future] = set()
        self._errors = ErrorAggregator()

        for record in config.initial_records():
            self.enqueue_back(record)

    # Queue / visited set

    def try_enqueue(self, record: UrlRecord) -> None:
        """Queue a discovered link ahead of older backlog, unless already visited."""
        if record.url in self._visited:
            return
        self._queue.appendleft(record)

    def enqueue_back(self, record: UrlRecord) -> None:
        self._queue.append(record)

    def has_visited(self, url: str) -> bool:
        return url in self._visited

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def in_flight(self) -> int:
        return self._in_flight

    # Dispatch and completion

    def next_state(self) -> CrawlState:
        if self._queue and self._in_flight < self.config.concurrent:
            return CrawlState.DISPATCH
        if self._in_flight > 0:
            return CrawlState.WAIT
        return CrawlState.DONE

    def run(self) -> CrawlResult:
        """
        Crawl until the queue is empty and no request is outstanding.

        Raises FatalCrawlError on the first failed fetch unless all_errors is set.
        """
        executor = ThreadPoolExecutor(
            max_workers=self.config.concurrent, thread_name_prefix="sitecrawl"
        )
        try:
            state = CrawlState.DISPATCH
            while state is not CrawlState.DONE:
                if state is CrawlState.DISPATCH:
                    self._dispatch(executor)
                else:
                    self._wait_for_completions()
                state = self.next_state()
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        return CrawlResult(visited_count=self.visited_count, errors=self._errors.records())

    def _dispatch(self, executor: Executor) -> None:
        while self._queue and self._in_flight < self.config.concurrent:
            record = self._queue.popleft()
            if record.url in self._visited:
                continue
            self._visited.add(record.url)
            self._in_flight += 1
            if self.config.verbose:
                print_visit(record.url, self.out)
            future = executor.submit(
                fetch_page,
                self._session,
                record,
                not self.config.single_path_mode,
                self.config.timeout,
            )
            self._pending.add(future)

    def _wait_for_completions(self) -> None:
        if self.config.verbose:
            print_in_flight(self._in_flight, len(self._queue), self.out)
        done, _ = wait(
            self._pending,
            timeout=self.config.interval_seconds,
            return_when=FIRST_COMPLETED,
        )
        for future in done:
            self._pending.discard(future)
            self._complete(future.result())

    def _complete(self, outcome: PageOutcome) -> None:
        self._in_flight -= 1

        if outcome.error is not None:
            self._handle_error(outcome.error)
            return

        for href in outcome.links:
            target = classify_href(href, outcome.record.url)
            if target is not None:
                self.try_enqueue(target)

    def _handle_error(self, error: CrawlError) -> None:
        print_error(error, self.err)
        if not self.config.all_errors:
            raise FatalCrawlError(error)
        self._errors.add(error.url, error.source, reason=error.reason)
