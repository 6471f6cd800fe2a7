"""
Error aggregation and the end-of-crawl summary.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, TextIO


@dataclass(frozen=True, slots=True, order=True)
class ErrorSourceRecord:
    """First error seen for a source page. Sorts by (source, url)."""
    source: str
    url: str
    reason: str = field(default="", compare=False)


@dataclass(slots=True)
class CrawlResult:
    """What a finished crawl hands to the reporter."""
    visited_count: int
    errors: List[ErrorSourceRecord] = field(default_factory=list)


class ErrorAggregator:
    """Keeps one error per source page; later errors from the same source are dropped."""

    def __init__(self) -> None:
        self._by_source: Dict[str, ErrorSourceRecord] = {}

    def add(self, url: str, source: str, reason: str = "") -> bool:
        """Record an error. Returns False when the source already has one."""
        if source in self._by_source:
            return False
        self._by_source[source] = ErrorSourceRecord(source=source, url=url, reason=reason)
        return True

    def records(self) -> List[ErrorSourceRecord]:
        return sorted(self._by_source.values())

    def __len__(self) -> int:
        return len(self._by_source)


def print_summary(
    result: CrawlResult,
    all_errors: bool,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Print crawl summary and return the process exit code."""
    out = out or sys.stdout
    err = err or sys.stderr

    out.write(f"Visited {result.visited_count} unique URLs\n")

    if not all_errors:
        return 0

    if not result.errors:
        out.write("No errors found.\n")
        return 0

    err.write(f"Found errors on {len(result.errors)} source pages:\n")
    previous_source = None
    for record in sorted(result.errors):
        if previous_source is not None and record.source != previous_source:
            err.write("\n")
        line = f"  {record.source} -> {record.url}"
        if record.reason:
            line += f" ({record.reason})"
        err.write(line + "\n")
        previous_source = record.source

    return 1
