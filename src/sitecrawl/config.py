"""
Crawl configuration.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sitecrawl.urls import PATHS_SOURCE, SEED_SOURCE, UrlRecord, request_url

DEFAULT_USER_AGENT = "sitecrawl/1.0 (local site link checker)"


@dataclass(slots=True)
class CrawlConfig:
    """Holds runtime options for one crawl."""
    port: str = "3000"
    host: str = "localhost"
    verbose: bool = False
    all_errors: bool = False
    check_queue_interval: int = 200
    concurrent: int = 50
    specific_paths: Tuple[str, ...] = field(default_factory=tuple)
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        self.port = str(self.port).strip()
        self.specific_paths = tuple(self.specific_paths or ())
        if not self.port:
            raise ValueError("Port must not be empty")
        if self.concurrent < 1:
            raise ValueError(f"Concurrent requests must be at least 1, got {self.concurrent}")
        if self.check_queue_interval <= 0:
            raise ValueError(
                f"Check queue interval must be a positive number of milliseconds, "
                f"got {self.check_queue_interval}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        for path in self.specific_paths:
            if not path.startswith("/"):
                raise ValueError(f"Specific paths must start with '/', got '{path}'")

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def seed_url(self) -> str:
        return f"{self.base_url}/"

    @property
    def interval_seconds(self) -> float:
        return self.check_queue_interval / 1000.0

    @property
    def single_path_mode(self) -> bool:
        """Only validate the given paths, without following links."""
        return bool(self.specific_paths)

    def initial_records(self) -> List[UrlRecord]:
        """Records the crawl starts from: the seed URL, or each specific path."""
        if self.single_path_mode:
            return [UrlRecord(url=request_url(self.base_url + path), source=PATHS_SOURCE) for path in self.specific_paths]
        return [UrlRecord(url=self.seed_url, source=SEED_SOURCE)]
