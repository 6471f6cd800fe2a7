"""
Command-line interface for the crawler.
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from sitecrawl.config import DEFAULT_USER_AGENT, CrawlConfig
from sitecrawl.core import Crawler
from sitecrawl.errors import FatalCrawlError
from sitecrawl.report import print_summary

STOP_ON_ERROR_HINT = (
    "Exiting crawler with exit code 1 due to error found, "
    "if you wish to see all errors use the --allErrors (-e) option\n"
)


def exit_now(code: int) -> None:
    """Flush output and end the process without joining fetch threads still on the wire."""
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(code)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sitecrawl",
        description="Crawl a locally running site and check that every reachable page returns 200.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress")
    parser.add_argument("-p", "--port", default="3000", help="Port of the local server (default: 3000)")
    parser.add_argument("--host", default="localhost", help="Host of the local server (default: localhost)")
    parser.add_argument(
        "-e", "--all-errors", "--allErrors",
        dest="all_errors",
        action="store_true",
        help="Keep crawling after an error and report all errors at the end",
    )
    parser.add_argument(
        "-i", "--check-queue-interval", "--checkQueueInterval",
        dest="check_queue_interval",
        type=int,
        default=200,
        help="Milliseconds between checks for finished requests (default: 200)",
    )
    parser.add_argument(
        "-c", "--concurrent",
        type=int,
        default=50,
        help="Maximum number of requests in flight (default: 50)",
    )
    parser.add_argument(
        "-s", "--specific-paths", "--specificPaths",
        dest="specific_paths",
        nargs="+",
        metavar="PATH",
        help="Only check these paths (e.g. /about /contact), without following links",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds (default: none)")
    return parser


def config_from_args(args: argparse.Namespace) -> CrawlConfig:
    return CrawlConfig(
        port=args.port,
        host=args.host,
        verbose=args.verbose,
        all_errors=args.all_errors,
        check_queue_interval=args.check_queue_interval,
        concurrent=args.concurrent,
        specific_paths=tuple(args.specific_paths or ()),
        user_agent=args.user_agent,
        timeout=args.timeout,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the crawler CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    if config.verbose:
        target = ", ".join(config.specific_paths) if config.single_path_mode else config.seed_url
        sys.stdout.write(f"Starting crawl of {target} with up to {config.concurrent} concurrent requests\n")

    crawler = Crawler(config)
    try:
        result = crawler.run()
    except FatalCrawlError:
        sys.stderr.write(STOP_ON_ERROR_HINT)
        exit_now(1)
        return 1

    return print_summary(result, config.all_errors)


if __name__ == "__main__":
    raise SystemExit(main())
