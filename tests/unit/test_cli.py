import pytest

from sitecrawl import cli
from sitecrawl.errors import FatalCrawlError, StatusError
from sitecrawl.report import CrawlResult, ErrorSourceRecord


class StubCrawler:
    result = CrawlResult(visited_count=4)
    raises = None
    configs = []

    def __init__(self, config):
        StubCrawler.configs.append(config)

    def run(self):
        if StubCrawler.raises is not None:
            raise StubCrawler.raises
        return StubCrawler.result


@pytest.fixture
def stub_crawler(monkeypatch):
    StubCrawler.result = CrawlResult(visited_count=4)
    StubCrawler.raises = None
    StubCrawler.configs = []
    monkeypatch.setattr(cli, "Crawler", StubCrawler)
    return StubCrawler


def test_parses_original_flag_names(stub_crawler):
    cli.main([
        "-p", "4000", "--allErrors", "--checkQueueInterval", "50",
        "--concurrent", "5", "--specificPaths", "/a", "/b",
    ])

    config = stub_crawler.configs[0]
    assert config.port == "4000"
    assert config.all_errors is True
    assert config.check_queue_interval == 50
    assert config.concurrent == 5
    assert config.specific_paths == ("/a", "/b")


def test_clean_crawl_exits_zero(stub_crawler, capsys):
    assert cli.main([]) == 0
    assert "Visited 4 unique URLs" in capsys.readouterr().out


def test_fatal_error_exits_at_once_with_hint(stub_crawler, monkeypatch, capsys):
    stub_crawler.raises = FatalCrawlError(StatusError("http://localhost:3000/x", "seed", 404))
    exits = []

    def fake_exit(code):
        exits.append(code)
        raise SystemExit(code)

    monkeypatch.setattr(cli.os, "_exit", fake_exit)

    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert exits == [1]
    assert "--allErrors (-e)" in capsys.readouterr().err


def test_collected_errors_exit_one(stub_crawler):
    stub_crawler.result = CrawlResult(
        visited_count=2,
        errors=[ErrorSourceRecord(source="seed", url="http://localhost:3000/", reason="HTTP 500")],
    )

    assert cli.main(["-e"]) == 1


def test_invalid_concurrency_is_a_usage_error(stub_crawler):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--concurrent", "0"])

    assert excinfo.value.code == 2
