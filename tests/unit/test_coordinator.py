"""Tests for the search coordinator."""

import random

import pytest

from wordfind.search.coordinator import (
    Coordinator, CoordinatorState, parse_job, validate_search_config
)
from wordfind.search.errors import InvalidInputError, MissingSchemeError, URLParseError
from wordfind.search.pool import Job, Success
from wordfind.utils.config import SearchConfig


def test_parse_job_keeps_valid_url():
    assert parse_job("https://example.com/a?b=c") == Job("https://example.com/a?b=c")


@pytest.mark.parametrize("raw", ["example.com", "localhost:8080", "/relative/path", ""])
def test_parse_job_requires_scheme(raw):
    with pytest.raises(MissingSchemeError) as excinfo:
        parse_job(raw)
    assert excinfo.value.url == raw
    assert "Please specify protocol" in str(excinfo.value)


def test_parse_job_rejects_malformed_url():
    with pytest.raises(URLParseError):
        parse_job("http://[::1")


@pytest.mark.parametrize(
    "config",
    [
        SearchConfig(word=""),
        SearchConfig(word="foo", num_workers=0),
        SearchConfig(word="foo", request_timeout=0),
    ],
)
def test_invalid_config_fails_before_pool(config, fake_fetcher_factory):
    with pytest.raises(InvalidInputError):
        validate_search_config(config)
    with pytest.raises(InvalidInputError):
        Coordinator(config, fake_fetcher_factory({}))


@pytest.mark.asyncio
async def test_no_urls_is_invalid_input(fake_fetcher_factory, capture_reporter):
    coordinator = Coordinator(SearchConfig(word="foo"), fake_fetcher_factory({}),
                              reporter=capture_reporter)
    with pytest.raises(InvalidInputError):
        await coordinator.run([])
    assert coordinator.state is CoordinatorState.INIT


@pytest.mark.asyncio
async def test_one_outcome_per_argument(fake_fetcher_factory, capture_reporter, network_error):
    fetcher = fake_fetcher_factory({
        "https://a.example.com": b"foo foo bar",
        "https://down.example.com": network_error,
    })
    urls = ["https://a.example.com", "example.com", "https://down.example.com", "http://[::1"]

    coordinator = Coordinator(SearchConfig(word="foo", num_workers=2), fetcher,
                              reporter=capture_reporter)
    report = await coordinator.run(urls)

    assert len(report.outcomes) == len(urls)
    assert report.total == 2
    assert report.successes == [Success("https://a.example.com", 2)]
    assert {f.url for f in report.failures} == {"example.com", "https://down.example.com", "http://[::1"}
    assert coordinator.state is CoordinatorState.DONE
    assert coordinator.remaining == 0


@pytest.mark.asyncio
async def test_rejected_urls_never_reach_a_worker(fake_fetcher_factory, capture_reporter):
    fetcher = fake_fetcher_factory({})

    coordinator = Coordinator(SearchConfig(word="foo", num_workers=1), fetcher,
                              reporter=capture_reporter)
    report = await coordinator.run(["example.com", "www.example.com/page"])

    assert fetcher.requested == []
    assert len(report.failures) == 2
    assert all(isinstance(f.error, MissingSchemeError) for f in report.failures)
    assert report.total == 0


@pytest.mark.asyncio
async def test_single_worker_three_urls(fake_fetcher_factory, capture_reporter):
    urls = [f"https://{name}.example.com" for name in "abc"]
    fetcher = fake_fetcher_factory({url: b"foo" for url in urls})

    coordinator = Coordinator(SearchConfig(word="foo", num_workers=1), fetcher,
                              reporter=capture_reporter)
    report = await coordinator.run(urls)

    assert report.total == 3
    assert len(report.successes) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize("seed", range(5))
async def test_sum_is_independent_of_completion_order(seed, fake_fetcher_factory, capture_reporter):
    bodies = {f"https://site{i}.example.com": b"foo " * i for i in range(8)}
    rng = random.Random(seed)
    delays = {url: rng.uniform(0, 0.02) for url in bodies}
    fetcher = fake_fetcher_factory(bodies, delays=delays)

    coordinator = Coordinator(SearchConfig(word="foo", num_workers=3), fetcher,
                              reporter=capture_reporter)
    report = await coordinator.run(list(bodies))

    assert report.total == sum(range(8))
    assert report.total == sum(s.occurrences for s in report.successes)


@pytest.mark.asyncio
async def test_outcomes_are_reported(fake_fetcher_factory, capture_reporter):
    fetcher = fake_fetcher_factory({"https://a.example.com": b"foo"})

    coordinator = Coordinator(SearchConfig(word="foo"), fetcher, reporter=capture_reporter)
    await coordinator.run(["https://a.example.com", "example.com"])

    assert capture_reporter.out.getvalue() == "https://a.example.com\t\t1\nSum: \t\t1\n"
    assert capture_reporter.err.getvalue() == "example.com: Please specify protocol\n"


@pytest.mark.asyncio
async def test_coordinator_runs_once(fake_fetcher_factory, capture_reporter):
    fetcher = fake_fetcher_factory({"https://a.example.com": b"foo"})
    coordinator = Coordinator(SearchConfig(word="foo"), fetcher, reporter=capture_reporter)
    await coordinator.run(["https://a.example.com"])

    with pytest.raises(RuntimeError):
        await coordinator.run(["https://a.example.com"])
