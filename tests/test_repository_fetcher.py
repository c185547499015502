import asyncio
import logging

import httpx

from adapters.github_repos import RepositoryStatsFetcher
from core.domain.models import FetchStatus
from core.ttl_cache import TTLCache
from core.url_parser import parse_repository_url

WIDGET = {
    "name": "widget",
    "full_name": "acme/widget",
    "description": "A widget",
    "stargazers_count": 42,
    "forks_count": 7,
    "language": "Python",
    "open_issues_count": 3,
}


def _fetch(github, owner="acme", name="widget", *, cache=None):
    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=cache)
            return await fetcher.fetch(owner, name)

    return asyncio.run(go())


def test_merges_metadata_and_readme_title(github):
    github.add_repo("acme/widget", WIDGET, readme="# Widget Project\n\nbody")
    result = _fetch(github)

    assert result.status is FetchStatus.OK
    assert result.data.readme_title == "Widget Project"
    assert result.data.stargazers_count == 42
    assert result.data.language == "Python"
    # Unknown upstream fields survive the merge.
    assert result.data.model_extra["open_issues_count"] == 3
    assert sorted(github.calls) == ["/repos/acme/widget", "/repos/acme/widget/readme"]


def test_second_fetch_within_ttl_hits_the_cache(github, clock):
    github.add_repo("acme/widget", WIDGET, readme="# Widget")
    cache = TTLCache(300, clock=clock)

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=cache)
            first = await fetcher.fetch("acme", "widget")
            clock.advance(299)
            second = await fetcher.fetch("acme", "widget")
            return first, second

    first, second = asyncio.run(go())
    assert len(github.metadata_calls()) == 1
    assert second.from_cache is True
    assert second.data is first.data


def test_fetch_after_ttl_goes_back_to_network(github, clock):
    github.add_repo("acme/widget", WIDGET)
    cache = TTLCache(300, clock=clock)

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=cache)
            await fetcher.fetch("acme", "widget")
            clock.advance(300)
            return await fetcher.fetch("acme", "widget")

    result = asyncio.run(go())
    assert result.from_cache is False
    assert len(github.metadata_calls()) == 2


def test_distinct_identifiers_never_share_entries(github):
    github.add_repo("acme/widget", WIDGET)
    github.add_repo("acme/gadget", {**WIDGET, "name": "gadget", "stargazers_count": 1})
    github.add_repo("other/widget", {**WIDGET, "stargazers_count": 2})
    cache = TTLCache()

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=cache)
            return [
                await fetcher.fetch("acme", "widget"),
                await fetcher.fetch("acme", "gadget"),
                await fetcher.fetch("other", "widget"),
            ]

    results = asyncio.run(go())
    assert [r.data.stargazers_count for r in results] == [42, 1, 2]
    assert not any(r.from_cache for r in results)
    assert len(cache) == 3


def test_rate_limit_is_a_soft_failure(github, caplog):
    github.repos["acme/widget"] = lambda _r: httpx.Response(403, json={"message": "rate limit"})
    cache = TTLCache()
    with caplog.at_level(logging.WARNING):
        result = _fetch(github, cache=cache)

    assert result.status is FetchStatus.RATE_LIMITED
    assert result.data is None
    assert len(cache) == 0
    assert any(r.levelno == logging.WARNING and "rate limit" in r.getMessage() for r in caplog.records)
    assert not any(r.levelno >= logging.ERROR for r in caplog.records)


def test_other_error_status_is_a_hard_failure(github, caplog):
    github.repos["acme/widget"] = lambda _r: httpx.Response(500, text="boom")
    with caplog.at_level(logging.ERROR):
        result = _fetch(github)

    assert result.status is FetchStatus.FAILED
    assert result.detail == "HTTP 500"
    assert any(r.levelno == logging.ERROR for r in caplog.records)


def test_missing_repository_is_a_hard_failure(github):
    result = _fetch(github, "nobody", "nothing")
    assert result.status is FetchStatus.FAILED
    assert result.detail == "HTTP 404"


def test_transport_error_does_not_raise(github):
    def broken(request):
        raise httpx.ConnectError("connection refused", request=request)

    github.repos["acme/widget"] = broken
    result = _fetch(github)
    assert result.status is FetchStatus.FAILED
    assert "transport error" in result.detail


def test_invalid_metadata_json_is_a_hard_failure(github):
    github.repos["acme/widget"] = lambda _r: httpx.Response(200, text="<html>not json</html>")
    result = _fetch(github)
    assert result.status is FetchStatus.FAILED


def test_failures_are_not_cached(github):
    github.repos["acme/widget"] = lambda _r: httpx.Response(500)
    cache = TTLCache()

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=cache)
            await fetcher.fetch("acme", "widget")
            return await fetcher.fetch("acme", "widget")

    result = asyncio.run(go())
    assert result.status is FetchStatus.FAILED
    assert len(github.metadata_calls()) == 2


def test_missing_readme_only_drops_the_title(github):
    github.add_repo("acme/widget", WIDGET)
    result = _fetch(github)
    assert result.ok
    assert result.data.readme_title is None


def test_broken_readme_never_fails_the_fetch(github):
    github.add_repo("acme/widget", WIDGET)
    github.readmes["acme/widget"] = lambda _r: httpx.Response(200, text="not json")
    assert _fetch(github).data.readme_title is None

    github.readmes["acme/widget"] = lambda _r: httpx.Response(200, json={"content": "%%% not base64"})
    assert _fetch(github).data.readme_title is None

    github.readmes["acme/widget"] = lambda _r: httpx.Response(200, json=["unexpected"])
    assert _fetch(github).data.readme_title is None


def test_readme_transport_error_is_absorbed(github):
    def broken(request):
        raise httpx.ReadTimeout("slow", request=request)

    github.add_repo("acme/widget", WIDGET)
    github.readmes["acme/widget"] = broken
    result = _fetch(github)
    assert result.ok
    assert result.data.readme_title is None


def test_concurrent_fetches_share_one_request(github):
    github.add_repo("acme/widget", WIDGET, readme="# Widget")

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, cache=TTLCache())
            return await asyncio.gather(
                fetcher.fetch("acme", "widget"),
                fetcher.fetch("acme", "widget"),
            )

    first, second = asyncio.run(go())
    assert first.ok and second.ok
    assert first.data is second.data
    assert len(github.metadata_calls()) == 1


def test_custom_api_base(github):
    github.add_repo("acme/widget", WIDGET)

    async def go():
        async with github.client() as client:
            fetcher = RepositoryStatsFetcher(client=client, api_base="https://ghe.example.com/api/v3/repos/")
            return await fetcher.fetch("acme", "widget")

    asyncio.run(go())
    assert "/api/v3/repos/acme/widget" in github.calls
    assert "/api/v3/repos/acme/widget/readme" in github.calls


def test_results_are_cached_under_the_identifier_key(github):
    github.add_repo("Acme/Widget", WIDGET)
    cache = TTLCache()
    result = _fetch(github, "Acme", "Widget", cache=cache)

    identifier = parse_repository_url("https://github.com/Acme/Widget")
    assert cache.get(identifier.cache_key) is result.data
    assert cache.get("acme/widget") is None


def test_non_object_readme_payload_is_logged(github, caplog):
    github.add_repo("acme/widget", WIDGET)
    github.readmes["acme/widget"] = lambda _r: httpx.Response(200, json=["unexpected"])
    with caplog.at_level(logging.INFO):
        result = _fetch(github)

    assert result.ok
    assert any(
        r.levelno == logging.INFO and "README" in r.getMessage() and "acme/widget" in r.getMessage()
        for r in caplog.records
    )
