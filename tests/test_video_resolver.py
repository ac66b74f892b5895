from __future__ import annotations

import asyncio

import httpx
import pytest

from adapters.video_resolver import HttpVideoResolver
from core.config import AppSettings
from core.errors import UpstreamFetchError, VideoInfoError
from core.interfaces.resolver import VideoInfoResolver

from conftest import FULL_PAGE, PAGE_URL, html_route, make_transport


def _resolver(routes: dict) -> HttpVideoResolver:
    return HttpVideoResolver(AppSettings(), transport=make_transport(routes))


def test_resolver_satisfies_protocol():
    assert isinstance(_resolver({}), VideoInfoResolver)


def test_resolve_returns_extraction_result():
    result = asyncio.run(_resolver({PAGE_URL: html_route(FULL_PAGE)}).resolve(PAGE_URL))

    assert result.video.source == "http://cdn.test/a.mp4"
    assert result.metadata.title == "Demo"


def test_resolve_issues_exactly_one_request():
    calls: list[httpx.Request] = []

    def route(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text=FULL_PAGE)

    asyncio.run(_resolver({PAGE_URL: route}).resolve(PAGE_URL))

    assert len(calls) == 1
    assert calls[0].method == "GET"
    assert calls[0].headers["user-agent"] == AppSettings().user_agent


def test_resolve_is_idempotent_for_unchanged_page():
    resolver = _resolver({PAGE_URL: html_route(FULL_PAGE)})

    first = asyncio.run(resolver.resolve(PAGE_URL))
    second = asyncio.run(resolver.resolve(PAGE_URL))

    assert first == second


def test_non_2xx_is_a_fetch_error():
    resolver = _resolver({PAGE_URL: lambda request: httpx.Response(503, text="busy")})

    with pytest.raises(UpstreamFetchError) as excinfo:
        asyncio.run(resolver.resolve(PAGE_URL))

    assert excinfo.value.url == PAGE_URL
    assert excinfo.value.reason == "HTTP 503"


def test_network_failure_is_not_retried():
    calls = 0

    def route(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(VideoInfoError):
        asyncio.run(_resolver({PAGE_URL: route}).resolve(PAGE_URL))

    assert calls == 1


def test_malformed_url_surfaces_as_fetch_error():
    with pytest.raises(UpstreamFetchError):
        asyncio.run(_resolver({}).resolve("not a url"))
