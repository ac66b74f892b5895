from __future__ import annotations

from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from core.config import AppSettings

PAGE_URL = "http://videos.test/watch/1"
VIDEO_URL = "http://cdn.test/a.mp4"

FULL_PAGE = """
<html>
  <head>
    <meta property="og:title" content="Demo">
    <meta property="og:description" content="A demo clip">
    <meta itemprop="uploadDate" content="2024-05-01T10:00:00Z">
    <meta itemprop="duration" content="PT2M10S">
  </head>
  <body>
    <video>
      <source type="video/webm" src="http://cdn.test/a.webm">
      <source type="video/mp4" src="http://cdn.test/a.mp4">
    </video>
    <img id="video-poster" src="http://cdn.test/poster.jpg" width="1280" height="720">
    <span id="n-views">1,234</span>
    <span id="n-likes-video">56</span>
    <span id="n-dislikes-video">7</span>
  </body>
</html>
"""


def make_transport(routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> httpx.MockTransport:
    """Transport falso: despacha por URL exacta; lo demás responde 404."""

    def handler(request: httpx.Request) -> httpx.Response:
        # Igual que el transport real: URLs sin esquema http(s) no llegan a la red.
        if request.url.scheme not in ("http", "https"):
            raise httpx.UnsupportedProtocol(
                "Request URL is missing an 'http://' or 'https://' protocol.", request=request
            )
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="not found")
        return route(request)

    return httpx.MockTransport(handler)


def html_route(html: str) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, text=html, headers={"Content-Type": "text/html"})


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(rate_limit_max=0, http_timeout_seconds=5)


@pytest.fixture
def make_client(settings: AppSettings):
    def factory(routes: dict, **kwargs) -> TestClient:
        app = create_app(kwargs.pop("app_settings", settings), transport=make_transport(routes))
        return TestClient(app, **kwargs)

    return factory
