"""Middlewares ASGI que envuelven a los endpoints.

Por qué ASGI puro (y no `BaseHTTPMiddleware`):
- No interfieren con `StreamingResponse`: los bloques del video pasan tal
  cual y la desconexión del cliente sigue cancelando el stream.

Orden (de fuera hacia dentro): access log, cabeceras de seguridad,
compresión, rate limiting. Ver `api.app.create_app`.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime, timezone
from typing import Callable, Mapping

from starlette.datastructures import Headers, MutableHeaders
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import PlainTextResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logging import ACCESS_LOGGER

access_logger = logging.getLogger(ACCESS_LOGGER)

RATE_LIMITED = "Demasiadas solicitudes, inténtelo de nuevo más tarde."

# Equivalente a los defaults de helmet.
DEFAULT_SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
        "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
        "object-src 'none';script-src 'self';script-src-attr 'none';"
        "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def _client_address(scope: Scope) -> str:
    client = scope.get("client")
    return client[0] if client else "-"


class AccessLogMiddleware:
    """Una línea por request en formato Apache "combined"."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        status = 500
        length = "-"

        async def send_wrapper(message: Message) -> None:
            nonlocal status, length
            if message["type"] == "http.response.start":
                status = message["status"]
                length = Headers(raw=message.get("headers", [])).get("content-length", "-")
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            access_logger.info(self._format(scope, status, length))

    @staticmethod
    def _format(scope: Scope, status: int, length: str) -> str:
        headers = Headers(scope=scope)
        target = (scope.get("raw_path") or scope["path"].encode()).decode("latin-1")
        if scope.get("query_string"):
            target = f"{target}?{scope['query_string'].decode('latin-1')}"
        now = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S +0000")
        return (
            f'{_client_address(scope)} - - [{now}] '
            f'"{scope["method"]} {target} HTTP/{scope.get("http_version", "1.1")}" '
            f'{status} {length} '
            f'"{headers.get("referer", "-")}" "{headers.get("user-agent", "-")}"'
        )


class SecurityHeadersMiddleware:
    """Añade cabeceras de seguridad sin pisar las que ya fijó la respuesta."""

    def __init__(self, app: ASGIApp, headers: Mapping[str, str] | None = None) -> None:
        self.app = app
        self.headers = dict(DEFAULT_SECURITY_HEADERS if headers is None else headers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    if name not in response_headers:
                        response_headers[name] = value
            await send(message)

        await self.app(scope, receive, send_wrapper)


class CompressionMiddleware:
    """GZip para las respuestas JSON; las rutas binarias pasan sin comprimir."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        minimum_size: int = 1000,
        exclude_paths: tuple[str, ...] = ("/downloader",),
    ) -> None:
        self.app = app
        self.gzip = GZipMiddleware(app, minimum_size=minimum_size)
        self.exclude_paths = exclude_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in self.exclude_paths:
            await self.app(scope, receive, send)
            return
        await self.gzip(scope, receive, send)


class RateLimitMiddleware:
    """Ventana fija por dirección de cliente.

    Los contadores viven en memoria del proceso; con varios workers cada uno
    aplica su propio límite.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.app = app
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, tuple[float, int]] = {}
        self._last_prune = clock()

    def _prune(self, now: float) -> None:
        if now - self._last_prune < self.window_seconds:
            return
        self._last_prune = now
        expired = [key for key, (start, _) in self._hits.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._hits[key]

    def hit(self, key: str) -> tuple[int, int, int]:
        """Registra un request; devuelve (count, remaining, reset_seconds)."""

        now = self._clock()
        self._prune(now)
        start, count = self._hits.get(key, (now, 0))
        if now - start >= self.window_seconds:
            start, count = now, 0
        count += 1
        self._hits[key] = (start, count)
        remaining = max(self.max_requests - count, 0)
        reset = max(math.ceil(start + self.window_seconds - now), 0)
        return count, remaining, reset

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.max_requests <= 0:
            await self.app(scope, receive, send)
            return

        count, remaining, reset = self.hit(_client_address(scope))
        limit_headers = {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(remaining),
            "RateLimit-Reset": str(reset),
        }

        if count > self.max_requests:
            response = PlainTextResponse(
                RATE_LIMITED,
                status_code=429,
                headers={**limit_headers, "Retry-After": str(reset)},
            )
            await response(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in limit_headers.items():
                    response_headers[name] = value
            await send(message)

        await self.app(scope, receive, send_wrapper)
