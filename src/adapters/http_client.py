"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y redirects de todas las peticiones salientes
  (página HTML y stream de video).
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings
from core.errors import UpstreamFetchError

# `InvalidURL` y `StreamError` no heredan de `httpx.HTTPError`.
FETCH_ERRORS: tuple[type[Exception], ...] = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    El timeout aplica a connect/read/write/pool por igual; en streaming es el
    tiempo máximo entre dos bloques, no la duración total de la descarga.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def as_fetch_error(url: str, exc: Exception) -> UpstreamFetchError:
    """Normaliza cualquier error de httpx a `UpstreamFetchError`."""

    if isinstance(exc, httpx.HTTPStatusError):
        reason = f"HTTP {exc.response.status_code}"
    else:
        reason = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
    return UpstreamFetchError(url, reason)
