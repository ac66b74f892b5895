"""Resolver HTTP: URL de página -> `ExtractionResult`.

Implementación:
- Una sola petición GET por llamada, sin reintentos ni backoff.
- Status no-2xx cuenta como fallo, igual que DNS/TLS/timeout.
"""

from __future__ import annotations

import httpx

from adapters.html_extractor import extract_video_info
from adapters.http_client import FETCH_ERRORS, as_fetch_error, build_async_client
from core.config import AppSettings
from core.domain.models import ExtractionResult
from core.interfaces.resolver import VideoInfoResolver
from core.logging import get_logger

logger = get_logger("resolver")


class HttpVideoResolver(VideoInfoResolver):
    """Descarga la página con httpx y delega el parseo al extractor."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def fetch_page(self, url: str) -> str:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.text
        except FETCH_ERRORS as exc:
            raise as_fetch_error(url, exc) from exc

    async def resolve(self, url: str) -> ExtractionResult:
        html = await self.fetch_page(url)
        result = extract_video_info(html)
        logger.debug("Resolved %s (source=%s)", url, result.video.source)
        return result
