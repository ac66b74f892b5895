"""Stream saliente del archivo de video.

`open_video_stream` abre la petición y valida el status antes de devolver el
control, de modo que el endpoint puede responder 500 mientras aún no ha
enviado cabeceras. Después, `iter_bytes` reenvía bloque a bloque y `aclose`
libera respuesta y cliente (idempotente, protegido frente a cancelación).
"""

from __future__ import annotations

from typing import AsyncIterator

import anyio
import httpx

from adapters.http_client import FETCH_ERRORS, as_fetch_error, build_async_client
from core.config import AppSettings
from core.errors import StreamAbortedError
from core.logging import get_logger

logger = get_logger("stream")


class VideoStream:
    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient,
        response: httpx.Response,
        chunk_size: int,
    ) -> None:
        self.url = url
        self._client = client
        self._response = response
        self._chunk_size = chunk_size
        self._closed = False
        self.bytes_sent = 0

    @property
    def content_length(self) -> str | None:
        # Con Content-Encoding el largo remoto no coincide con los bytes decodificados.
        if self._response.headers.get("content-encoding"):
            return None
        return self._response.headers.get("content-length")

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        """Itera el cuerpo remoto; al terminar, fallar o cancelarse, cierra todo."""

        try:
            async for chunk in self._response.aiter_bytes(self._chunk_size):
                self.bytes_sent += len(chunk)
                yield chunk
        except FETCH_ERRORS as exc:
            # Las cabeceras ya salieron: solo queda cortar la conexión.
            reason = as_fetch_error(self.url, exc).reason
            logger.error("Video stream %s aborted after %d bytes: %s", self.url, self.bytes_sent, reason)
            raise StreamAbortedError(self.url, reason, self.bytes_sent) from exc
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        with anyio.CancelScope(shield=True):
            await self._response.aclose()
            await self._client.aclose()


async def open_video_stream(
    url: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VideoStream:
    """Abre un GET en modo streaming contra `url` y comprueba el status."""

    settings = settings or AppSettings()
    client = build_async_client(settings, extra_headers={"Accept": "*/*"}, transport=transport)
    response: httpx.Response | None = None
    try:
        request = client.build_request("GET", url)
        response = await client.send(request, stream=True)
        response.raise_for_status()
    except FETCH_ERRORS as exc:
        if response is not None:
            await response.aclose()
        await client.aclose()
        raise as_fetch_error(url, exc) from exc
    return VideoStream(url, client, response, settings.stream_chunk_size)
