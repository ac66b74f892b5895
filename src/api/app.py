"""Fábrica de la aplicación FastAPI.

No hay instancia global: `create_app` recibe un `AppSettings` ya construido y
devuelve la app lista para `uvicorn`. Resolver y apertura de streams se
guardan en `app.state` para que los tests puedan sustituirlos.
"""

from __future__ import annotations

from functools import partial

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from adapters.video_resolver import HttpVideoResolver
from adapters.video_stream import open_video_stream
from api import __version__
from api.middleware import (
    AccessLogMiddleware,
    CompressionMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from api.routes import router
from core.config import AppSettings
from core.errors import StreamAbortedError
from core.interfaces.resolver import VideoInfoResolver
from core.logging import get_logger

logger = get_logger("api")

INTERNAL_ERROR = "¡Algo salió mal!"


async def _unhandled_exception(request: Request, exc: Exception) -> PlainTextResponse:
    if isinstance(exc, StreamAbortedError):
        # Ya registrado por `VideoStream.iter_bytes`; la respuesta no llega a enviarse.
        logger.debug("Stream aborted on %s after %d bytes", request.url.path, exc.bytes_sent)
        return PlainTextResponse(INTERNAL_ERROR, status_code=500)
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(INTERNAL_ERROR, status_code=500)


def create_app(
    settings: AppSettings | None = None,
    *,
    resolver: VideoInfoResolver | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Construye la app.

    `transport` se pasa a todos los clientes httpx salientes (útil con
    `httpx.MockTransport` en tests); `resolver` reemplaza al resolver HTTP.
    """

    settings = settings or AppSettings()
    app = FastAPI(
        title="video-info-api",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.resolver = resolver or HttpVideoResolver(settings, transport=transport)
    app.state.open_stream = partial(open_video_stream, settings=settings, transport=transport)

    app.include_router(router)
    app.add_exception_handler(Exception, _unhandled_exception)

    # add_middleware antepone: el último añadido es el más externo.
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(CompressionMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(AccessLogMiddleware)
    return app
