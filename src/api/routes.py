"""Endpoints HTTP: `/info` y `/downloader`.

Ambos consumen el mismo `VideoInfoResolver` (inyectado en `app.state`) y
capturan todos los errores esperados en su propio borde: el cliente recibe
siempre un mensaje fijo y el detalle queda en el log.
"""

from __future__ import annotations

import time

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from starlette.background import BackgroundTask

from core.domain.models import ErrorResponse, InfoResponse, PerformanceReport
from core.errors import VideoInfoError
from core.interfaces.resolver import VideoInfoResolver
from core.logging import get_logger

logger = get_logger("api")

router = APIRouter()

MISSING_URL = "No se proporcionó la URL."
EXTRACTION_FAILED = "Error al extraer la información de la URL proporcionada."
SOURCE_NOT_FOUND = "No se encontró la URL del video."
DOWNLOAD_FAILED = "Error al descargar el video de la URL proporcionada."

DOWNLOAD_FILENAME = "video.mp4"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _resolver(request: Request) -> VideoInfoResolver:
    return request.app.state.resolver


@router.get("/info")
async def info(request: Request, url: str | None = Query(default=None)) -> Response:
    """Devuelve la metadata de la página junto con el tiempo que tomó resolverla."""

    if not url:
        return error_response(400, MISSING_URL)

    start = time.perf_counter()
    try:
        result = await _resolver(request).resolve(url)
    except VideoInfoError:
        logger.exception("Extraction failed for %s", url)
        return error_response(500, EXTRACTION_FAILED)
    elapsed_ms = (time.perf_counter() - start) * 1000

    payload = InfoResponse.build(result, PerformanceReport.from_elapsed_ms(elapsed_ms))
    return JSONResponse(payload.model_dump(by_alias=True))


@router.get("/downloader")
async def downloader(request: Request, url: str | None = Query(default=None)) -> Response:
    """Resuelve la página y reenvía el MP4 al cliente como adjunto."""

    if not url:
        return error_response(400, MISSING_URL)

    try:
        result = await _resolver(request).resolve(url)
    except VideoInfoError:
        logger.exception("Download failed while resolving %s", url)
        return error_response(500, DOWNLOAD_FAILED)

    if not result.video.has_source:
        return error_response(404, SOURCE_NOT_FOUND)

    try:
        stream = await request.app.state.open_stream(result.video.source)
    except VideoInfoError:
        logger.exception("Download failed while opening %s", result.video.source)
        return error_response(500, DOWNLOAD_FAILED)

    headers = {"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'}
    if stream.content_length:
        headers["Content-Length"] = stream.content_length

    logger.info("Streaming %s for %s", result.video.source, url)
    return StreamingResponse(
        stream.iter_bytes(),
        media_type="video/mp4",
        headers=headers,
        background=BackgroundTask(stream.aclose),
    )
