"""Errores del dominio.

Todas las fallas de red/parseo hacia la página remota o el video se agrupan en
una sola clase opaca: el cliente de la API nunca ve el detalle, solo el log.
"""

from __future__ import annotations


class VideoInfoError(Exception):
    """Base de los errores esperados del servicio."""


class UpstreamFetchError(VideoInfoError):
    """Falló una petición saliente (DNS, TLS, timeout, status no-2xx, URL inválida...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class StreamAbortedError(UpstreamFetchError):
    """El stream del video falló después de enviar las cabeceras al cliente."""

    def __init__(self, url: str, reason: str, bytes_sent: int) -> None:
        super().__init__(url, reason)
        self.bytes_sent = bytes_sent
