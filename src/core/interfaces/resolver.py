"""Contrato del resolver de páginas de video.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- La API y la CLI aceptan cualquier implementación (HTTP real, stubs de test).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import ExtractionResult


@runtime_checkable
class VideoInfoResolver(Protocol):
    """Convierte la URL de una página en un `ExtractionResult`.

    Reglas:
    - `resolve` es asíncrono porque hace exactamente una petición HTTP.
    - Sin reintentos ni resultados parciales: o devuelve el resultado completo
      o lanza `core.errors.VideoInfoError`.
    """

    async def resolve(self, url: str) -> ExtractionResult:
        ...
