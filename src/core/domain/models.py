"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar el Core
  a librerías de I/O.
- Los alias fijan el contrato JSON (camelCase) de la API en un único sitio.

Nota:
- Todos los modelos son transitorios: se construyen por request y se descartan
  al terminar la respuesta.
- Ningún campo es opcional; la ausencia se representa con un sentinel
  (ver `core.domain.fields`).
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.fields import SENTINELS


class PosterDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str = Field(
        default=SENTINELS["video.poster.url"],
        description="Atributo `src` del póster del video.",
    )
    width: str = Field(
        default=SENTINELS["video.poster.width"],
        description="Atributo `width` del póster, tal cual aparece en el HTML.",
    )
    height: str = Field(
        default=SENTINELS["video.poster.height"],
        description="Atributo `height` del póster, tal cual aparece en el HTML.",
    )


class VideoDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str = Field(
        default=SENTINELS["video.source"],
        description="URL del primer `<source type=\"video/mp4\">` (sin validar).",
    )
    poster: PosterDescriptor = Field(
        default_factory=PosterDescriptor,
        description="Imagen de portada del video.",
    )

    @property
    def has_source(self) -> bool:
        return self.source != SENTINELS["video.source"]


class MetadataDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(default=SENTINELS["metadata.title"])
    description: str = Field(default=SENTINELS["metadata.description"])
    views: str = Field(default=SENTINELS["metadata.views"])
    likes: str = Field(default=SENTINELS["metadata.likes"])
    dislikes: str = Field(default=SENTINELS["metadata.dislikes"])
    upload_date: str = Field(
        default=SENTINELS["metadata.uploadDate"],
        alias="uploadDate",
        description="`content` de `meta[itemprop=uploadDate]`.",
    )
    duration: str = Field(
        default=SENTINELS["metadata.duration"],
        description="`content` de `meta[itemprop=duration]` (p.ej. ISO-8601 `PT2M10S`).",
    )


class ExtractionResult(BaseModel):
    """Unidad que devuelve el Resolver y consumen ambos endpoints."""

    model_config = ConfigDict(frozen=True)

    video: VideoDescriptor = Field(default_factory=VideoDescriptor)
    metadata: MetadataDescriptor = Field(default_factory=MetadataDescriptor)


class PerformanceReport(BaseModel):
    """Tiempo de pared del Resolver, como strings con 2 decimales."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time_in_ms: str = Field(..., alias="timeInMs")
    time_in_seconds: str = Field(..., alias="timeInSeconds")

    @classmethod
    def from_elapsed_ms(cls, elapsed_ms: float) -> "PerformanceReport":
        elapsed_ms = max(elapsed_ms, 0.0)
        return cls(
            time_in_ms=f"{elapsed_ms:.2f}",
            time_in_seconds=f"{elapsed_ms / 1000:.2f}",
        )


class InfoResponse(BaseModel):
    """Respuesta de `/info`: el resultado aplanado más `apiPerformance`."""

    model_config = ConfigDict(populate_by_name=True)

    video: VideoDescriptor
    metadata: MetadataDescriptor
    api_performance: PerformanceReport = Field(..., alias="apiPerformance")

    @classmethod
    def build(cls, result: ExtractionResult, performance: PerformanceReport) -> "InfoResponse":
        return cls(video=result.video, metadata=result.metadata, api_performance=performance)


class ErrorResponse(BaseModel):
    error: str = Field(..., min_length=1)
