"""Tabla declarativa de campos extraídos de la página de video.

Cada regla indica dónde vive el dato en el `ExtractionResult` (ruta con los
nombres JSON), cómo localizarlo en el HTML (selector CSS) y qué sentinel usar
cuando no aparece. El extractor recorre esta tabla con un único bucle, así que
añadir un campo es añadir una fila.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldRule:
    path: tuple[str, ...]
    selector: str
    attribute: str | None
    sentinel: str

    @property
    def key(self) -> str:
        return ".".join(self.path)


# `attribute=None` lee el texto visible del elemento.
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(("video", "source"), 'source[type="video/mp4"]', "src", "No video source found"),
    FieldRule(("video", "poster", "url"), "#video-poster", "src", "No poster found"),
    FieldRule(("video", "poster", "width"), "#video-poster", "width", "Unknown width"),
    FieldRule(("video", "poster", "height"), "#video-poster", "height", "Unknown height"),
    FieldRule(("metadata", "title"), 'meta[property="og:title"]', "content", "No title found"),
    FieldRule(
        ("metadata", "description"),
        'meta[property="og:description"]',
        "content",
        "No description found",
    ),
    FieldRule(("metadata", "views"), "#n-views", None, "Unknown views"),
    FieldRule(("metadata", "likes"), "#n-likes-video", None, "Unknown likes"),
    FieldRule(("metadata", "dislikes"), "#n-dislikes-video", None, "Unknown dislikes"),
    FieldRule(
        ("metadata", "uploadDate"),
        'meta[itemprop="uploadDate"]',
        "content",
        "Unknown upload date",
    ),
    FieldRule(("metadata", "duration"), 'meta[itemprop="duration"]', "content", "Unknown duration"),
)

SENTINELS: dict[str, str] = {rule.key: rule.sentinel for rule in FIELD_RULES}
