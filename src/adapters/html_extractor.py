"""Extracción de campos desde el HTML de una página de video.

Best-effort: ningún campo ausente es un error. Cada regla de
`core.domain.fields.FIELD_RULES` se evalúa de forma independiente; el primer
elemento que coincide con el selector gana.
"""

from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Tag

from core.domain.fields import FIELD_RULES, FieldRule
from core.domain.models import ExtractionResult


def _read(node: Tag | None, rule: FieldRule) -> str | None:
    if node is None:
        return None
    if rule.attribute is None:
        return node.get_text()

    value = node.get(rule.attribute)
    if value is None:
        return None
    # Atributos multi-valor (class, rel...) llegan como lista.
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def extract_fields(html: str) -> dict[str, Any]:
    """Devuelve el payload anidado (claves JSON) con sentinels ya aplicados."""

    soup = BeautifulSoup(html or "", "html.parser")
    payload: dict[str, Any] = {}
    for rule in FIELD_RULES:
        value = _read(soup.select_one(rule.selector), rule)
        target = payload
        for part in rule.path[:-1]:
            target = target.setdefault(part, {})
        # Vacío equivale a ausente; los valores no se recortan ni validan.
        target[rule.path[-1]] = value if value else rule.sentinel
    return payload


def extract_video_info(html: str) -> ExtractionResult:
    return ExtractionResult.model_validate(extract_fields(html))
