"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `info` y `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.fields import SENTINELS
from core.domain.models import ExtractionResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("video-info-api", style="bold cyan")
    subtitle = Text("Metadata de páginas de video • Descarga MP4", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_video_table(result: ExtractionResult, *, title: str | None = None) -> Table:
    """Tabla campo/valor; los sentinels se muestran atenuados."""

    payload = result.model_dump(by_alias=True)
    rows = [
        ("video.source", payload["video"]["source"]),
        ("video.poster.url", payload["video"]["poster"]["url"]),
        ("video.poster.width", payload["video"]["poster"]["width"]),
        ("video.poster.height", payload["video"]["poster"]["height"]),
    ]
    rows.extend((f"metadata.{key}", value) for key, value in payload["metadata"].items())

    table = Table(title=title or "Video Info")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", overflow="fold")
    for key, value in rows:
        style = "dim" if SENTINELS.get(key) == value else None
        table.add_row(key, Text(value, style=style or ""))
    return table


def build_settings_table(values: dict[str, object]) -> Table:
    table = Table(title="Settings")
    table.add_column("Setting", style="bright_green", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in values.items():
        table.add_row(key, str(value))
    return table
