"""CLI principal (Typer).

Comandos:
- `serve`: arranca el servidor HTTP (uvicorn) con la app de `api.app`.
- `info`: resuelve una URL una vez y muestra el resultado (tabla o JSON).
- `doctor`: diagnóstico de configuración y conectividad.
"""

from __future__ import annotations

import asyncio
import json

import typer
import uvicorn
from rich.console import Console

from adapters.video_resolver import HttpVideoResolver
from api.app import create_app
from cli import doctor
from cli.ui_components import build_video_table, print_banner
from core.config import AppSettings
from core.errors import VideoInfoError
from core.logging import configure_logging, get_logger

app = typer.Typer(no_args_is_help=True, help="Video page metadata API and downloader.")
app.command(name="doctor")(doctor.run)

_console = Console()
logger = get_logger("cli")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind (default: settings)."),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on (default: PORT or 3000)."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    """Run the HTTP API."""

    overrides = {
        key: value
        for key, value in {"host": host, "port": port, "log_level": log_level}.items()
        if value is not None
    }
    settings = AppSettings(**overrides)
    configure_logging(settings.log_level)

    print_banner(_console)
    logger.info("Servidor ejecutándose en http://localhost:%d", settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
    )


@app.command()
def info(
    url: str = typer.Argument(..., help="Video page URL."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
) -> None:
    """Resolve a video page once and print the extracted fields."""

    settings = AppSettings()
    configure_logging(settings.log_level)

    try:
        result = asyncio.run(HttpVideoResolver(settings).resolve(url))
    except VideoInfoError as exc:
        _console.print(f"[red]Extraction failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True), ensure_ascii=False, indent=2))
        return
    _console.print(build_video_table(result, title=url))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
