"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import FETCH_ERRORS, build_async_client
from cli.ui_components import build_settings_table
from core.config import AppSettings

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except FETCH_ERRORS as exc:
        return False, str(exc) or type(exc).__name__


def run(
    url: str = typer.Option(
        "https://example.com",
        "--url",
        help="URL used for the outbound connectivity check.",
    ),
) -> None:
    """Show effective settings and run an outbound HTTP check."""

    settings = AppSettings()
    _console.print(build_settings_table(settings.model_dump()))

    table = Table(title="video-info-api Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Listening port", "OK", f"{settings.host}:{settings.port}")
    if settings.rate_limit_max:
        table.add_row(
            "Rate limit",
            "OK",
            f"{settings.rate_limit_max} req / {settings.rate_limit_window_seconds:g}s per client",
        )
    else:
        table.add_row("Rate limit", "DISABLED", "VIDEO_INFO_RATE_LIMIT_MAX=0")

    ok_http, detail_http = asyncio.run(_check_http(url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)
    if not ok_http:
        raise typer.Exit(code=1)
