"""Logging de la aplicación.

Usa `logging` estándar con `RichHandler` para que la salida del servidor y de
la CLI compartan el mismo estilo de consola. Los logs van a stderr: stdout
queda libre para la salida de comandos como `info --json`.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

APP_LOGGER = "video_info"
ACCESS_LOGGER = "video_info.access"

# Loggers de terceros que a nivel INFO registran cada request saliente.
QUIET_LOGGERS = ("httpx", "httpcore")

_configured = False


def configure_logging(level: str | int = "INFO") -> None:
    """Instala el handler Rich en el logger raíz (idempotente)."""

    global _configured
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    if not _configured:
        handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logging.basicConfig(level=level, handlers=[handler], force=True)
        _configured = True

    logging.getLogger().setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> logging.Logger:
    if not name:
        return logging.getLogger(APP_LOGGER)
    return logging.getLogger(f"{APP_LOGGER}.{name}")
