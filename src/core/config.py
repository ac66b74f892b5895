"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la API/CLI.
- Un único valor `AppSettings` se construye al arrancar y se pasa explícitamente
  al servidor y a los adaptadores HTTP.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    `PORT` se lee sin prefijo (convención de las plataformas de despliegue);
    el resto de variables usan el prefijo `VIDEO_INFO_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="VIDEO_INFO_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    host: str = Field(
        default="0.0.0.0",
        min_length=1,
        description="Interfaz en la que escucha el servidor HTTP.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "VIDEO_INFO_PORT", "port"),
        description="Puerto de escucha del servidor HTTP.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request saliente (página y stream de video).",
    )
    user_agent: str = Field(
        default="video-info-api/0.1",
        min_length=1,
        description="User-Agent para las peticiones salientes.",
    )
    stream_chunk_size: int = Field(
        default=64 * 1024,
        ge=1024,
        description="Tamaño de bloque (bytes) al reenviar el video al cliente.",
    )

    rate_limit_max: int = Field(
        default=100,
        ge=0,
        description="Solicitudes máximas por cliente y ventana (0 desactiva el límite).",
    )
    rate_limit_window_seconds: float = Field(
        default=15 * 60,
        gt=0,
        description="Duración de la ventana del rate limiter (segundos).",
    )

    log_level: str = Field(
        default="INFO",
        min_length=1,
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
