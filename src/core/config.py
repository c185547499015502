"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/HTML) lean config de forma consistente.

Todos los defaults reproducen el comportamiento sin configuración: API pública
de GitHub, TTL de 5 minutos.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "repo-cards"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "repo-cards"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "repo-cards"
    return Path.home() / ".config" / "repo-cards"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_CARDS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base: str = Field(
        default="https://api.github.com/repos",
        min_length=8,
        description="Base de la API REST de repositorios (sin barra final).",
    )
    host_marker: str = Field(
        default="github.com",
        min_length=1,
        description="Host que identifica enlaces a repositorios en las tarjetas.",
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Tiempo de vida de cada entrada de la caché (segundos).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="repo-cards/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para la API (GitHub lo exige).",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging por defecto de la CLI.",
    )
