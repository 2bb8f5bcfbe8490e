"""Configuración de la aplicación.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los servicios del Core (`unwrap`) no leen configuración: solo adaptadores y
  CLI lo hacen, así el unwrap es idéntico en cualquier entorno.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "shopify-unwrap"
ENV_PREFIX = "SHOPIFY_UNWRAP_"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves sin prefijo se normalizan a `SHOPIFY_UNWRAP_<KEY>`.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    for key, value in values.items():
        if value is None:
            continue
        name = key.strip().upper()
        if not name.startswith(ENV_PREFIX):
            name = ENV_PREFIX + name
        existing[name] = value

    lines = ["# shopify-unwrap user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la CLI y los adaptadores.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    json_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentación del JSON impreso/exportado (0 = compacto).",
    )
    sort_keys: bool = Field(
        default=False,
        description="Ordenar claves al serializar resultados.",
    )
    show_raw_errors: bool = Field(
        default=False,
        description="Incluir los errores crudos en la salida de fallos de la CLI.",
    )
    error_exit_code: int = Field(
        default=1,
        ge=1,
        le=255,
        description="Código de salida cuando el unwrap falla.",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=r"^(?i:debug|info|warning|error|critical)$",
        description="Nivel de logging de la CLI.",
    )
