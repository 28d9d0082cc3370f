"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El host de la API se resuelve de forma explícita a partir de un `Environment`,
  nunca mutando un objeto global.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.environment import Environment


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "sdk-versions"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "sdk-versions"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "sdk-versions"
    return Path.home() / ".config" / "sdk-versions"


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


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# sdk-versions user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SDK_VERSIONS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    staging_host: str = Field(
        default="staging.expo.io",
        min_length=1,
        description="Host de la API de staging.",
    )
    production_host: str = Field(
        default="expo.io",
        min_length=1,
        description="Host de la API de producción.",
    )
    api_path: str = Field(
        default="/--/api/v2",
        description="Prefijo de la API de versiones.",
    )
    default_environment: Environment = Field(
        default=Environment.STAGING,
        description="Entorno usado cuando la CLI no recibe `--production`.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="sdk-versions/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para las peticiones a la API.",
    )
    session_secret: str | None = Field(
        default=None,
        description="Secreto de sesión enviado en la cabecera `Expo-Session`.",
    )

    def host_for(self, environment: Environment) -> str:
        if environment is Environment.PRODUCTION:
            return self.production_host
        return self.staging_host

    def base_url_for(self, environment: Environment) -> str:
        return f"https://{self.host_for(environment)}{self.api_path.rstrip('/')}"

    def versions_url_for(self, environment: Environment) -> str:
        """Public URL where the operator can inspect the document."""

        return f"{self.base_url_for(environment)}/versions"
