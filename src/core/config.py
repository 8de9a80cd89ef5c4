"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP, exports) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import MarkupType, PlanExportSettings


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "evemon-tools"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "evemon-tools"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "evemon-tools"
    return Path.home() / ".config" / "evemon-tools"


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

    lines = ["# evemon-tools user config (.env)"]
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
        env_prefix="EVEMON_TOOLS_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="https://api.eveonline.com",
        min_length=8,
        description="Proveedor de la API XML.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="evemon-tools/0.1",
        min_length=1,
        description="User-Agent para las llamadas a la API.",
    )

    characters_path: Path | None = Field(
        default=None,
        description="JSON con los personajes almacenados y sus API keys.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel del logger raíz (DEBUG, INFO, WARNING, ...).",
    )

    # Opciones por defecto del export de planes a texto
    plan_text_markup: MarkupType = Field(default=MarkupType.NONE)
    plan_text_entry_number: bool = True
    plan_text_training_times: bool = False
    plan_text_footer_count: bool = True
    plan_text_footer_total_time: bool = False

    def plan_text_settings(self) -> PlanExportSettings:
        return PlanExportSettings(
            markup=self.plan_text_markup,
            entry_number=self.plan_text_entry_number,
            entry_training_times=self.plan_text_training_times,
            footer_count=self.plan_text_footer_count,
            footer_total_time=self.plan_text_footer_total_time,
        )


def plan_text_env_vars(settings: PlanExportSettings) -> dict[str, str]:
    """Variables .env para guardar `settings` como opciones por defecto."""

    return {
        "EVEMON_TOOLS_PLAN_TEXT_MARKUP": settings.markup.value,
        "EVEMON_TOOLS_PLAN_TEXT_ENTRY_NUMBER": str(settings.entry_number).lower(),
        "EVEMON_TOOLS_PLAN_TEXT_TRAINING_TIMES": str(settings.entry_training_times).lower(),
        "EVEMON_TOOLS_PLAN_TEXT_FOOTER_COUNT": str(settings.footer_count).lower(),
        "EVEMON_TOOLS_PLAN_TEXT_FOOTER_TOTAL_TIME": str(settings.footer_total_time).lower(),
    }
