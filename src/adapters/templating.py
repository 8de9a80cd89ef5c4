"""Entorno Jinja2 compartido por los exports de texto y HTML.

Por qué Jinja2:
- El formato de los exports vive en plantillas editables, no en código.
- Autoescape solo para .html/.xml; las plantillas .txt son texto literal.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_ROMAN = ("0", "I", "II", "III", "IV", "V")


def roman(level: int) -> str:
    return _ROMAN[level] if 0 <= level < len(_ROMAN) else str(level)


def duration(value: timedelta | None) -> str:
    """`1d 2h 3m` (sin segundos); vacío si no hay dato."""

    if value is None:
        return ""
    total = int(value.total_seconds())
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes or not parts:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def isk(value: float) -> str:
    return f"{value:,.2f} ISK"


@lru_cache(maxsize=1)
def get_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["roman"] = roman
    env.filters["duration"] = duration
    env.filters["isk"] = isk
    return env
