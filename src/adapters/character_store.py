"""Carga de personajes almacenados (JSON).

Formato:
    {"characters": [{"name": ..., "character_id": ..., "api_keys": [...], "skills": [...]}]}

El repo no guarda credenciales; el usuario apunta a su fichero con
`EVEMON_TOOLS_CHARACTERS_PATH` o `--characters`.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from core.domain.models import Character


class CharactersFile(BaseModel):
    characters: list[Character] = Field(default_factory=list)


def load_characters(path: Path) -> list[Character]:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return CharactersFile.model_validate(data).characters


def characters_with_keys(characters: list[Character]) -> list[Character]:
    """Personajes con al menos una key, por nombre (los elegibles en modo interno)."""

    return sorted((c for c in characters if c.api_keys), key=lambda c: c.name)


def find_character(characters: list[Character], name: str) -> Character | None:
    wanted = name.strip().lower()
    return next((c for c in characters if c.name.lower() == wanted), None)
