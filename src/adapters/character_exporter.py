"""Exportación de personajes.

Por qué está en adapters:
- Texto/HTML son plantillas Jinja2; XML y CHR son detalles de formato.
- El Core solo conoce el modelo `Character` (y el plan aplicado, si lo hay).

Formatos:
- texto y HTML legibles;
- CHR de EFT (`Skill=Nivel` por línea);
- XML propio (personaje + skills);
- XML de CCP: el último CharacterSheet descargado (vacío si nunca se bajó).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from itertools import groupby
from pathlib import Path

from adapters.templating import get_env
from core.domain.models import Character, Skill


def _skill_groups(character: Character) -> list[tuple[str, list[Skill]]]:
    skills = sorted(
        (s for s in character.skills if s.is_public),
        key=lambda s: (s.group or "Other", s.name),
    )
    return [(group, list(items)) for group, items in groupby(skills, key=lambda s: s.group or "Other")]


def render_character_text(character: Character) -> str:
    template = get_env().get_template("character.txt")
    return template.render(character=character, skill_groups=_skill_groups(character))


def render_character_html(character: Character) -> str:
    """Renderiza un HTML autocontenido del personaje."""

    template = get_env().get_template("character.html")
    return template.render(character=character, skill_groups=_skill_groups(character))


def render_character_eft(character: Character) -> str:
    lines = [f"{s.name}={s.level}" for s in character.skills if s.level > 0]
    return "\n".join(lines) + "\n" if lines else ""


def render_character_xml(character: Character) -> str:
    root = ET.Element(
        "character",
        {"name": character.name, "id": str(character.character_id)},
    )
    if character.corporation_name:
        root.set("corporation", character.corporation_name)
    if character.corporation_id is not None:
        root.set("corporationID", str(character.corporation_id))
    ET.SubElement(root, "balance").text = f"{character.balance:.2f}"

    skills = ET.SubElement(root, "skills")
    for skill in character.skills:
        attrs = {
            "name": skill.name,
            "level": str(skill.level),
            "skillpoints": str(skill.skill_points),
        }
        if skill.group:
            attrs["group"] = skill.group
        ET.SubElement(skills, "skill", attrs)

    ET.indent(root, space="  ")
    return '<?xml version="1.0" encoding="utf-8"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def character_ccp_xml(character: Character) -> str:
    return character.ccp_xml or ""


_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class StoredScreenshot:
    """`ImageRenderer` que sirve una captura PNG ya guardada en disco."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def render(self, character: Character) -> bytes:
        data = self._path.read_bytes()
        if not data.startswith(_PNG_SIGNATURE):
            raise ValueError(f"{self._path} is not a PNG image")
        return data
