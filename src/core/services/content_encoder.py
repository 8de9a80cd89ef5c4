"""Codificación de objetos del dominio al contenido de un export.

Transformación pura: objeto + formato -> texto (o bytes para la imagen).
La compresión de EMP/EPB no se decide aquí sino en el writer.
"""

from __future__ import annotations

from typing import Iterable

from adapters.character_exporter import (
    character_ccp_xml,
    render_character_eft,
    render_character_html,
    render_character_text,
    render_character_xml,
)
from adapters.plan_xml import plan_to_xml, plans_to_xml
from adapters.text_exporter import render_plan_text
from core.domain.export_formats import CharacterFormat, PlanFormat
from core.domain.models import Character, Plan, PlanExportSettings, Skill
from core.interfaces.exporters import ImageRenderer


def encode_plan(plan: Plan, fmt: PlanFormat, *, settings: PlanExportSettings | None = None) -> str:
    """EMP y XML producen el mismo XML; TEXT exige las opciones ya recogidas."""

    if fmt in (PlanFormat.EMP, PlanFormat.XML):
        return plan_to_xml(plan)
    if fmt is PlanFormat.TEXT:
        if settings is None:
            raise ValueError("Text export requires PlanExportSettings")
        return render_plan_text(plan, settings)
    raise ValueError(f"Unsupported plan format: {fmt!r}")


def encode_plans_backup(plans: Iterable[Plan]) -> str:
    return plans_to_xml(plans)


_CHARACTER_ENCODERS = {
    CharacterFormat.TEXT: render_character_text,
    CharacterFormat.EFT_CHR: render_character_eft,
    CharacterFormat.HTML: render_character_html,
    CharacterFormat.EVEMON_XML: render_character_xml,
    CharacterFormat.CCP_XML: character_ccp_xml,
}


def encode_character(character: Character, fmt: CharacterFormat, *, plan: Plan | None = None) -> str:
    """Contenido textual del personaje (opcionalmente tal como quedaría tras `plan`).

    PNG no es textual: usar `render_image`.
    """

    encoder = _CHARACTER_ENCODERS.get(fmt)
    if encoder is None:
        raise ValueError(f"Unsupported character format: {fmt!r}")
    if plan is not None:
        if fmt not in CharacterFormat.after_plan_formats():
            raise ValueError(f"{fmt.value} is not available for an after-plan export")
        character = character.after_plan(plan)
    return encoder(character)


def encode(obj: Plan | Character, fmt: PlanFormat | CharacterFormat, **kwargs) -> str:
    """Punto de entrada único: despacha por tipo de objeto y de formato."""

    if isinstance(obj, Plan) and isinstance(fmt, PlanFormat):
        return encode_plan(obj, fmt, **kwargs)
    if isinstance(obj, Character) and isinstance(fmt, CharacterFormat):
        return encode_character(obj, fmt, **kwargs)
    raise ValueError(f"Cannot encode {type(obj).__name__} as {fmt!r}")


def render_image(character: Character, renderer: ImageRenderer) -> bytes:
    return renderer.render(character)


def skills_plan(character: Character, selected: Iterable[Skill] | None = None) -> Plan:
    """Plan con los niveles ya entrenados (skills públicas o las seleccionadas)."""

    plan = Plan(name="Skills Plan", character_name=character.name)
    skills = selected if selected is not None else (s for s in character.skills if s.is_public)
    for skill in skills:
        plan.plan_to(skill.name, skill.level)
    return plan
