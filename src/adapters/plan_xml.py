"""Serialización XML de planes (formatos .xml, .emp y .epb).

Por qué XML:
- Es el formato de intercambio de planes; .emp y .epb son el mismo XML
  comprimido con gzip (la compresión la decide el writer, no este módulo).
"""

from __future__ import annotations

import gzip
import logging
import xml.etree.ElementTree as ET
import zlib
from pathlib import Path
from typing import Iterable

from core.domain.models import Plan, PlanEntry
from core.errors import DocumentFormatError

logger = logging.getLogger(__name__)

_XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
_GZIP_MAGIC = b"\x1f\x8b"


def _plan_element(plan: Plan) -> ET.Element:
    root = ET.Element("plan", {"name": plan.name})
    if plan.character_name:
        root.set("owner", plan.character_name)
    if plan.description:
        ET.SubElement(root, "description").text = plan.description

    for entry in plan.entries:
        node = ET.SubElement(
            root,
            "entry",
            {
                "skill": entry.skill_name,
                "level": str(entry.level),
                "priority": str(entry.priority),
            },
        )
        if entry.notes:
            ET.SubElement(node, "notes").text = entry.notes
    return root


def _to_string(root: ET.Element) -> str:
    ET.indent(root, space="  ")
    return _XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"


def plan_to_xml(plan: Plan) -> str:
    return _to_string(_plan_element(plan))


def plans_to_xml(plans: Iterable[Plan]) -> str:
    """Copia de seguridad: todos los planes bajo un único `<plans>`."""

    root = ET.Element("plans")
    for plan in plans:
        root.append(_plan_element(plan))
    return _to_string(root)


def _plan_from_element(node: ET.Element) -> Plan:
    entries = [
        PlanEntry(
            skill_name=entry.get("skill", ""),
            level=int(entry.get("level", "0")),
            priority=int(entry.get("priority", "3")),
            notes=entry.findtext("notes"),
        )
        for entry in node.findall("entry")
    ]
    return Plan(
        name=node.get("name", ""),
        character_name=node.get("owner"),
        description=node.findtext("description"),
        entries=entries,
    )


def plans_from_xml(content: str) -> list[Plan]:
    """Lee uno (`<plan>`) o varios (`<plans>`) planes.

    Cualquier XML mal formado o con valores inválidos es `DocumentFormatError`.
    """

    try:
        root = ET.fromstring(content.lstrip("\ufeff"))
        if root.tag == "plans":
            return [_plan_from_element(node) for node in root.findall("plan")]
        if root.tag == "plan":
            return [_plan_from_element(root)]
    except ET.ParseError as exc:
        logger.exception("Malformed plan XML")
        raise DocumentFormatError(str(exc)) from exc
    except ValueError as exc:  # incluye ValidationError
        logger.exception("Invalid plan content")
        raise DocumentFormatError(str(exc)) from exc

    raise DocumentFormatError(f"Unexpected root element <{root.tag}>")


def plan_from_xml(content: str) -> Plan:
    plans = plans_from_xml(content)
    if len(plans) != 1:
        raise DocumentFormatError(f"Expected a single plan, found {len(plans)}")
    return plans[0]


def load_plans_file(path: Path) -> list[Plan]:
    """Carga .xml, .emp o .epb (el gzip se detecta por la firma, no la extensión)."""

    raw = path.read_bytes()
    if raw.startswith(_GZIP_MAGIC):
        try:
            raw = gzip.decompress(raw)
        except (EOFError, OSError, zlib.error) as exc:
            logger.exception("Corrupt compressed plan file %s", path)
            raise DocumentFormatError(f"{path.name}: {exc}") from exc
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DocumentFormatError(str(exc)) from exc
    return plans_from_xml(text)
