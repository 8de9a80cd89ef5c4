"""Orquestación de los exports (plan, backup, personaje, documento de la API).

This module ties the pure encoders to the atomic writer. Every user-facing
collaborator (overwrite confirmation, text options prompt, screenshot
renderer) is passed in explicitly, so the CLI, tests or any other front-end
drive the same flow. Recoverable failures come back as an `ExportResult`
with the message to show; nothing here prints.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable

from adapters.atomic_writer import Producer, bytes_producer, overwrite_or_warn, text_producer
from adapters.document_capture import capture_xml_document
from core.domain.export_formats import PLANS_BACKUP_EXTENSION, CharacterFormat, PlanFormat
from core.domain.models import Character, Plan, PlanExportSettings
from core.errors import DocumentFormatError, ExportWriteError
from core.interfaces.exporters import ConfirmOverwrite, ImageRenderer, PromptPlanSettings
from core.services.content_encoder import encode, encode_plans_backup, render_image

logger = logging.getLogger(__name__)

WRITE_ERROR_MESSAGE = "There was an error writing out the file:\n\n{error}"
XML_ERROR_MESSAGE = "There was an error while converting to XML format.\r\nThe message was:\r\n{error}"
NO_CCP_XML_MESSAGE = "This character has never been downloaded from CCP, cannot find it in the XML cache."
IMAGE_ERROR_MESSAGE = "There was an error rendering the character image:\n\n{error}"

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class ExportStatus(str, Enum):
    WRITTEN = "written"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    status: ExportStatus
    path: Path
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.WRITTEN


def sanitize_filename(name: str) -> str:
    return _INVALID_FILENAME_CHARS.sub("-", name)


def default_plan_filename(plan: Plan, fmt: PlanFormat, *, character_name: str | None = None) -> str:
    owner = character_name or plan.character_name or "Unknown"
    return sanitize_filename(f"{owner} - {plan.name}") + fmt.extension


def default_backup_filename(character_name: str) -> str:
    return sanitize_filename(f"{character_name} - Plans Backup") + PLANS_BACKUP_EXTENSION


def default_character_filename(character: Character, fmt: CharacterFormat, *, plan: Plan | None = None) -> str:
    suffix = f" (after plan {plan.name})" if plan is not None else ""
    return sanitize_filename(f"{character.name}{suffix}") + fmt.extension


def _write(destination: Path, producer: Producer, confirm: ConfirmOverwrite | None) -> ExportResult:
    try:
        written = overwrite_or_warn(destination, producer, confirm=confirm)
    except ExportWriteError as exc:
        logger.exception("Export to %s failed", destination)
        return ExportResult(ExportStatus.FAILED, destination, WRITE_ERROR_MESSAGE.format(error=exc))

    if not written:
        return ExportResult(ExportStatus.CANCELLED, destination)
    logger.info("Exported %s", destination)
    return ExportResult(ExportStatus.WRITTEN, destination)


def export_plan(
    plan: Plan,
    fmt: PlanFormat,
    destination: Path,
    *,
    confirm_overwrite: ConfirmOverwrite | None = None,
    prompt_settings: PromptPlanSettings | None = None,
) -> ExportResult:
    """Exporta un plan; EMP se escribe comprimido.

    Para TEXT las opciones se piden antes de codificar; si el usuario cancela
    no se produce contenido ni se toca el destino.
    """

    settings: PlanExportSettings | None = None
    if fmt is PlanFormat.TEXT:
        settings = prompt_settings(plan) if prompt_settings is not None else PlanExportSettings()
        if settings is None:
            logger.debug("Plan text export cancelled at the options prompt")
            return ExportResult(ExportStatus.CANCELLED, destination)

    content = encode(plan, fmt, settings=settings)
    return _write(destination, text_producer(content, compress=fmt.compressed), confirm_overwrite)


def export_plans_backup(
    plans: Iterable[Plan],
    destination: Path,
    *,
    confirm_overwrite: ConfirmOverwrite | None = None,
) -> ExportResult:
    content = encode_plans_backup(plans)
    return _write(destination, text_producer(content, compress=True), confirm_overwrite)


def export_character(
    character: Character,
    fmt: CharacterFormat,
    destination: Path,
    *,
    plan: Plan | None = None,
    image_renderer: ImageRenderer | None = None,
    confirm_overwrite: ConfirmOverwrite | None = None,
) -> ExportResult:
    """Exporta un personaje (o el personaje tras `plan`) en `fmt`."""

    if fmt.is_image:
        if plan is not None:
            raise ValueError("PNG is not available for an after-plan export")
        if image_renderer is None:
            raise ValueError("PNG export requires an ImageRenderer")
        try:
            image = render_image(character, image_renderer)
        except (OSError, ValueError) as exc:
            logger.exception("Rendering %s failed", character.name)
            return ExportResult(ExportStatus.FAILED, destination, IMAGE_ERROR_MESSAGE.format(error=exc))
        return _write(destination, bytes_producer(image), confirm_overwrite)

    content = encode(character, fmt, plan=plan)
    if fmt is CharacterFormat.CCP_XML and not content:
        logger.warning("No cached CCP XML for %s", character.name)
        return ExportResult(ExportStatus.SKIPPED, destination, NO_CCP_XML_MESSAGE)

    return _write(destination, text_producer(content), confirm_overwrite)


def save_document(
    content: str,
    destination: Path,
    *,
    confirm_overwrite: ConfirmOverwrite | None = None,
) -> ExportResult:
    """Guarda el resultado de una llamada a la API como XML indentado."""

    try:
        xml = capture_xml_document(content)
    except DocumentFormatError as exc:
        return ExportResult(ExportStatus.FAILED, destination, XML_ERROR_MESSAGE.format(error=exc))
    return _write(destination, text_producer(xml), confirm_overwrite)
