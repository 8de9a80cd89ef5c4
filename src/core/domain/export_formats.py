"""Formatos de exportación y sus extensiones fijas."""

from __future__ import annotations

from enum import Enum


class PlanFormat(str, Enum):
    """Formatos de un plan (el orden es el del diálogo de guardado)."""

    EMP = "emp"
    XML = "xml"
    TEXT = "txt"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def compressed(self) -> bool:
        return self is PlanFormat.EMP


# Copia de seguridad de todos los planes: XML comprimido, igual que EMP.
PLANS_BACKUP_EXTENSION = ".epb"


class CharacterFormat(str, Enum):
    """Formatos de export de un personaje."""

    TEXT = "txt"
    EFT_CHR = "chr"
    HTML = "html"
    EVEMON_XML = "evemon-xml"
    CCP_XML = "ccp-xml"
    PNG = "png"

    @property
    def extension(self) -> str:
        if self in (CharacterFormat.EVEMON_XML, CharacterFormat.CCP_XML):
            return ".xml"
        return f".{self.value}"

    @property
    def is_image(self) -> bool:
        return self is CharacterFormat.PNG

    @classmethod
    def after_plan_formats(cls) -> tuple[CharacterFormat, ...]:
        """Formatos válidos para el personaje "tras el plan" (sin caché CCP ni imagen)."""

        return (cls.TEXT, cls.EFT_CHR, cls.HTML, cls.EVEMON_XML)
