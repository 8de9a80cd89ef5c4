"""Colaboradores externos de la exportación.

Por qué Protocol:
- La captura de pantalla del monitor de personaje y los diálogos de la UI no
  se diseñan aquí; se invocan a través de estos contratos.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Protocol, runtime_checkable

from core.domain.models import Character, Plan, PlanExportSettings


@runtime_checkable
class ImageRenderer(Protocol):
    """Produce la imagen PNG de un personaje (bytes crudos)."""

    def render(self, character: Character) -> bytes: ...


# Pregunta si se sobrescribe un destino existente.
ConfirmOverwrite = Callable[[Path], bool]

# Pide las opciones de export a texto; `None` cancela el export completo.
PromptPlanSettings = Callable[[Plan], Optional[PlanExportSettings]]
