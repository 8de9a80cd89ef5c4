"""Errores del Core.

Por qué una jerarquía propia:
- Las fallas recuperables (disco, XML mal formado) se convierten en mensajes
  para el usuario en el borde del servicio; el resto se propaga.
"""

from __future__ import annotations

from pathlib import Path


class EvemonToolsError(Exception):
    """Base de los errores de la aplicación."""


class ExportWriteError(EvemonToolsError):
    """Falló la escritura de un export; el destino original sigue intacto."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = path


class DocumentFormatError(EvemonToolsError):
    """Contenido XML mal formado (documento capturado o plan importado)."""
