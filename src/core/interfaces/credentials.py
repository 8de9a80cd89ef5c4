"""Contrato del almacén de credenciales.

Por qué Protocol:
- El resolver no sabe dónde viven las keys (JSON, base de datos, UI); solo
  necesita preguntar por la primera key con acceso a un método.
- `core.domain.models.Character` lo cumple, y los tests pueden usar stubs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.api_methods import APIMethod
from core.domain.models import APIKey


@runtime_checkable
class CredentialSource(Protocol):
    """Keys de un personaje, consultadas en modo interno."""

    @property
    def character_id(self) -> int: ...

    def find_api_key_with_access(self, method: APIMethod) -> APIKey | None:
        """Primera key capaz de servir `method`, o `None`."""

        ...

    def find_character_or_account_key(self) -> APIKey | None:
        """Primera key de tipo cuenta o personaje, o `None`."""

        ...
