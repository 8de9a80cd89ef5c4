"""Contexto de autenticación y resultado de resolver una llamada a la API.

Por qué tipos explícitos:
- El modo interno/externo viaja como parámetro, no como estado global.
- "No hay key con acceso" es un valor propio (`NoEligibleCredential`), así que
  nadie puede confundir el mensaje con parámetros reales.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Union

import httpx

from core.domain.api_methods import APIMethod

if TYPE_CHECKING:
    from core.interfaces.credentials import CredentialSource


NO_API_KEY_WITH_ACCESS = "No API key with access to API call found"


@dataclass(frozen=True)
class InternalAuth:
    """Credenciales tomadas de un personaje almacenado (puede no haber ninguno elegido)."""

    character: CredentialSource | None = None
    mode: Literal["internal"] = field(default="internal", init=False)


@dataclass(frozen=True)
class ExternalAuth:
    """Tres campos crudos introducidos por el usuario; no se validan."""

    key_id: str = ""
    verification_code: str = ""
    character_id: str = ""
    mode: Literal["external"] = field(default="external", init=False)

    def __repr__(self) -> str:
        return f"ExternalAuth(key_id={self.key_id!r}, character_id={self.character_id!r})"


AuthenticationContext = Union[InternalAuth, ExternalAuth]


@dataclass(frozen=True)
class ResolvedRequest:
    """Parámetros ordenados listos para enviar.

    Solo guarda strings: no mantiene referencia a la key que los produjo.
    """

    method: APIMethod
    parameters: tuple[tuple[str, str], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.parameters

    @property
    def query(self) -> str:
        return str(httpx.QueryParams(list(self.parameters)))


@dataclass(frozen=True)
class NoEligibleCredential:
    """El personaje elegido no tiene ninguna key capaz de servir el método."""

    method: APIMethod
    message: str = NO_API_KEY_WITH_ACCESS


Resolution = Union[ResolvedRequest, NoEligibleCredential]
