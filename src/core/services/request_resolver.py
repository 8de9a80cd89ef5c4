"""Resolución de parámetros de una llamada a la API.

Dado un método, un contexto de autenticación y el texto id/nombre, produce el
conjunto ordenado de parámetros que espera el protocolo remoto.

Reglas generales:
- Modo interno: la key se busca en el personaje elegido, filtrando por
  capacidad. Si no hay ninguna, el resultado es `NoEligibleCredential`, nunca
  un conjunto de parámetros a medias.
- Modo externo: se usan los tres campos crudos tal cual, sin comprobar nada.
  Solo CharacterInfo y CorporationSheet caen a un conjunto "solo id" cuando
  faltan ambos campos de credencial.
"""

from __future__ import annotations

import logging

from core.domain.api_methods import APIMethod, APIMethodCategory, ExtraParameter, parent_of
from core.domain.api_requests import (
    AuthenticationContext,
    ExternalAuth,
    InternalAuth,
    NoEligibleCredential,
    Resolution,
    ResolvedRequest,
)
from core.domain.models import APIKey

logger = logging.getLogger(__name__)


def _shape(
    method: APIMethod,
    *,
    key_id: str,
    verification_code: str,
    character_id: str,
    id_or_name: str,
) -> ResolvedRequest:
    params: list[tuple[str, str]] = [("keyID", key_id), ("vCode", verification_code)]

    if method.is_supplemental or method.category is APIMethodCategory.CHARACTER:
        params.append(("characterID", character_id))

    extra = method.extra
    if extra is ExtraParameter.IDS:
        params.append(("ids", id_or_name))
    elif extra is ExtraParameter.CONTRACT_ID:
        params.append(("contractID", id_or_name))
    elif extra is ExtraParameter.CHARACTER_AND_IDS:
        params.extend((("characterID", character_id), ("ids", id_or_name)))
    elif extra is ExtraParameter.EXTENDED:
        params.append(("extended", "1"))
    elif extra is ExtraParameter.ITEM_ID:
        params.append(("itemID", id_or_name))

    return ResolvedRequest(method=method, parameters=tuple(params))


def _from_key(method: APIMethod, key: APIKey, character_id: int, id_or_name: str) -> ResolvedRequest:
    return _shape(
        method,
        key_id=str(key.key_id),
        verification_code=key.verification_code,
        character_id=str(character_id),
        id_or_name=id_or_name,
    )


def _from_external(method: APIMethod, auth: ExternalAuth, id_or_name: str) -> ResolvedRequest:
    return _shape(
        method,
        key_id=auth.key_id,
        verification_code=auth.verification_code,
        character_id=auth.character_id,
        id_or_name=id_or_name,
    )


def _no_key(method: APIMethod) -> NoEligibleCredential:
    logger.info("No API key with access to %s", method.name)
    return NoEligibleCredential(method=method)


def _resolve_internal(
    method: APIMethod,
    auth: InternalAuth,
    id_or_name: str,
    *,
    capability: APIMethod | None,
) -> Resolution:
    character = auth.character
    if character is None:
        return ResolvedRequest(method=method)

    if capability is None:
        key = character.find_character_or_account_key()
    else:
        key = character.find_api_key_with_access(capability)

    if key is None:
        return _no_key(method)
    return _from_key(method, key, character.character_id, id_or_name)


def _resolve_generic(method: APIMethod, auth: AuthenticationContext, id_or_name: str) -> Resolution:
    if method.extra is ExtraParameter.NAMES:
        return ResolvedRequest(method=method, parameters=(("names", id_or_name),))

    if not method.requires_api_key:
        if method.extra is ExtraParameter.IDS:
            return ResolvedRequest(method=method, parameters=(("ids", id_or_name),))
        return ResolvedRequest(method=method)

    if isinstance(auth, InternalAuth):
        # Los suplementarios exigen la capacidad del método padre.
        return _resolve_internal(method, auth, id_or_name, capability=parent_of(method))
    return _from_external(method, auth, id_or_name)


def _resolve_scoped(method: APIMethod, auth: AuthenticationContext, id_or_name: str) -> Resolution:
    if isinstance(auth, InternalAuth):
        return _resolve_internal(method, auth, id_or_name, capability=method)

    if method.id_only_fallback and not auth.key_id and not auth.verification_code:
        return ResolvedRequest(method=method, parameters=((method.id_only_fallback, auth.character_id),))
    return _from_external(method, auth, id_or_name)


def resolve(method: APIMethod, auth: AuthenticationContext, id_or_name: str = "") -> Resolution:
    """Resuelve los parámetros de `method`.

    `id_or_name` solo se usa en los métodos que lo declaran
    (`APIMethod.has_id_or_name`).
    """

    if method.category is APIMethodCategory.GENERIC:
        return _resolve_generic(method, auth, id_or_name)
    return _resolve_scoped(method, auth, id_or_name)
