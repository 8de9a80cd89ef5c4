"""Listado y clasificación de los métodos de la API.

El orden de `list_operations` es un contrato de presentación: el selector del
tester agrupa por tipo y ordena por nombre dentro de cada grupo.
"""

from __future__ import annotations

from core.domain.api_methods import (
    API_METHODS,
    SERVER_STATUS,
    APIMethod,
    APIMethodCategory,
    parent_of,
)


def _by_name(method: APIMethod) -> str:
    return method.name


def supplemental_scope(method: APIMethod) -> APIMethodCategory | None:
    """Categoría del método padre (personaje o corporación) de un suplementario."""

    parent = parent_of(method)
    return parent.category if parent is not None else None


def has_identifier_argument(method: APIMethod | None) -> bool:
    """True si el método necesita un id/nombre libre introducido por el usuario."""

    return method is not None and method.has_id_or_name


def list_operations() -> list[APIMethod]:
    """Métodos en el orden del selector.

    Orden:
    1) ServerStatus
    2) genéricos sin key, por nombre
    3) genéricos de cuenta (sin suplementarios), por nombre
    4) personaje + suplementarios de personaje, por nombre
    5) corporación + suplementarios de corporación, por nombre
    """

    methods = list(API_METHODS.values())
    generic = [m for m in methods if m.category is APIMethodCategory.GENERIC and m is not SERVER_STATUS]

    non_account = sorted((m for m in generic if not m.requires_api_key), key=_by_name)
    account = sorted(
        (m for m in generic if m.requires_api_key and not m.is_supplemental),
        key=_by_name,
    )
    character = sorted(
        [m for m in methods if m.category is APIMethodCategory.CHARACTER]
        + [m for m in generic if supplemental_scope(m) is APIMethodCategory.CHARACTER],
        key=_by_name,
    )
    corporation = sorted(
        [m for m in methods if m.category is APIMethodCategory.CORPORATION]
        + [m for m in generic if supplemental_scope(m) is APIMethodCategory.CORPORATION],
        key=_by_name,
    )

    return [SERVER_STATUS, *non_account, *account, *character, *corporation]
