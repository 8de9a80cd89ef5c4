"""Proveedor de la API: URLs de los métodos y descarga del documento.

Por qué separado del resolver:
- El resolver solo decide parámetros; aquí se construye la URL final y se
  hace (si se pide) la llamada HTTP.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.api_methods import APIMethod
from core.domain.api_requests import NoEligibleCredential, Resolution


@dataclass(frozen=True)
class RequestUrl:
    url: httpx.URL
    error_text: str = ""

    @property
    def has_error(self) -> bool:
        return bool(self.error_text)


def build_method_url(method: APIMethod, settings: AppSettings | None = None) -> httpx.URL:
    settings = settings or AppSettings()
    return httpx.URL(settings.api_base_url.rstrip("/") + method.path)


def build_request_url(resolution: Resolution, settings: AppSettings | None = None) -> RequestUrl:
    """URL completa de la llamada.

    Sin key elegible se devuelve la URL del método sin query y el mensaje de
    error para mostrar; la llamada no llevará credencial.
    """

    url = build_method_url(resolution.method, settings)
    if isinstance(resolution, NoEligibleCredential):
        return RequestUrl(url=url, error_text=resolution.message)
    if resolution.is_empty:
        return RequestUrl(url=url)
    return RequestUrl(url=url.copy_merge_params(list(resolution.parameters)))


def fetch_document(
    url: httpx.URL | str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Descarga el documento XML de la llamada (errores HTTP se propagan)."""

    with build_client(settings, transport=transport) as client:
        response = client.get(url)
    response.raise_for_status()
    return response.text
