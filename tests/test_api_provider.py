from __future__ import annotations

import httpx
import pytest

from adapters.api_provider import build_method_url, build_request_url, fetch_document
from core.config import AppSettings
from core.domain.api_methods import SERVER_STATUS, get_method
from core.domain.api_requests import NO_API_KEY_WITH_ACCESS, ExternalAuth, InternalAuth
from core.domain.models import Character
from core.services.request_resolver import resolve


def test_method_url_joins_base_and_path(settings: AppSettings) -> None:
    slashed = settings.model_copy(update={"api_base_url": "https://api.example.test/"})

    assert str(build_method_url(SERVER_STATUS, slashed)) == "https://api.example.test/server/ServerStatus.xml.aspx"


def test_parameters_become_the_query(settings: AppSettings, alice: Character) -> None:
    resolution = resolve(get_method("Locations"), InternalAuth(character=alice), "12345")

    request_url = build_request_url(resolution, settings)

    assert not request_url.has_error
    assert str(request_url.url) == (
        "https://api.example.test/char/Locations.xml.aspx"
        "?keyID=1001&vCode=abc&characterID=90000001&ids=12345"
    )


def test_no_eligible_key_keeps_bare_url(settings: AppSettings, keyless: Character) -> None:
    resolution = resolve(get_method("Locations"), InternalAuth(character=keyless), "1")

    request_url = build_request_url(resolution, settings)

    assert request_url.has_error
    assert request_url.error_text == NO_API_KEY_WITH_ACCESS
    assert str(request_url.url) == "https://api.example.test/char/Locations.xml.aspx"


def test_empty_resolution_has_no_query(settings: AppSettings) -> None:
    request_url = build_request_url(resolve(SERVER_STATUS, ExternalAuth()), settings)

    assert request_url.url.query == b""


def test_fetch_document_sends_user_agent(settings: AppSettings) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="<eveapi><result/></eveapi>")

    body = fetch_document(
        build_method_url(SERVER_STATUS, settings),
        settings,
        transport=httpx.MockTransport(handler),
    )

    assert body == "<eveapi><result/></eveapi>"
    assert seen[0].headers["User-Agent"] == settings.user_agent


def test_fetch_document_raises_on_http_error(settings: AppSettings) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(403, text="forbidden"))

    with pytest.raises(httpx.HTTPStatusError):
        fetch_document(build_method_url(SERVER_STATUS, settings), settings, transport=transport)
