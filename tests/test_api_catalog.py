from __future__ import annotations

import pytest

from core.domain.api_methods import API_METHODS, APIMethodCategory, get_method
from core.services.api_catalog import has_identifier_argument, list_operations, supplemental_scope

IDENTIFIER_METHODS = {
    "CharacterID",
    "CharacterName",
    "TypeName",
    "ContractItems",
    "CorporationContractItems",
    "CalendarEventAttendees",
    "Locations",
    "MailBodies",
    "NotificationTexts",
    "CorporationLocations",
    "CorporationStarbaseDetails",
}


def _names() -> list[str]:
    return [method.name for method in list_operations()]


def test_list_contains_every_method_once() -> None:
    names = _names()
    assert len(names) == len(API_METHODS)
    assert set(names) == set(API_METHODS)


def test_server_status_then_generic_groups() -> None:
    names = _names()

    assert names[0] == "ServerStatus"
    assert names[1:9] == [
        "CallList",
        "CharacterID",
        "CharacterName",
        "ConquerableStationList",
        "EVEFactionalWarfareStats",
        "FactionalWarfareSystems",
        "RefTypes",
        "TypeName",
    ]
    assert names[9:11] == ["APIKeyInfo", "Characters"]


def test_character_and_corporation_blocks_include_their_supplementals() -> None:
    names = _names()
    character_count = sum(
        1 for m in API_METHODS.values() if m.category is APIMethodCategory.CHARACTER
    ) + 2

    character_block = names[11 : 11 + character_count]
    corporation_block = names[11 + character_count :]

    assert character_block == sorted(character_block)
    assert corporation_block == sorted(corporation_block)
    assert {"ContractItems", "ContractBids", "Locations"} <= set(character_block)
    assert {"CorporationContractItems", "CorporationContractBids", "CorporationSheet"} <= set(corporation_block)
    assert not any(name.startswith("Corporation") for name in character_block)


@pytest.mark.parametrize("name", sorted(API_METHODS))
def test_identifier_argument_is_a_closed_set(name: str) -> None:
    assert has_identifier_argument(get_method(name)) is (name in IDENTIFIER_METHODS)


def test_identifier_argument_without_selection() -> None:
    assert has_identifier_argument(None) is False


def test_supplemental_scope_follows_parent() -> None:
    assert supplemental_scope(get_method("ContractItems")) is APIMethodCategory.CHARACTER
    assert supplemental_scope(get_method("CorporationContractBids")) is APIMethodCategory.CORPORATION
    assert supplemental_scope(get_method("Locations")) is None


def test_unknown_method_raises() -> None:
    with pytest.raises(ValueError, match="Unknown API method"):
        get_method("NoSuchMethod")
