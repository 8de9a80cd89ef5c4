"""
pytest configuration and shared fixtures

Usage:
    def test_something(alice, plan):
        assert alice.find_api_key_with_access(...) is not None
"""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.api_methods import get_method
from core.domain.models import APIKey, APIKeyType, Character, Plan, PlanEntry, Skill


# ============================================================================
# Credentials
# ============================================================================

CHARACTER_MASK = (
    get_method("CharacterSheet").access_mask
    | get_method("Locations").access_mask
    | get_method("Contracts").access_mask
    | get_method("MailBodies").access_mask
)
CORPORATION_MASK = (
    get_method("CorporationSheet").access_mask
    | get_method("CorporationContracts").access_mask
    | get_method("CorporationLocations").access_mask
    | get_method("CorporationMemberTrackingExtended").access_mask
    | get_method("CorporationStarbaseDetails").access_mask
)


@pytest.fixture
def character_key() -> APIKey:
    return APIKey(
        key_id=1001,
        verification_code="abc",
        type=APIKeyType.CHARACTER,
        access_mask=CHARACTER_MASK,
    )


@pytest.fixture
def corporation_key() -> APIKey:
    return APIKey(
        key_id=2002,
        verification_code="corp",
        type=APIKeyType.CORPORATION,
        access_mask=CORPORATION_MASK,
    )


@pytest.fixture
def alice(character_key: APIKey, corporation_key: APIKey) -> Character:
    return Character(
        name="Alice Aurora",
        character_id=90000001,
        corporation_name="Aurora Industries",
        corporation_id=98000001,
        balance=1234567.5,
        api_keys=[character_key, corporation_key],
        skills=[
            Skill(name="Mechanics", level=4, skill_points=90510, group="Engineering"),
            Skill(name="Navigation", level=3, skill_points=8000, group="Navigation"),
            Skill(name="Hidden Talent", level=2, skill_points=1415, is_public=False),
            Skill(name="Gunnery", level=0, skill_points=0, group="Gunnery"),
        ],
    )


@pytest.fixture
def keyless() -> Character:
    return Character(name="Bob Keyless", character_id=90000002)


# ============================================================================
# Plans
# ============================================================================

@pytest.fixture
def plan() -> Plan:
    return Plan(
        name="Test Plan",
        character_name="Alice Aurora",
        description="Frigate basics",
        entries=[
            PlanEntry(skill_name="Mechanics", level=5, priority=1, notes="hull <repair>"),
            PlanEntry(skill_name="Gunnery", level=1, training_time=timedelta(minutes=8)),
            PlanEntry(skill_name="Gunnery", level=2, training_time=timedelta(hours=1, minutes=5)),
        ],
    )


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(api_base_url="https://api.example.test", characters_path=None)


@pytest.fixture
def characters_file(tmp_path: Path, alice: Character, keyless: Character) -> Path:
    path = tmp_path / "characters.json"
    payload = {"characters": [alice.model_dump(mode="json"), keyless.model_dump(mode="json")]}
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path
