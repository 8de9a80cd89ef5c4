from __future__ import annotations

import json
from pathlib import Path

import pytest

from cli.doctor import _check_characters
from core.config import AppSettings, plan_text_env_vars, write_user_env_vars
from core.domain.models import MarkupType, PlanExportSettings


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env_path = tmp_path / "conf" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nEVEMON_TOOLS_LOG_LEVEL='INFO'\nbroken line\n", encoding="utf-8")

    write_user_env_vars({"EVEMON_TOOLS_API_BASE_URL": "https://api.example.test"}, env_path=env_path)

    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# evemon-tools user config (.env)",
        "EVEMON_TOOLS_API_BASE_URL=https://api.example.test",
        "EVEMON_TOOLS_LOG_LEVEL=INFO",
    ]


def test_plan_text_defaults_round_trip_through_env(monkeypatch: pytest.MonkeyPatch) -> None:
    chosen = PlanExportSettings(markup=MarkupType.FORUM, entry_number=False, footer_total_time=True)
    for key, value in plan_text_env_vars(chosen).items():
        monkeypatch.setenv(key, value)

    assert AppSettings().plan_text_settings() == chosen


class TestCheckCharacters:
    def test_no_file_is_optional(self, settings: AppSettings) -> None:
        assert _check_characters(settings)[0] == "OPTIONAL"

    def test_counts_characters(self, settings: AppSettings, characters_file: Path) -> None:
        status, detail = _check_characters(settings.model_copy(update={"characters_path": characters_file}))

        assert status == "OK"
        assert detail == "2 characters, 1 with API keys"

    def test_invalid_file_fails(self, tmp_path: Path, settings: AppSettings) -> None:
        path = tmp_path / "characters.json"
        path.write_text(json.dumps({"characters": [{"name": ""}]}), encoding="utf-8")

        status, _ = _check_characters(settings.model_copy(update={"characters_path": path}))

        assert status == "FAIL"
