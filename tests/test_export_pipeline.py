from __future__ import annotations

import gzip
from pathlib import Path

from adapters.character_exporter import StoredScreenshot
from adapters.plan_xml import plan_from_xml
from core.domain.export_formats import CharacterFormat, PlanFormat
from core.domain.models import Character, Plan, PlanExportSettings
from core.services.export_pipeline import (
    NO_CCP_XML_MESSAGE,
    ExportStatus,
    default_backup_filename,
    default_character_filename,
    default_plan_filename,
    export_character,
    export_plan,
    export_plans_backup,
    save_document,
)


class FakeRenderer:
    def render(self, character: Character) -> bytes:
        return b"\x89PNG\r\n\x1a\n" + character.name.encode()


class TestExportPlan:
    def test_emp_is_compressed_xml(self, tmp_path: Path, plan: Plan) -> None:
        path = tmp_path / "plan.emp"

        result = export_plan(plan, PlanFormat.EMP, path)

        assert result.ok
        assert plan_from_xml(gzip.decompress(path.read_bytes()).decode("utf-8")).name == "Test Plan"

    def test_xml_is_plain(self, tmp_path: Path, plan: Plan) -> None:
        path = tmp_path / "plan.xml"
        export_plan(plan, PlanFormat.XML, path)
        assert path.read_text(encoding="utf-8").startswith("<?xml")

    def test_declined_overwrite_keeps_bytes(self, tmp_path: Path, plan: Plan) -> None:
        path = tmp_path / "plan.emp"
        path.write_bytes(b"previous backup")

        result = export_plan(plan, PlanFormat.EMP, path, confirm_overwrite=lambda p: False)

        assert result.status is ExportStatus.CANCELLED
        assert path.read_bytes() == b"previous backup"

    def test_cancelled_options_prompt_aborts(self, tmp_path: Path, plan: Plan) -> None:
        path = tmp_path / "plan.txt"
        asked: list[Plan] = []

        def prompt(p: Plan) -> PlanExportSettings | None:
            asked.append(p)
            return None

        def confirm(p: Path) -> bool:
            raise AssertionError("must not reach the writer")

        result = export_plan(plan, PlanFormat.TEXT, path, prompt_settings=prompt, confirm_overwrite=confirm)

        assert result.status is ExportStatus.CANCELLED
        assert asked == [plan]
        assert not path.exists()

    def test_text_uses_prompted_settings(self, tmp_path: Path, plan: Plan) -> None:
        path = tmp_path / "plan.txt"
        settings = PlanExportSettings(entry_number=False, footer_count=False)

        export_plan(plan, PlanFormat.TEXT, path, prompt_settings=lambda p: settings)

        assert path.read_text(encoding="utf-8").splitlines()[2] == "Mechanics V"

    def test_write_failure_is_reported(self, tmp_path: Path, plan: Plan) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = export_plan(plan, PlanFormat.EMP, blocker / "plan.emp")

        assert result.status is ExportStatus.FAILED
        assert result.message.startswith("There was an error writing out the file:\n\n")
        assert blocker.read_text() == "not a directory"


def test_backup_contains_all_plans(tmp_path: Path, plan: Plan) -> None:
    path = tmp_path / "backup.epb"
    other = Plan(name="Other")

    assert export_plans_backup([plan, other], path).ok

    content = gzip.decompress(path.read_bytes()).decode("utf-8")
    assert content.count("<plan ") == 2


class TestExportCharacter:
    def test_missing_ccp_cache_is_skipped(self, tmp_path: Path, alice: Character) -> None:
        path = tmp_path / "alice.xml"

        result = export_character(alice, CharacterFormat.CCP_XML, path)

        assert result.status is ExportStatus.SKIPPED
        assert result.message == NO_CCP_XML_MESSAGE
        assert not path.exists()

    def test_png_goes_through_renderer(self, tmp_path: Path, alice: Character) -> None:
        path = tmp_path / "alice.png"

        result = export_character(alice, CharacterFormat.PNG, path, image_renderer=FakeRenderer())

        assert result.ok
        assert path.read_bytes() == b"\x89PNG\r\n\x1a\nAlice Aurora"

    def test_unreadable_screenshot_fails_cleanly(self, tmp_path: Path, alice: Character) -> None:
        shot = tmp_path / "shot.png"
        shot.write_bytes(b"not an image")
        path = tmp_path / "alice.png"

        result = export_character(alice, CharacterFormat.PNG, path, image_renderer=StoredScreenshot(shot))

        assert result.status is ExportStatus.FAILED
        assert result.message.startswith("There was an error rendering the character image:\n\n")
        assert not path.exists()

    def test_after_plan_text(self, tmp_path: Path, alice: Character, plan: Plan) -> None:
        path = tmp_path / "alice.chr"

        export_character(alice, CharacterFormat.EFT_CHR, path, plan=plan)

        assert "Mechanics=5" in path.read_text(encoding="utf-8")


def test_save_document(tmp_path: Path) -> None:
    path = tmp_path / "ServerStatus.xml"

    assert save_document("<eveapi><a>1</a></eveapi>", path).ok
    assert "  <a>1</a>" in path.read_text(encoding="utf-8")


def test_save_document_with_bad_xml(tmp_path: Path) -> None:
    path = tmp_path / "ServerStatus.xml"

    result = save_document("not xml", path)

    assert result.status is ExportStatus.FAILED
    assert result.message.startswith("There was an error while converting to XML format.")
    assert not path.exists()


def test_default_filenames(alice: Character, plan: Plan) -> None:
    odd = plan.model_copy(update={"name": 'A/B: "C"?'})

    assert default_plan_filename(odd, PlanFormat.EMP) == "Alice Aurora - A-B- -C--.emp"
    assert default_plan_filename(plan, PlanFormat.TEXT, character_name="Zed") == "Zed - Test Plan.txt"
    assert default_backup_filename("Alice Aurora") == "Alice Aurora - Plans Backup.epb"
    assert default_character_filename(alice, CharacterFormat.CCP_XML) == "Alice Aurora.xml"
    assert default_character_filename(alice, CharacterFormat.HTML, plan=plan) == "Alice Aurora (after plan Test Plan).html"
