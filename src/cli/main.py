"""CLI principal (Typer).

Por qué una capa fina:
- Los comandos solo recogen opciones, preguntan al usuario y pintan
  resultados; la resolución de parámetros y los exports viven en `core`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.api_provider import build_request_url, fetch_document
from adapters.character_exporter import StoredScreenshot
from adapters.character_store import characters_with_keys, find_character, load_characters
from adapters.document_capture import suggest_document_filename
from adapters.plan_xml import load_plans_file
from cli.doctor import app as doctor_app
from cli.ui_components import build_methods_table, build_no_key_panel, print_export_result
from core.config import AppSettings, plan_text_env_vars, write_user_env_vars
from core.domain.api_methods import get_method
from core.domain.api_requests import AuthenticationContext, ExternalAuth, InternalAuth
from core.domain.export_formats import CharacterFormat, PlanFormat
from core.domain.models import Character, MarkupType, Plan, PlanExportSettings
from core.errors import DocumentFormatError
from core.services.api_catalog import list_operations
from core.services.content_encoder import skills_plan
from core.services.export_pipeline import (
    ExportResult,
    ExportStatus,
    default_backup_filename,
    default_character_filename,
    default_plan_filename,
    export_character,
    export_plan,
    export_plans_backup,
    save_document,
)
from core.services.request_resolver import resolve

app = typer.Typer(no_args_is_help=True, help="EVE API tester and plan/character export tools.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _confirm_overwrite(path: Path) -> bool:
    return typer.confirm(f"{path} already exists. Overwrite?", default=False)


def _confirm(yes: bool):
    return None if yes else _confirm_overwrite


def _finish(result: ExportResult) -> None:
    print_export_result(_console, result)
    if result.status is ExportStatus.FAILED:
        raise typer.Exit(code=1)


def _characters(path: Optional[Path]) -> list[Character]:
    path = path or AppSettings().characters_path
    if path is None:
        raise typer.BadParameter("No characters file: use --characters or EVEMON_TOOLS_CHARACTERS_PATH")
    return load_characters(path)


def _character(name: str, path: Optional[Path]) -> Character:
    character = find_character(_characters(path), name)
    if character is None:
        raise typer.BadParameter(f"Unknown character: {name}")
    return character


def _auth(
    character: Optional[str],
    characters_path: Optional[Path],
    key_id: str,
    vcode: str,
    char_id: str,
) -> AuthenticationContext:
    if character is None:
        return ExternalAuth(key_id=key_id, verification_code=vcode, character_id=char_id)

    eligible = characters_with_keys(_characters(characters_path))
    selected = find_character(eligible, character)
    if selected is None:
        raise typer.BadParameter(f"No character named {character!r} with API keys")
    return InternalAuth(character=selected)


def _read_plans(path: Path) -> list[Plan]:
    try:
        return load_plans_file(path)
    except DocumentFormatError as exc:
        _console.print(f"[red]Cannot read plan:[/red] {exc}")
        raise typer.Exit(code=1)


def _single_plan(path: Path, name: Optional[str]) -> Plan:
    plans = _read_plans(path)
    if name is not None:
        plans = [p for p in plans if p.name == name]
    if not plans:
        raise typer.BadParameter(f"No plan found in {path}")
    return plans[0]


def _prompt_plan_settings(plan: Plan) -> PlanExportSettings | None:
    """Pide las opciones de texto; `None` si el usuario cancela."""

    settings = AppSettings()
    defaults = settings.plan_text_settings()
    _console.print(f"[bold]Text export options for[/bold] {plan.name}")

    markup = typer.prompt("Markup (none/forum/html)", default=defaults.markup.value)
    try:
        markup_type = MarkupType(markup.strip().lower())
    except ValueError as exc:
        raise typer.BadParameter(f"Unknown markup: {markup}") from exc

    chosen = PlanExportSettings(
        markup=markup_type,
        entry_number=typer.confirm("Number entries?", default=defaults.entry_number),
        entry_training_times=typer.confirm("Show training times?", default=defaults.entry_training_times),
        footer_count=typer.confirm("Show skill count?", default=defaults.footer_count),
        footer_total_time=typer.confirm("Show total time?", default=defaults.footer_total_time),
    )
    if not typer.confirm("Export with these options?", default=True):
        return None

    if typer.confirm("Set as default?", default=False):
        env_path = write_user_env_vars(plan_text_env_vars(chosen))
        _console.print(f"[dim]Defaults saved to {env_path}[/dim]")
    return chosen


@app.command()
def methods() -> None:
    """List the API methods in selector order."""

    _console.print(build_methods_table(list_operations()))


def _resolve_url(method_name, character, characters_path, key_id, vcode, char_id, id_or_name):
    try:
        method = get_method(method_name)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    auth = _auth(character, characters_path, key_id, vcode, char_id)
    request_url = build_request_url(resolve(method, auth, id_or_name))
    if request_url.has_error:
        _console.print(build_no_key_panel(request_url.error_text))
    return request_url


_METHOD_ARG = typer.Argument(..., help="API method name (see `methods`).")
_CHARACTER_OPT = typer.Option(None, "--character", "-c", help="Use the stored keys of this character.")
_CHARACTERS_OPT = typer.Option(None, "--characters", help="Characters JSON file.")
_KEY_ID_OPT = typer.Option("", "--key-id", help="External key ID.")
_VCODE_OPT = typer.Option("", "--vcode", help="External verification code.")
_CHAR_ID_OPT = typer.Option("", "--char-id", help="External character/corporation ID.")
_ID_OR_NAME_OPT = typer.Option("", "--id", help="ID or name argument of the method.")


@app.command()
def url(
    method: str = _METHOD_ARG,
    character: Optional[str] = _CHARACTER_OPT,
    characters_path: Optional[Path] = _CHARACTERS_OPT,
    key_id: str = _KEY_ID_OPT,
    vcode: str = _VCODE_OPT,
    char_id: str = _CHAR_ID_OPT,
    id_or_name: str = _ID_OR_NAME_OPT,
) -> None:
    """Print the request URL of an API method."""

    request_url = _resolve_url(method, character, characters_path, key_id, vcode, char_id, id_or_name)
    _console.print(str(request_url.url), soft_wrap=True)


@app.command()
def call(
    method: str = _METHOD_ARG,
    character: Optional[str] = _CHARACTER_OPT,
    characters_path: Optional[Path] = _CHARACTERS_OPT,
    key_id: str = _KEY_ID_OPT,
    vcode: str = _VCODE_OPT,
    char_id: str = _CHAR_ID_OPT,
    id_or_name: str = _ID_OR_NAME_OPT,
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save the document as XML."),
    save: bool = typer.Option(False, "--save", help="Save using the suggested file name."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite without asking."),
) -> None:
    """Call an API method and show (or save) the returned document."""

    request_url = _resolve_url(method, character, characters_path, key_id, vcode, char_id, id_or_name)
    try:
        document = fetch_document(request_url.url)
    except httpx.HTTPError as exc:
        _console.print(f"[red]Request failed:[/red] {exc}")
        raise typer.Exit(code=1)

    if output is None and not save:
        _console.print(document, markup=False, highlight=False)
        return

    destination = output or Path(suggest_document_filename(str(request_url.url)))
    _finish(save_document(document, destination, confirm_overwrite=_confirm(yes)))


@app.command("export-plan")
def export_plan_cmd(
    plan_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Plan file (.xml/.emp/.epb)."),
    fmt: PlanFormat = typer.Option(PlanFormat.EMP, "--format", "-f", help="emp, xml or txt."),
    plan_name: Optional[str] = typer.Option(None, "--plan", help="Plan name inside a backup."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    use_defaults: bool = typer.Option(False, "--defaults", help="Text export: skip the options prompt."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite without asking."),
) -> None:
    """Export a plan as EMP (compressed), XML or text."""

    plan = _single_plan(plan_file, plan_name)

    destination = output or Path(default_plan_filename(plan, fmt))
    prompt = (lambda _plan: AppSettings().plan_text_settings()) if use_defaults else _prompt_plan_settings
    _finish(export_plan(plan, fmt, destination, confirm_overwrite=_confirm(yes), prompt_settings=prompt))


@app.command("backup-plans")
def backup_plans_cmd(
    plan_files: list[Path] = typer.Argument(..., exists=True, dir_okay=False),
    character_name: str = typer.Option(..., "--character", "-c", help="Owner, used in the file name."),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    yes: bool = typer.Option(False, "--yes", "-y"),
) -> None:
    """Save several plans into one compressed backup (.epb)."""

    plans: list[Plan] = []
    for path in plan_files:
        plans.extend(_read_plans(path))

    destination = output or Path(default_backup_filename(character_name))
    _finish(export_plans_backup(plans, destination, confirm_overwrite=_confirm(yes)))


@app.command("export-character")
def export_character_cmd(
    name: str = typer.Argument(..., help="Character name."),
    fmt: CharacterFormat = typer.Option(CharacterFormat.CCP_XML, "--format", "-f"),
    after_plan: Optional[Path] = typer.Option(None, "--after-plan", exists=True, dir_okay=False),
    screenshot: Optional[Path] = typer.Option(None, "--screenshot", exists=True, help="PNG to export."),
    characters_path: Optional[Path] = _CHARACTERS_OPT,
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    yes: bool = typer.Option(False, "--yes", "-y"),
) -> None:
    """Export a character (optionally as it would be after a plan)."""

    character = _character(name, characters_path)
    plan = _single_plan(after_plan, None) if after_plan is not None else None
    if plan is not None and fmt not in CharacterFormat.after_plan_formats():
        raise typer.BadParameter(f"{fmt.value} is not available with --after-plan")
    if fmt.is_image and screenshot is None:
        raise typer.BadParameter("png export needs --screenshot")

    destination = output or Path(default_character_filename(character, fmt, plan=plan))
    _finish(
        export_character(
            character,
            fmt,
            destination,
            plan=plan,
            image_renderer=StoredScreenshot(screenshot) if screenshot is not None else None,
            confirm_overwrite=_confirm(yes),
        )
    )


@app.command("export-skills")
def export_skills_cmd(
    name: str = typer.Argument(..., help="Character name."),
    fmt: PlanFormat = typer.Option(PlanFormat.EMP, "--format", "-f"),
    characters_path: Optional[Path] = _CHARACTERS_OPT,
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
    yes: bool = typer.Option(False, "--yes", "-y"),
) -> None:
    """Export the trained skills of a character as a plan."""

    character = _character(name, characters_path)
    plan = skills_plan(character)
    destination = output or Path(default_plan_filename(plan, fmt, character_name=character.name))
    _finish(
        export_plan(
            plan,
            fmt,
            destination,
            confirm_overwrite=_confirm(yes),
            prompt_settings=_prompt_plan_settings,
        )
    )


def run() -> None:
    app()
