"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.api_provider import build_method_url, fetch_document
from adapters.character_store import characters_with_keys, load_characters
from adapters.document_capture import capture_xml_document
from cli.ui_components import print_banner
from core.config import AppSettings, write_user_env_vars
from core.domain.api_methods import SERVER_STATUS
from core.errors import DocumentFormatError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    url = build_method_url(SERVER_STATUS, settings)
    try:
        capture_xml_document(fetch_document(url, settings))
    except httpx.HTTPError as exc:
        return False, str(exc)
    except DocumentFormatError as exc:
        return False, f"Not an XML document: {exc}"
    return True, str(url)


def _check_characters(settings: AppSettings) -> tuple[str, str]:
    if settings.characters_path is None:
        return "OPTIONAL", "No characters file -> only external keys can be used"
    try:
        characters = load_characters(settings.characters_path)
    except (OSError, ValueError) as exc:
        return "FAIL", str(exc)
    with_keys = characters_with_keys(characters)
    return "OK", f"{len(characters)} characters, {len(with_keys)} with API keys"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="evemon-tools Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("API provider", "OK", settings.api_base_url)

    status, detail = _check_characters(settings)
    table.add_row("Characters", status, detail)

    ok_api, detail_api = _check_api(settings)
    table.add_row("ServerStatus", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] check the provider URL with `doctor set-provider`."
        )


@app.command(name="set-provider")
def set_provider() -> None:
    """Store the API provider URL in the user config .env."""

    settings = AppSettings()
    base_url = typer.prompt("API base URL", default=settings.api_base_url, show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"EVEMON_TOOLS_API_BASE_URL": base_url})
    _console.print(f"[green]Saved provider to:[/green] {env_path}")
