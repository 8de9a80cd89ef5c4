"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.api_methods import APIMethod
from core.services.api_catalog import has_identifier_argument, supplemental_scope
from core.services.export_pipeline import ExportResult, ExportStatus


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("EVEMON-TOOLS", style="bold cyan")
    subtitle = Text("API tester • Plans • Character exports", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_methods_table(methods: Iterable[APIMethod]) -> Table:
    table = Table(title="API Methods")
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Category", style="white")
    table.add_column("Key", style="green")
    table.add_column("ID/Name", style="magenta")

    for method in methods:
        category = method.category.value
        scope = supplemental_scope(method)
        if scope is not None:
            category = f"{category} ({scope.value} supplemental)"
        table.add_row(
            method.name,
            category,
            "yes" if method.requires_api_key else "no",
            "yes" if has_identifier_argument(method) else "",
        )
    return table


def build_no_key_panel(message: str) -> Panel:
    """Aviso no fatal: la llamada se hará sin credencial válida."""

    return Panel(Text(message, style="yellow"), title="No API key", border_style="yellow")


def print_export_result(console: Console, result: ExportResult) -> None:
    if result.status is ExportStatus.WRITTEN:
        console.print(f"[green]Saved:[/green] {result.path}")
    elif result.status is ExportStatus.CANCELLED:
        console.print("[dim]No action taken.[/dim]")
    elif result.status is ExportStatus.SKIPPED:
        console.print(Panel(Text(result.message, style="yellow"), title="Cannot export", border_style="yellow"))
    else:
        console.print(Panel(Text(result.message, style="red"), title="Save Failed", border_style="red"))
