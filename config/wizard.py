"""Interaktiver Setup-Wizard für die Ersteinrichtung des Kursplaners.

Fragt die wenigen Einstellungen ab; Standard-Werte mit Enter übernehmen.
"""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich import box

from config.schema import PlannerConfig
from config.defaults import default_planner_config

console = Console()


def _header(title: str) -> None:
    console.print()
    console.print(Panel(f"[bold cyan]{title}[/bold cyan]", expand=False))


def _warn(text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


def show_config_table(config: PlannerConfig) -> None:
    """Zeigt die Einstellungen als rich-Tabelle an."""
    table = Table(title="Einstellungen", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Max. Kombinationen", str(config.max_options))
    table.add_row("Kurskatalog", str(config.catalog_path))
    table.add_row("Report mit geschlossenen", str(config.output_with_closed))
    table.add_row("Report ohne geschlossene", str(config.output_without_closed))
    table.add_row("Excel-Export", str(config.excel_output) if config.excel_output else "—")
    table.add_row("Credit-Schranke", "an" if config.prune else "aus")
    console.print(table)


def _wizard_options(defaults: PlannerConfig) -> PlannerConfig:
    _header("Schritt 1/2: Suche")
    max_options = IntPrompt.ask("Wie viele Kombinationen pro Report?",
                                default=defaults.max_options)
    while max_options <= 0:
        _warn("Mit 0 oder weniger bleiben beide Reports leer.")
        if Confirm.ask("Trotzdem übernehmen?", default=False):
            break
        max_options = IntPrompt.ask("Wie viele Kombinationen pro Report?",
                                    default=defaults.max_options)

    _header("Schritt 2/2: Dateien")
    catalog = Prompt.ask("Kurskatalog", default=str(defaults.catalog_path))
    with_closed = Prompt.ask("Report mit geschlossenen Gruppen",
                             default=str(defaults.output_with_closed))
    without_closed = Prompt.ask("Report ohne geschlossene Gruppen",
                                default=str(defaults.output_without_closed))
    excel = Prompt.ask("Excel-Export (leer = aus)", default="")

    return PlannerConfig(
        max_options=max_options,
        catalog_path=catalog,
        output_with_closed=with_closed,
        output_without_closed=without_closed,
        excel_output=excel or None,
    )


def run_wizard() -> Optional[PlannerConfig]:
    """Führt den Wizard aus. Gibt None zurück wenn abgebrochen."""
    console.print(Panel(
        "[bold]Willkommen beim Kursplaner![/bold]\n\n"
        "Der Wizard legt die Einstellungsdatei an.\n"
        "[dim]Standard-Werte können mit Enter übernommen werden.[/dim]",
        title="[bold cyan]Kursplaner[/bold cyan]",
        border_style="cyan",
    ))

    try:
        config = _wizard_options(default_planner_config())
    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard abgebrochen.[/yellow]")
        return None

    show_config_table(config)
    if not Confirm.ask("\nEinstellungen speichern?", default=True):
        console.print("[yellow]Einstellungen werden nicht gespeichert.[/yellow]")
        return None
    return config
