"""Kursplaner — Haupt-CLI.

Verwendung:
  python main.py setup                    Ersteinrichtung (Wizard)
  python main.py config show              Einstellungen anzeigen
  python main.py generate                 Zufallskatalog erzeugen
  python main.py template                 Excel-Import-Vorlage erzeugen
  python main.py import <datei.xlsx>      Excel-Katalog nach JSON importieren
  python main.py validate                 Katalog prüfen + Bestenlisten validieren
  python main.py solve                    Beide Suchläufe → Reports schreiben
  python main.py show                     Beste Kombinationen im Terminal anzeigen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _load_config_or_abort(settings: Optional[Path] = None):
    """Lädt die Einstellungen oder bricht mit Fehlermeldung ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    if settings is not None:
        mgr.DEFAULT_CONFIG = Path(settings)
    if mgr.first_run_check():
        console.print(
            f"[red]Keine Einstellungen gefunden ({mgr.DEFAULT_CONFIG}).[/red]\n"
            "Führen Sie zunächst [bold]python main.py setup[/bold] aus."
        )
        sys.exit(1)
    try:
        return mgr, mgr.load()
    except ValueError as e:
        console.print(f"[red bold]Einstellungen ungültig:[/red bold]\n{e}")
        sys.exit(1)


def _load_catalog_or_abort(path: Path):
    """Lädt den Katalog. Fehlende Datei → leerer Katalog, kaputter Inhalt → Abbruch."""
    from data.catalog_import import load_catalog, CatalogImportError
    try:
        catalog = load_catalog(path)
    except CatalogImportError as e:
        console.print(f"[red bold]Katalog fehlerhaft:[/red bold]\n{e}")
        sys.exit(1)
    if catalog.is_empty:
        console.print(
            f"[yellow]Katalog leer oder nicht lesbar: {path}[/yellow] "
            "– Reports bleiben leer."
        )
    return catalog


def _run_searches(config, catalog) -> dict:
    """Führt beide Suchläufe aus: {include_closed: RankedSet}."""
    from solver.search import find_best_combinations
    groups = catalog.groups()
    return {
        include_closed: find_best_combinations(
            groups, include_closed, config.max_options, prune=config.prune
        )
        for include_closed in (True, False)
    }


def _print_ranked(ranked, include_closed: bool, limit: Optional[int] = None) -> None:
    """Gibt eine Bestenliste als rich-Tabellen aus."""
    from export.helpers import format_schedule
    label = "mit geschlossenen" if include_closed else "ohne geschlossene"
    plans = ranked.entries()[:limit] if limit else ranked.entries()
    if not plans:
        console.print(f"[dim]Keine Kombination ({label} Gruppen).[/dim]")
        return
    for num, plan in enumerate(plans, 1):
        table = Table(
            title=f"Option {num} ({label}) – {plan.total_credits} Credits",
            box=box.ROUNDED,
        )
        table.add_column("Kurs", style="bold")
        table.add_column("Gruppe")
        table.add_column("Credits", justify="right")
        table.add_column("Termine")
        for s in plan.sections:
            group = s.group or "—"
            if s.closed:
                group += " [red](geschl.)[/red]"
            table.add_row(s.code, group, str(s.credits), format_schedule(s))
        if not plan.sections:
            table.add_row("[dim]alle Kurse ausgelassen[/dim]", "", "0", "")
        console.print(table)


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--settings", type=click.Path(path_type=Path), default=None,
              help="Pfad der Einstellungsdatei (.json oder .yaml).")
def cmd_setup(settings: Optional[Path]):
    """Ersteinrichtung: Einstellungsdatei mit dem Wizard anlegen."""
    from config.wizard import run_wizard
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if settings is not None:
        mgr.DEFAULT_CONFIG = settings
    if not mgr.first_run_check():
        console.print(
            "[yellow]Eine Einstellungsdatei existiert bereits.[/yellow]"
        )
        if not click.confirm("Trotzdem neu einrichten?", default=False):
            return

    config = run_wizard()
    if config is not None:
        mgr.save(config)
        console.print("[bold green]Einrichtung abgeschlossen![/bold green]")
        console.print("Führen Sie jetzt [bold]python main.py solve[/bold] aus.")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Einstellungen anzeigen."""


@cmd_config.command("show")
@click.option("--settings", type=click.Path(path_type=Path), default=None,
              help="Pfad der Einstellungsdatei.")
def config_show(settings: Optional[Path]):
    """Zeigt die aktuellen Einstellungen an."""
    from config.wizard import show_config_table
    mgr, config = _load_config_or_abort(settings)
    console.print(Panel(str(mgr.DEFAULT_CONFIG), title="Einstellungsdatei",
                        border_style="cyan"))
    show_config_table(config)


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--courses", "num_courses", default=8, help="Anzahl Kurse.")
@click.option("--sections", "sections_per_course", default=3,
              help="Max. Gruppen pro Kurs.")
@click.option("--closed-ratio", default=0.2, help="Anteil geschlossener Gruppen.")
@click.option("--output", "-o", default="courses.json",
              help="Pfad für den erzeugten Katalog.")
def cmd_generate(seed: int, num_courses: int, sections_per_course: int,
                 closed_ratio: float, output: str):
    """Erzeugt einen Zufallskatalog (JSON)."""
    from data.fake_data import FakeCatalogGenerator

    gen = FakeCatalogGenerator(seed=seed)
    catalog = gen.generate(num_courses, sections_per_course, closed_ratio)
    gen.print_summary(catalog)
    console.print(f"\n[dim]{catalog.summary()}[/dim]")

    out_path = Path(output)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── TEMPLATE ─────────────────────────────────────────────────────────────────

@click.command("template")
@click.option("--output", "-o", default="output/kurse_vorlage.xlsx",
              help="Ausgabepfad für die Excel-Vorlage.")
def cmd_template(output: str):
    """Erzeugt eine Excel-Import-Vorlage mit Beispielkursen."""
    from data.excel_import import generate_template

    out_path = generate_template(Path(output))
    console.print(f"[green]✓[/green] Vorlage gespeichert: {out_path}")
    console.print(
        "\nSpalten im Blatt [cyan]Kurse[/cyan]:\n"
        "  Code, Gruppe, Geschlossen (ja/nein), Credits,\n"
        "  Zeiten (z.B. [bold]Mon 9-10.5; Wed 9-10.5[/bold])"
    )


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--json-path", default="courses.json",
              help="Zielpfad des JSON-Katalogs.")
def cmd_import(datei: Path, json_path: str):
    """Importiert einen Kurskatalog aus einer Excel-Datei."""
    from data.excel_import import import_from_excel, ExcelImportError

    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        catalog = import_from_excel(datei)
    except ExcelImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Import erfolgreich!")
    console.print(f"\n{catalog.summary()}")
    out_path = Path(json_path)
    catalog.save_json(out_path)
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.option("--settings", type=click.Path(path_type=Path), default=None,
              help="Pfad der Einstellungsdatei.")
def cmd_validate(settings: Optional[Path]):
    """Prüft Katalog und Bestenlisten beider Suchläufe."""
    from analysis.plan_validator import PlanValidator

    mgr, config = _load_config_or_abort(settings)
    catalog = _load_catalog_or_abort(config.catalog_path)
    console.print(f"\n{catalog.summary()}\n")

    groups = catalog.groups()
    validator = PlanValidator()
    all_valid = True
    for include_closed, ranked in _run_searches(config, catalog).items():
        report = validator.validate(ranked, groups, include_closed)
        report.print_rich()
        all_valid = all_valid and report.is_valid

    sys.exit(0 if all_valid else 1)


# ─── SOLVE ────────────────────────────────────────────────────────────────────

@click.command("solve")
@click.option("--settings", type=click.Path(path_type=Path), default=None,
              help="Pfad der Einstellungsdatei.")
@click.option("--max-options", type=int, default=None,
              help="Überschreibt maxOptions aus den Einstellungen.")
@click.option("--excel", type=click.Path(path_type=Path), default=None,
              help="Zusätzlicher Excel-Export (überschreibt excelOutput).")
@click.option("--check", is_flag=True, default=False,
              help="Bestenlisten nach der Suche validieren.")
def cmd_solve(settings: Optional[Path], max_options: Optional[int],
              excel: Optional[Path], check: bool):
    """Berechnet beide Bestenlisten und schreibt die Reports."""
    from export.text_report import write_report, ReportWriteError
    from export.excel_export import ExcelExporter

    mgr, config = _load_config_or_abort(settings)
    updates = {}
    if max_options is not None:
        updates["max_options"] = max_options
    if excel is not None:
        updates["excel_output"] = excel
    if updates:
        config = config.model_copy(update=updates)

    catalog = _load_catalog_or_abort(config.catalog_path)
    results = _run_searches(config, catalog)

    try:
        for include_closed, ranked in results.items():
            write_report(ranked, config.output_for(include_closed), include_closed)
        if config.excel_output is not None:
            out = ExcelExporter(results).export(config.excel_output)
            console.print(f"[green]✓[/green] Excel gespeichert: {out}")
    except ReportWriteError as e:
        console.print(f"[red bold]{e}[/red bold]")
        sys.exit(1)

    table = Table(title="Ergebnis", box=box.ROUNDED)
    table.add_column("Lauf", style="bold")
    table.add_column("Kombinationen", justify="right")
    table.add_column("Beste Credits", justify="right")
    table.add_column("Report")
    for include_closed, ranked in results.items():
        table.add_row(
            "mit geschlossenen" if include_closed else "ohne geschlossene",
            str(len(ranked)),
            str(ranked.best_total) if ranked else "—",
            str(config.output_for(include_closed)),
        )
    console.print(table)

    if check:
        from analysis.plan_validator import PlanValidator
        groups = catalog.groups()
        reports = [
            PlanValidator().validate(ranked, groups, include_closed)
            for include_closed, ranked in results.items()
        ]
        for report in reports:
            report.print_rich()
        if not all(r.is_valid for r in reports):
            sys.exit(1)


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--settings", type=click.Path(path_type=Path), default=None,
              help="Pfad der Einstellungsdatei.")
@click.option("--closed/--no-closed", "include_closed", default=False,
              help="Geschlossene Gruppen einbeziehen.")
@click.option("--limit", "-n", type=int, default=3,
              help="Anzahl angezeigter Kombinationen.")
def cmd_show(settings: Optional[Path], include_closed: bool, limit: int):
    """Zeigt die besten Kombinationen im Terminal an."""
    from solver.search import find_best_combinations

    mgr, config = _load_config_or_abort(settings)
    catalog = _load_catalog_or_abort(config.catalog_path)
    ranked = find_best_combinations(
        catalog.groups(), include_closed, config.max_options, prune=config.prune
    )
    _print_ranked(ranked, include_closed, limit=limit)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", count=True,
              help="Mehr Log-Ausgabe (-v: Info, -vv: Debug).")
def cli(verbose: int):
    """Kursplaner: konfliktfreie Kurskombinationen mit maximalen Credits.

    Starten Sie mit: python main.py setup
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main():
    """Einstiegspunkt. Startet automatisch den Wizard beim ersten Aufruf."""
    from config.manager import ConfigManager
    mgr = ConfigManager()

    if len(sys.argv) == 1 and mgr.first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Kursplaner![/bold]\n\n"
            "Keine Einstellungen gefunden.\n"
            "Der Setup-Wizard wird jetzt gestartet...",
            border_style="cyan",
        ))
        sys.argv.append("setup")

    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_template)
cli.add_command(cmd_import)
cli.add_command(cmd_validate)
cli.add_command(cmd_solve)
cli.add_command(cmd_show)


if __name__ == "__main__":
    main()
