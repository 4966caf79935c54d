"""Órarend: Haupt-CLI.

Verwendung:
  python main.py config show                 Konfiguration anzeigen
  python main.py config init                 Konfigurationsdatei anlegen
  python main.py template                    Excel-Import-Vorlage erzeugen
  python main.py import <datei.xlsx|csv>     Kursliste importieren
  python main.py semester                    Aktuelles Semester anzeigen
  python main.py search <text>               Kurse suchen
  python main.py conflicts                   Terminüberschneidungen prüfen
  python main.py day [--date D]              Tagesansicht
  python main.py week [--date D]             Wochenraster
  python main.py export ics|xlsx|pdf         Kalender / Excel / PDF exportieren

Alle zeitabhängigen Befehle akzeptieren --now 2025-10-14T10:15 statt der Systemzeit.
"""

import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()
logger = logging.getLogger("orarend")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config_or_abort(ctx: click.Context):
    """Lädt die Konfiguration (oder Standardwerte); bricht bei ungültiger Datei ab."""
    from config.manager import ConfigManager
    mgr = ConfigManager(ctx.obj.get("config_path"))
    try:
        return mgr, mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red bold]Konfiguration ungültig:[/red bold]\n{e}")
        sys.exit(1)


def _load_catalog_or_abort(config, json_path: Optional[str] = None):
    """Lädt den gespeicherten Kurskatalog oder bricht mit Fehlermeldung ab."""
    from models.course_catalog import CourseCatalog
    path = Path(json_path or config.catalog_path)
    if not path.exists():
        console.print(
            f"[red]Kein Kurskatalog gefunden:[/red] {path}\n"
            "Importieren Sie zuerst eine Kursliste mit [bold]python main.py import <datei>[/bold]."
        )
        sys.exit(1)
    return CourseCatalog.load_json(path)


def _now(value: Optional[str]) -> datetime:
    """--now (ISO-Zeitstempel) → datetime, sonst Systemzeit."""
    from engine.clock import clock_from_option
    try:
        return clock_from_option(value).now()
    except ValueError:
        raise click.BadParameter(f"Kein gültiger ISO-Zeitstempel: {value}", param_hint="--now")


def _day(value: Optional[str], now: datetime) -> date:
    if not value:
        return now.date()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Kein gültiges Datum (YYYY-MM-DD): {value}", param_hint="--date")


_now_option = click.option(
    "--now", "now_value", default=None, metavar="ISO",
    help="Feste Uhrzeit statt Systemzeit, z.B. 2025-10-14T10:15.",
)
_catalog_option = click.option(
    "--json-path", default=None, help="Pfad des Kurskatalogs (Standard aus Config).",
)


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx):
    """Zeigt die aktive Konfiguration."""
    mgr, config = _load_config_or_abort(ctx)
    if mgr.first_run_check():
        console.print("[dim]Keine Konfigurationsdatei, Standardwerte aktiv.[/dim]")
    mgr.show(config)


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False, help="Bestehende Datei überschreiben.")
@click.pass_context
def config_init(ctx, force: bool):
    """Legt eine Konfigurationsdatei mit Standardwerten an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager(ctx.obj.get("config_path"))
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        sys.exit(1)
    path = mgr.save(default_app_config())
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── TEMPLATE ─────────────────────────────────────────────────────────────────

@click.command("template")
@click.option("--output", "-o", default="output/kurzuslista_sablon.xlsx",
              help="Ausgabepfad für die Excel-Vorlage.")
@click.pass_context
def cmd_template(ctx, output: str):
    """Erzeugt eine Excel-Import-Vorlage mit den erwarteten Spalten."""
    mgr, config = _load_config_or_abort(ctx)
    from data.excel_import import generate_template

    out_path = Path(output)
    generate_template(config, out_path)
    console.print(f"[green]✓[/green] Vorlage gespeichert: {out_path}")


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--semester", "semester_label", default=None,
              help="Semesterkennung YYYY/YY/N (Standard: aktuelles Semester).")
@click.option("--replace", is_flag=True, default=False,
              help="Gespeicherten Katalog verwerfen statt zusammenführen.")
@_catalog_option
@_now_option
@click.pass_context
def cmd_import(ctx, datei: Path, semester_label: Optional[str], replace: bool,
               json_path: Optional[str], now_value: Optional[str]):
    """Importiert eine Kursliste (.xlsx oder .csv) in den Kurskatalog."""
    mgr, config = _load_config_or_abort(ctx)
    from data.excel_import import ExcelImportError, import_course_list
    from engine.semester import SemesterCalculator
    from models.course_catalog import CourseCatalog
    from models.semester import Semester

    if semester_label and not Semester.is_valid_label(semester_label):
        raise click.BadParameter(f"Ungültige Semesterkennung: {semester_label}",
                                 param_hint="--semester")
    label = semester_label or SemesterCalculator.current(_now(now_value)).label

    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        imported, report = import_course_list(datei, config, label)
    except ExcelImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)

    out_path = Path(json_path or config.catalog_path)
    catalog = imported
    if out_path.exists() and not replace:
        existing = CourseCatalog.load_json(out_path)
        if existing.semester == label:
            catalog = existing.upsert(imported.courses)

    catalog.save_json(out_path, stamp=_now(now_value) if now_value else None)
    console.print("[green]✓[/green] Import erfolgreich!")
    console.print(f"\n{catalog.summary()}")
    report.print_rich()
    console.print(f"[green]✓[/green] Katalog gespeichert: {out_path}")


# ─── SEMESTER ─────────────────────────────────────────────────────────────────

@click.command("semester")
@_now_option
def cmd_semester(now_value: Optional[str]):
    """Zeigt aktuelles und nächstes Semester."""
    from engine.semester import SemesterCalculator

    now = _now(now_value)
    current, upcoming = SemesterCalculator.available(now)

    table = Table(title="Félévek", box=box.ROUNDED)
    table.add_column("Kennung", style="bold")
    table.add_column("Bezeichnung")
    table.add_column("Zeitraum")
    table.add_column("Wochen", justify="right")
    for sem in (current, upcoming):
        rng = sem.date_range
        table.add_row(
            sem.label,
            sem.display_name,
            f"{rng.start:%Y.%m.%d.} - {rng.end:%Y.%m.%d.}",
            str(SemesterCalculator.teaching_weeks(sem)),
        )
    console.print(table)

    week = SemesterCalculator.academic_week(current, now)
    progress = SemesterCalculator.progress(current, now)
    week_text = f"{week}. hét" if week else "außerhalb der Vorlesungszeit"
    console.print(Panel(
        f"Aktuell: [bold]{current.display_name}[/bold]\n"
        f"Woche: {week_text} | Fortschritt: {progress:.0%}",
        border_style="cyan",
    ))


# ─── SEARCH ───────────────────────────────────────────────────────────────────

@click.command("search")
@click.argument("query", default="")
@click.option("--type", "class_type", default=None,
              help="Nur Kurse dieses Typs (Előadás, Gyakorlat, Labor).")
@_catalog_option
@click.pass_context
def cmd_search(ctx, query: str, class_type: Optional[str], json_path: Optional[str]):
    """Sucht Kurse nach Name, Fachcode oder Lehrenden."""
    mgr, config = _load_config_or_abort(ctx)
    from models.course import ClassType

    catalog = _load_catalog_or_abort(config, json_path)
    results = catalog.search(query)
    if class_type:
        wanted = ClassType.from_label(class_type)
        if wanted is None:
            raise click.BadParameter(f"Unbekannter Kurstyp: {class_type}", param_hint="--type")
        results = [c for c in results if c.type_info == wanted]

    if not results:
        console.print("[yellow]Keine Kurse gefunden.[/yellow]")
        return

    table = Table(title=f"Kurse ({len(results)})", box=box.ROUNDED, show_lines=True)
    table.add_column("Kurs", style="bold")
    table.add_column("Name")
    table.add_column("Typ")
    table.add_column("Termine")
    table.add_column("Lehrende")
    for c in results:
        table.add_row(
            c.class_code or c.id,
            c.course_name,
            c.class_type,
            "\n".join(str(s) for s in c.slots) or "—",
            c.formatted_instructors,
        )
    console.print(table)


# ─── CONFLICTS ────────────────────────────────────────────────────────────────

@click.command("conflicts")
@_catalog_option
@click.pass_context
def cmd_conflicts(ctx, json_path: Optional[str]):
    """Prüft den Kurskatalog auf Terminüberschneidungen."""
    mgr, config = _load_config_or_abort(ctx)
    from analysis.conflicts import ConflictDetector

    catalog = _load_catalog_or_abort(config, json_path)
    ConflictDetector().find_conflicts(catalog.courses).print_rich()


# ─── DAY / WEEK ───────────────────────────────────────────────────────────────

@click.command("day")
@click.option("--date", "day_value", default=None, help="Datum YYYY-MM-DD (Standard: heute).")
@_catalog_option
@_now_option
@click.pass_context
def cmd_day(ctx, day_value: Optional[str], json_path: Optional[str], now_value: Optional[str]):
    """Tagesansicht mit Zeitleisten-Positionen und Jetzt-Markierung."""
    mgr, config = _load_config_or_abort(ctx)
    from config.defaults import DAY_NAMES_HU
    from engine.layout import CalendarLayoutEngine, next_slot
    from export.tui_renderer import render_day_rows

    catalog = _load_catalog_or_abort(config, json_path)
    now = _now(now_value)
    day = _day(day_value, now)

    layout = CalendarLayoutEngine(config.timeline).layout_day(catalog.all_slots, day, now)
    title = f"{DAY_NAMES_HU[day.isoweekday()]}, {day:%Y.%m.%d.}"
    if layout.is_empty:
        console.print(f"[dim]{title}: keine Termine.[/dim]")
        return

    table = Table(title=title, box=box.ROUNDED)
    for header in ("Zeit", "Kurs", "Typ", "Ort", "Position"):
        table.add_column(header)
    for row in render_day_rows(layout, catalog, now):
        table.add_row(*row)
    console.print(table)

    if day == now.date():
        upcoming = next_slot(catalog.all_slots, now)
        if upcoming is not None:
            course = catalog.get(upcoming.course_id)
            name = course.course_name if course else upcoming.course_id
            console.print(f"Nächster Termin: [bold]{name}[/bold] {upcoming.time_range}")


@click.command("week")
@click.option("--date", "day_value", default=None, help="Ein Datum der Woche (Standard: heute).")
@_catalog_option
@_now_option
@click.pass_context
def cmd_week(ctx, day_value: Optional[str], json_path: Optional[str], now_value: Optional[str]):
    """Wochenraster aller Termine."""
    mgr, config = _load_config_or_abort(ctx)
    from engine.semester import SemesterCalculator
    from export.helpers import day_headers
    from export.tui_renderer import render_week_rows

    catalog = _load_catalog_or_abort(config, json_path)
    now = _now(now_value)
    monday = SemesterCalculator.week_start(_day(day_value, now))

    table = Table(title=f"Hét {monday:%Y.%m.%d.}", box=box.ROUNDED, show_lines=True)
    table.add_column("Idő", style="bold")
    for name in day_headers():
        table.add_column(name)
    for row in render_week_rows(catalog, config.timeline):
        table.add_row(*row)
    console.print(table)


# ─── EXPORT ───────────────────────────────────────────────────────────────────

@click.command("export")
@click.argument("fmt", type=click.Choice(["ics", "xlsx", "pdf"]))
@click.option("--output", "-o", default=None, help="Ausgabepfad (Standard: output/orarend.<fmt>).")
@click.option("--semester", "semester_label", default=None,
              help="Semester für den iCalendar-Export (Standard: Katalog bzw. aktuelles).")
@_catalog_option
@_now_option
@click.pass_context
def cmd_export(ctx, fmt: str, output: Optional[str], semester_label: Optional[str],
               json_path: Optional[str], now_value: Optional[str]):
    """Exportiert den Kurskatalog als iCalendar, Excel oder PDF."""
    mgr, config = _load_config_or_abort(ctx)
    catalog = _load_catalog_or_abort(config, json_path)
    out_path = Path(output or f"output/orarend.{fmt}")

    if fmt == "ics":
        from engine.semester import SemesterCalculator
        from export.ics_export import IcsExporter
        from models.semester import Semester

        label = semester_label or catalog.semester
        try:
            semester = (
                Semester.from_label(label) if label
                else SemesterCalculator.current(_now(now_value))
            )
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--semester")
        IcsExporter(catalog, semester, config.export).export(out_path)
    elif fmt == "xlsx":
        from export.excel_export import ExcelExporter
        ExcelExporter(catalog, config).export(out_path, stamp=_now(now_value))
    else:
        from export.pdf_export import PdfExporter
        PdfExporter(catalog, config).export(out_path, stamp=_now(now_value))

    console.print(f"[green]✓[/green] Export gespeichert: {out_path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben anzeigen.")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path),
              help="Pfad der Konfigurationsdatei (Standard: config/app_config.yaml).")
@click.pass_context
def cli(ctx, verbose: bool, config_path: Optional[Path]):
    """Órarend: Kurslisten importieren, Semester und Überschneidungen prüfen, exportieren.

    Starten Sie mit: python main.py import <kurzuslista.xlsx>
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_template)
cli.add_command(cmd_import)
cli.add_command(cmd_semester)
cli.add_command(cmd_search)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_day)
cli.add_command(cmd_week)
cli.add_command(cmd_export)


if __name__ == "__main__":
    main()
