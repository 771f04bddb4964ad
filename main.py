"""Kursplan-Generator — Haupt-CLI.

Verwendung:
  python main.py setup                      Default-Konfiguration anlegen
  python main.py config show                Konfiguration anzeigen
  python main.py sample                     Beispieldaten erzeugen und speichern
  python main.py save <datei.json>          Datensatz speichern
  python main.py load                       Gespeicherten Datensatz ausgeben
  python main.py generate                   Kursplan berechnen
  python main.py show --teacher T1          Plan einer Lehrkraft anzeigen
  python main.py show --room R1             Belegung eines Raums anzeigen
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _setup_logging(level: str) -> None:
    """Konfiguriert das Root-Logging einmalig über Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config():
    """Lädt die Konfiguration (Defaults beim Erstaufruf)."""
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr.load_or_default()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _load_input(ctx: click.Context, input_path: Optional[Path]):
    """Lädt und validiert den Datensatz aus Datei oder Ablage; bricht bei Fehlern ab."""
    from data.store import DataStore, StoreError
    from models.timetable_input import TimetableInput, InvalidPayloadError

    config = ctx.obj["config"]
    try:
        if input_path is not None:
            console.print(f"[bold]Lade Datensatz:[/bold] {input_path}")
            return TimetableInput.load_json(input_path)
        store = DataStore(config.storage.data_file)
        return TimetableInput.from_payload(store.load())
    except (InvalidPayloadError, StoreError) as e:
        console.print(f"[red bold]Ungültige Eingabe:[/red bold]\n{escape(str(e))}")
        sys.exit(1)


def _resolve_output(ctx: click.Context, path: Optional[Path]) -> Optional[Path]:
    """Relative Ergebnispfade liegen im konfigurierten Ausgabeverzeichnis."""
    if path is None or path.is_absolute():
        return path
    return ctx.obj["config"].storage.output_dir / path


# ─── SETUP ────────────────────────────────────────────────────────────────────

@click.command("setup")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
def cmd_setup(force: bool):
    """Legt die Default-Konfiguration an."""
    from config.defaults import default_app_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Verwenden Sie [bold]--force[/bold] zum Überschreiben."
        )
        return
    mgr.save(default_app_config())


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@click.pass_context
def config_show(ctx: click.Context):
    """Zeigt die aktuelle Konfiguration und die erzeugte Slot-Liste an."""
    config = ctx.obj["config"]

    console.print(Panel(
        f"[bold]{config.institution_name}[/bold]  |  "
        f"Daten: {config.storage.data_file}  |  "
        f"Ausgabe: {config.storage.output_dir}",
        title="Konfiguration",
        border_style="cyan",
    ))

    grid = config.slot_grid
    table = Table(title="Wochenraster", box=box.ROUNDED)
    table.add_column("Einheit")
    table.add_column("Beginn")
    table.add_column("Ende")
    for slot in grid.lesson_slots:
        table.add_row(str(slot.slot_number), slot.start_time, slot.end_time)
    console.print(table)
    console.print(
        f"[bold]Tage:[/bold] {', '.join(grid.day_names)} | "
        f"[bold]Slots/Woche:[/bold] {grid.slots_per_week}"
    )


# ─── SAMPLE ───────────────────────────────────────────────────────────────────

@click.command("sample")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--courses", "num_courses", default=12, type=click.IntRange(0),
              help="Anzahl Kurse.")
@click.option("--teachers", "num_teachers", default=4, type=click.IntRange(0),
              help="Anzahl Lehrkräfte.")
@click.option("--rooms", "num_rooms", default=2, type=click.IntRange(0),
              help="Anzahl Räume.")
@click.pass_context
def cmd_sample(ctx: click.Context, seed: int, num_courses: int,
               num_teachers: int, num_rooms: int):
    """Erzeugt Beispieldaten und speichert sie in der Ablage."""
    from data.sample_data import SampleDataGenerator
    from data.store import DataStore

    config = ctx.obj["config"]
    gen = SampleDataGenerator(config.slot_grid, seed=seed)
    data = gen.generate(num_courses=num_courses, num_teachers=num_teachers,
                        num_rooms=num_rooms)
    DataStore(config.storage.data_file).save(data.to_payload())

    console.print(f"\n[dim]{data.summary()}[/dim]")
    console.print(f"[green]✓[/green] Beispieldaten gespeichert: {config.storage.data_file}")


# ─── SAVE / LOAD ──────────────────────────────────────────────────────────────

@click.command("save")
@click.argument("datei", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def cmd_save(ctx: click.Context, datei: Path):
    """Speichert einen Datensatz (JSON) unverändert in der Ablage."""
    from data.store import DataStore, StoreError

    config = ctx.obj["config"]
    try:
        with open(datei, "r", encoding="utf-8") as f:
            payload = json.load(f)
        DataStore(config.storage.data_file).save(payload)
    except ValueError as e:
        console.print(f"[red bold]Kein gültiges JSON:[/red bold] {datei} ({escape(str(e))})")
        sys.exit(1)
    except StoreError as e:
        console.print(f"[red bold]{escape(str(e))}[/red bold]")
        sys.exit(1)
    console.print(f"[green]✓[/green] Gespeichert: {config.storage.data_file}")


@click.command("load")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="Datensatz in Datei schreiben statt ausgeben.")
@click.pass_context
def cmd_load(ctx: click.Context, output: Optional[Path]):
    """Gibt den gespeicherten Datensatz aus (leer, wenn nichts gespeichert ist)."""
    from data.store import DataStore, StoreError

    config = ctx.obj["config"]
    try:
        payload = DataStore(config.storage.data_file).load()
    except StoreError as e:
        console.print(f"[red bold]{escape(str(e))}[/red bold]")
        sys.exit(1)

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output is None:
        click.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]✓[/green] Datensatz geschrieben: {output}")


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--input", "-i", "input_path", default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Datensatz aus Datei statt aus der Ablage.")
@click.option("--output", "-o", default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help="Ergebnis als JSON ({ok, schedule}) speichern (relativ zum Ausgabeverzeichnis).")
@click.option("--excel", default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help="Ergebnis als Excel-Datei exportieren (relativ zum Ausgabeverzeichnis).")
@click.option("--strict", is_flag=True, default=False,
              help="Exit-Code 1, wenn Kurse unvollständig bleiben.")
@click.option("--report/--no-report", default=True,
              help="Validierung und Auslastung anzeigen.")
@click.pass_context
def cmd_generate(ctx: click.Context, input_path: Optional[Path],
                 output: Optional[Path], excel: Optional[Path],
                 strict: bool, report: bool):
    """Berechnet den Kursplan (Greedy, deterministisch)."""
    from solver.scheduler import TimetableScheduler
    from export.tui_renderer import render_schedule_rows

    config = ctx.obj["config"]
    data = _load_input(ctx, input_path)
    output = _resolve_output(ctx, output)
    excel = _resolve_output(ctx, excel)
    console.print(f"[dim]{data.summary()}[/dim]\n")

    result = TimetableScheduler(data).solve()

    table = Table(title="Kursplan", box=box.ROUNDED)
    for col in ("Code", "Kurs", "Lehrkraft", "Slot", "Raum", "Hinweis"):
        table.add_column(col)
    for row in render_schedule_rows(result):
        style = "red" if row[-1] else None
        table.add_row(*row, style=style)
    console.print(table)

    if report:
        from analysis.solution_validator import SolutionValidator
        from analysis.utilization_report import UtilizationAnalyzer

        SolutionValidator().validate(result, data).print_rich()
        analyzer = UtilizationAnalyzer()
        analyzer.print_rich(analyzer.analyze(result, data))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(
            json.dumps(result.to_response(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        console.print(f"[green]✓[/green] JSON gespeichert: {output}")

    if excel is not None:
        from export.excel_export import ExcelExporter
        ExcelExporter(result, data, title=config.institution_name).export(excel)
        console.print(f"[green]✓[/green] Excel gespeichert: {excel}")

    if strict and not result.is_complete:
        console.print(
            f"[red]{len(result.unassigned)} Kurs(e) nicht vollständig eingeplant.[/red]"
        )
        sys.exit(1)


# ─── SHOW ─────────────────────────────────────────────────────────────────────

@click.command("show")
@click.option("--teacher", "teacher_id", default=None, help="ID der Lehrkraft.")
@click.option("--room", "room_id", default=None, help="ID des Raums.")
@click.option("--input", "-i", "input_path", default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Datensatz aus Datei statt aus der Ablage.")
@click.pass_context
def cmd_show(ctx: click.Context, teacher_id: Optional[str],
             room_id: Optional[str], input_path: Optional[Path]):
    """Zeigt den Plan einer Lehrkraft oder die Belegung eines Raums."""
    from solver.scheduler import TimetableScheduler
    from export.tui_renderer import render_room_rows, render_teacher_rows

    if (teacher_id is None) == (room_id is None):
        raise click.UsageError("Genau eine der Optionen --teacher oder --room angeben.")

    data = _load_input(ctx, input_path)
    result = TimetableScheduler(data).solve()

    # IDs kommen von der Kommandozeile immer als String
    if teacher_id is not None:
        entity = next((t for t in data.teachers if str(t.id) == teacher_id), None)
        if entity is None:
            console.print(f"[red]Lehrkraft '{teacher_id}' nicht gefunden.[/red]")
            sys.exit(1)
        rows = render_teacher_rows(entity.id, result, data)
        title = f"Lehrkraft {entity.id} – {entity.name}"
        header = "Kurs / Raum"
    else:
        entity = next((r for r in data.rooms if str(r.id) == room_id), None)
        if entity is None:
            console.print(f"[red]Raum '{room_id}' nicht gefunden.[/red]")
            sys.exit(1)
        rows = render_room_rows(entity.id, result, data)
        title = f"Raum {entity.id} – {entity.name}"
        header = "Kurs / Lehrkraft"

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Slot", style="bold")
    table.add_column(header)
    for row in rows:
        table.add_row(*row)
    console.print(table)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--log-level", default=None,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"],
                                case_sensitive=False),
              help="Log-Level (überschreibt die Konfiguration).")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    """Kursplan-Generator: Kurse konfliktfrei auf Lehrkraft, Raum und Slot verteilen.

    Starten Sie mit: python main.py sample && python main.py generate
    """
    config = _load_config()
    _setup_logging((log_level or config.logging.level.value).upper())
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def main():
    """Einstiegspunkt."""
    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_sample)
cli.add_command(cmd_save)
cli.add_command(cmd_load)
cli.add_command(cmd_generate)
cli.add_command(cmd_show)


if __name__ == "__main__":
    main()
