"""Klassenbrett — Bedien-CLI.

Verwendung:
  python main.py setup                       Ersteinrichtung
  python main.py config show                 Konfiguration anzeigen
  python main.py show                        Brett anzeigen
  python main.py sample                      Beispieldaten erzeugen
  python main.py reset                       Schüler und Regeln löschen
  python main.py student add <name>          Schüler anlegen
  python main.py student edit <id> <name>    Schüler bearbeiten
  python main.py student delete <id>         Schüler löschen
  python main.py student move <id> [klasse]  Schüler verschieben (ohne Klasse = Pool)
  python main.py tag add <label>             Tag anlegen
  python main.py tag delete <id|label>       Tag löschen
  python main.py rule add <id> <id> ...      Trennungsregel anlegen
  python main.py rule delete <id>            Trennungsregel löschen
  python main.py settings classes <n>        Klassenanzahl setzen
  python main.py settings level <stufe>      Schulstufe setzen
  python main.py conflicts                   Regelverletzungen anzeigen
  python main.py stats                       Klassenstatistik
  python main.py export-json                 Projektdatei schreiben
  python main.py import <datei.json>         Projektdatei laden
  python main.py export-excel                Excel-Export
  python main.py analyze                     KI-Analyse
  python main.py shell                       Interaktive Sitzung mit Undo/Redo

Der Kern (board/) hat keine eigene Prozessschnittstelle; diese CLI lädt den
gespeicherten Zustand, führt genau eine Änderung aus und speichert wieder.
"""

import shlex
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table
from rich import box

console = Console()


def _load_config():
    from config.manager import ConfigManager
    return ConfigManager().load_or_default()


def _open_board():
    """Lädt Konfiguration, Speicher und Brett."""
    from board.board import ClassBoard, initial_state
    from data.storage import BoardStorage

    config = _load_config()
    storage = BoardStorage.from_config(config)
    state = storage.load()
    if state is None:
        state = initial_state(config.default_school_level, config.default_class_count)
    rng = None
    if config.sample_seed is not None:
        import random
        rng = random.Random(config.sample_seed)
    return config, storage, ClassBoard(state, rng=rng)


def _abort(message: str) -> None:
    console.print(f"[red bold]Fehler:[/red bold] {message}")
    sys.exit(1)


def _resolve_student(board, key: str):
    """Schüler über ID oder exakten Namen finden."""
    student = board.get_student(key)
    if student is not None:
        return student
    matches = [s for s in board.students if s.name == key]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        _abort(f"Name '{key}' ist nicht eindeutig – bitte ID verwenden.")
    _abort(f"Schüler '{key}' nicht gefunden.")


def _resolve_tag_ids(board, labels) -> list[str]:
    by_label = {t.label: t.id for t in board.tags}
    ids = []
    for label in labels:
        if label in by_label:
            ids.append(by_label[label])
        elif label in board.state.tag_map():
            ids.append(label)
        else:
            _abort(f"Tag '{label}' nicht gefunden.")
    return ids


# ─── Anzeige ──────────────────────────────────────────────────────────────────

def _print_board(board) -> None:
    from board.conflicts import conflicting_student_ids
    from export.helpers import class_title, format_student

    state = board.state
    tag_map = state.tag_map()
    conflict_ids = conflicting_student_ids(state.students, state.separation_rules)
    capacity = board.capacity

    console.print(Panel(state.summary(), title="Klassenbrett", border_style="cyan"))

    table = Table(box=box.ROUNDED, show_lines=True)
    columns = [*state.class_ids, None]
    members = {cid: state.students_in_class(cid) for cid in columns}
    for cid in columns:
        count = len(members[cid])
        header = class_title(cid)
        if cid is not None:
            color = "red" if count > capacity else "bold"
            header = f"[{color}]{header} {count}/{capacity}[/{color}]"
        else:
            header = f"[dim]{header} {count}[/dim]"
        table.add_column(header)

    depth = max((len(m) for m in members.values()), default=0)
    for row in range(depth):
        cells = []
        for cid in columns:
            if row >= len(members[cid]):
                cells.append("")
                continue
            s = members[cid][row]
            text = format_student(s, tag_map)
            if s.id in conflict_ids:
                text = f"[red]⚠ {text}[/red]"
            cells.append(text)
        table.add_row(*cells)
    console.print(table)

    orphaned = board.orphaned_students()
    if orphaned:
        console.print(
            f"[yellow]⚠[/yellow]  {len(orphaned)} Schüler in nicht angezeigten Klassen: "
            + ", ".join(f"{s.name} ({s.assigned_class_id})" for s in orphaned)
        )


def _print_conflicts(board) -> None:
    pairs = board.conflicts()
    if not pairs:
        console.print("[green]✓[/green] Keine Verletzungen von Trennungsregeln.")
        return
    students = board.state.student_map()
    table = Table(title="Regelverletzungen", box=box.ROUNDED)
    table.add_column("Schüler A")
    table.add_column("Schüler B")
    table.add_column("Klasse")
    for a, b in sorted(pairs):
        table.add_row(students[a].name, students[b].name, students[a].assigned_class_id)
    console.print(table)


def _print_report(result) -> None:
    from analysis.report import AnalysisReport

    if not isinstance(result, AnalysisReport):
        console.print(Panel(str(result), title="KI-Analyse", border_style="yellow"))
        return
    console.print(Panel(
        f"[bold]Gesamtwert: {result.overall_score:.0f}[/bold]\n\n{result.overall_comment}",
        title="KI-Analyse", border_style="cyan",
    ))
    table = Table(box=box.ROUNDED)
    table.add_column("Klasse")
    table.add_column("Risiko", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Kommentar")
    for c in result.classes:
        table.add_row(c.class_id, f"{c.risk_score:.0f}", f"{c.balance_score:.0f}", c.comment)
    console.print(table)
    for rec in result.recommendations:
        console.print(f"  • {rec}")
    if result.suggested_moves:
        moves = Table(title="Vorgeschlagene Verschiebungen", box=box.SIMPLE)
        moves.add_column("#")
        moves.add_column("Schüler")
        moves.add_column("Von")
        moves.add_column("Nach")
        moves.add_column("Grund")
        for i, m in enumerate(result.suggested_moves, 1):
            moves.add_row(str(i), m.student_name, m.current_class, m.target_class, m.reason)
        console.print(moves)
        if result.predicted_score is not None:
            console.print(f"Erwarteter Wert nach Umsetzung: {result.predicted_score:.0f}")


# ─── SETUP / CONFIG ───────────────────────────────────────────────────────────

@click.command("setup")
def cmd_setup():
    """Ersteinrichtung: Schulstufe und Klassenanzahl festlegen."""
    from config.defaults import default_board_config
    from config.manager import ConfigManager
    from config.schema import SchoolLevel

    mgr = ConfigManager()
    if not mgr.first_run_check():
        if not click.confirm("Eine Konfiguration existiert bereits. Überschreiben?", default=False):
            return

    config = default_board_config()
    level = Prompt.ask(
        "Schulstufe",
        choices=[lv.value for lv in SchoolLevel],
        default=config.default_school_level.value,
    )
    count = IntPrompt.ask("Anzahl Klassen", default=config.default_class_count)
    config = config.model_copy(update={
        "default_school_level": SchoolLevel(level),
        "default_class_count": count,
    })
    try:
        config = config.model_validate(config.model_dump())
    except ValueError as e:
        _abort(str(e))
    mgr.save(config)
    console.print("[bold green]Einrichtung abgeschlossen![/bold green]")


@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()
    table = Table(title="Konfiguration", box=box.ROUNDED)
    table.add_column("Parameter", style="bold")
    table.add_column("Wert")
    table.add_row("Schulstufe", config.default_school_level.value)
    table.add_row("Klassen", str(config.default_class_count))
    table.add_row("Beispiel-Seed", str(config.sample_seed) if config.sample_seed is not None else "–")
    table.add_row("Speicher", f"{config.storage.data_dir}/{config.storage.storage_key}.json")
    table.add_row("KI-Modell", config.analysis.model)
    table.add_row("API-Schlüssel aus", config.analysis.api_key_env)
    console.print(table)


# ─── BRETT ────────────────────────────────────────────────────────────────────

@click.command("show")
def cmd_show():
    """Zeigt das Brett mit allen Klassen."""
    _, _, board = _open_board()
    _print_board(board)


@click.command("sample")
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage überschreiben.")
def cmd_sample(yes: bool):
    """Ersetzt alle Schüler durch Beispieldaten."""
    _, storage, board = _open_board()
    if board.students and not yes:
        if not click.confirm("Alle Schüler werden durch Beispieldaten ersetzt. Fortfahren?",
                             default=False):
            return
    students = board.load_sample_data()
    storage.save(board.state)
    console.print(
        f"[green]✓[/green] {len(students)} Beispielschüler auf "
        f"{board.class_count} Klassen verteilt."
    )


@click.command("reset")
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage zurücksetzen.")
def cmd_reset(yes: bool):
    """Löscht Schüler und Regeln, setzt Tags zurück."""
    _, storage, board = _open_board()
    if not yes and not click.confirm("Alle Daten zurücksetzen?", default=False):
        return
    board.reset_data()
    storage.save(board.state)
    console.print("[green]✓[/green] Brett zurückgesetzt.")


# ─── STUDENT ──────────────────────────────────────────────────────────────────

@click.group("student")
def cmd_student():
    """Schüler anlegen, bearbeiten, löschen, verschieben."""


@cmd_student.command("add")
@click.argument("name")
@click.option("--gender", type=click.Choice(["male", "female"]), default=None)
@click.option("--tag", "tags", multiple=True, help="Tag-Bezeichnung oder -ID (mehrfach).")
def student_add(name: str, gender: Optional[str], tags: tuple):
    """Legt einen neuen Schüler ohne Klasse an."""
    from board.errors import BoardValidationError

    _, storage, board = _open_board()
    try:
        student = board.add_or_update_student(name, gender, _resolve_tag_ids(board, tags))
    except BoardValidationError as e:
        _abort(str(e))
    storage.save(board.state)
    console.print(f"[green]✓[/green] {student.name} angelegt (ID {student.id}).")


@cmd_student.command("edit")
@click.argument("key")
@click.argument("name")
@click.option("--gender", type=click.Choice(["male", "female"]), default=None)
@click.option("--tag", "tags", multiple=True, help="Tag-Bezeichnung oder -ID (mehrfach).")
def student_edit(key: str, name: str, gender: Optional[str], tags: tuple):
    """Überschreibt Name, Geschlecht und Tags (Klasse bleibt)."""
    from board.errors import BoardValidationError

    _, storage, board = _open_board()
    student = _resolve_student(board, key)
    try:
        board.add_or_update_student(name, gender, _resolve_tag_ids(board, tags),
                                    student_id=student.id)
    except BoardValidationError as e:
        _abort(str(e))
    storage.save(board.state)
    console.print(f"[green]✓[/green] {student.id} aktualisiert.")


@cmd_student.command("delete")
@click.argument("key")
def student_delete(key: str):
    """Löscht einen Schüler (und ihn aus allen Trennungsregeln)."""
    _, storage, board = _open_board()
    student = _resolve_student(board, key)
    board.delete_student(student.id)
    storage.save(board.state)
    console.print(f"[green]✓[/green] {student.name} gelöscht.")


@cmd_student.command("move")
@click.argument("key")
@click.argument("target", required=False, default="")
def student_move(key: str, target: str):
    """Verschiebt einen Schüler; ohne Ziel in den Pool ohne Klasse."""
    _, storage, board = _open_board()
    student = _resolve_student(board, key)
    if board.move_student(student.id, target):
        storage.save(board.state)
        console.print(f"[green]✓[/green] {student.name} → {target or 'ohne Klasse'}")
    else:
        console.print("[dim]Keine Änderung.[/dim]")
    if board.conflicts():
        _print_conflicts(board)


# ─── TAG ──────────────────────────────────────────────────────────────────────

@click.group("tag")
def cmd_tag():
    """Tags anlegen und löschen."""


@cmd_tag.command("add")
@click.argument("label")
def tag_add(label: str):
    """Legt ein Tag mit einer noch unbenutzten Farbe an."""
    from board.errors import BoardValidationError

    _, storage, board = _open_board()
    try:
        tag = board.add_tag(label)
    except BoardValidationError as e:
        _abort(str(e))
    storage.save(board.state)
    console.print(f"[green]✓[/green] Tag '{tag.label}' angelegt ({tag.color_bg}).")


@cmd_tag.command("delete")
@click.argument("key")
def tag_delete(key: str):
    """Löscht ein Tag (per ID oder Bezeichnung) bei allen Schülern."""
    _, storage, board = _open_board()
    tag_id = _resolve_tag_ids(board, [key])[0]
    board.delete_tag(tag_id)
    storage.save(board.state)
    console.print(f"[green]✓[/green] Tag {key} gelöscht.")


@cmd_tag.command("list")
def tag_list():
    """Listet alle Tags."""
    _, _, board = _open_board()
    table = Table(box=box.ROUNDED)
    table.add_column("ID")
    table.add_column("Bezeichnung")
    table.add_column("Farbe")
    for t in board.tags:
        table.add_row(t.id, t.label, t.color_bg)
    console.print(table)


# ─── RULE ─────────────────────────────────────────────────────────────────────

@click.group("rule")
def cmd_rule():
    """Trennungsregeln anlegen und löschen."""


@cmd_rule.command("add")
@click.argument("keys", nargs=-1)
def rule_add(keys: tuple):
    """Legt eine Regel für mindestens zwei Schüler (ID oder Name) an."""
    from board.errors import BoardValidationError

    _, storage, board = _open_board()
    ids = [_resolve_student(board, k).id for k in keys]
    try:
        rule = board.add_separation_rule(ids)
    except BoardValidationError as e:
        _abort(str(e))
    storage.save(board.state)
    console.print(f"[green]✓[/green] Regel {rule.id} angelegt.")


@cmd_rule.command("delete")
@click.argument("rule_id")
def rule_delete(rule_id: str):
    """Löscht eine Trennungsregel."""
    _, storage, board = _open_board()
    if board.delete_separation_rule(rule_id):
        storage.save(board.state)
        console.print(f"[green]✓[/green] Regel {rule_id} gelöscht.")
    else:
        console.print(f"[dim]Regel {rule_id} nicht vorhanden.[/dim]")


@cmd_rule.command("list")
def rule_list():
    """Listet alle Trennungsregeln."""
    _, _, board = _open_board()
    students = board.state.student_map()
    table = Table(box=box.ROUNDED)
    table.add_column("ID")
    table.add_column("Schüler")
    for r in board.separation_rules:
        table.add_row(r.id, ", ".join(students[sid].name for sid in r.student_ids
                                      if sid in students))
    console.print(table)


# ─── SETTINGS ─────────────────────────────────────────────────────────────────

@click.group("settings")
def cmd_settings():
    """Schulstufe und Klassenanzahl des Bretts ändern."""


@cmd_settings.command("classes")
@click.argument("count", type=int)
def settings_classes(count: int):
    """Setzt die Klassenanzahl (Schüler aus wegfallenden Klassen → ohne Klasse)."""
    from board.errors import BoardValidationError

    _, storage, board = _open_board()
    try:
        board.set_class_count(count)
    except BoardValidationError as e:
        _abort(str(e))
    storage.save(board.state)
    console.print(f"[green]✓[/green] {board.class_count} Klassen.")


@cmd_settings.command("level")
@click.argument("level", type=click.Choice(["ELEMENTARY_MIDDLE", "HIGH"]))
def settings_level(level: str):
    """Setzt die Schulstufe (bestimmt die Kapazität pro Klasse)."""
    _, storage, board = _open_board()
    board.set_school_level(level)
    storage.save(board.state)
    console.print(f"[green]✓[/green] Schulstufe {level} ({board.capacity} Plätze/Klasse).")


# ─── AUSWERTUNG ───────────────────────────────────────────────────────────────

@click.command("conflicts")
def cmd_conflicts():
    """Zeigt alle Verletzungen von Trennungsregeln."""
    _, _, board = _open_board()
    _print_conflicts(board)
    sys.exit(1 if board.conflicts() else 0)


@click.command("stats")
def cmd_stats():
    """Zeigt die Klassenstatistik."""
    from board.stats import compute_stats
    from export.helpers import class_title

    _, _, board = _open_board()
    stats = compute_stats(board.state)
    tags = board.tags
    table = Table(title="Klassenstatistik", box=box.ROUNDED)
    for col in ["Klasse", "Anzahl", "m", "w", "?", "Last", "Konflikte"]:
        table.add_column(col)
    for t in tags:
        table.add_column(t.label)
    for cs in [*stats.classes, stats.unassigned]:
        count = f"{cs.student_count}/{cs.capacity}" if cs.class_id else str(cs.student_count)
        if cs.is_over_capacity:
            count = f"[red]{count}[/red]"
        table.add_row(
            class_title(cs.class_id), count, str(cs.male_count), str(cs.female_count),
            str(cs.unknown_gender_count), str(cs.burden_tag_count), str(cs.conflict_count),
            *[str(cs.tag_counts.get(t.id, 0)) for t in tags],
        )
    console.print(table)
    if stats.orphaned_student_ids:
        console.print(f"[yellow]⚠[/yellow]  {len(stats.orphaned_student_ids)} Schüler "
                      f"in nicht angezeigten Klassen.")


# ─── IMPORT / EXPORT ──────────────────────────────────────────────────────────

@click.command("export-json")
@click.option("--output", "-o", default=None, help="Zieldatei (Standard: datierter Name).")
def cmd_export_json(output: Optional[str]):
    """Schreibt das Brett als Projektdatei (JSON)."""
    from data.project_io import default_export_filename, export_project

    _, _, board = _open_board()
    out_path = Path(output or Path("output") / default_export_filename())
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(export_project(board.state), encoding="utf-8")
    console.print(f"[green]✓[/green] Projekt gespeichert: {out_path}")


@click.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--yes", is_flag=True, default=False, help="Ohne Rückfrage überschreiben.")
def cmd_import(datei: Path, yes: bool):
    """Lädt eine Projektdatei (ersetzt das gesamte Brett)."""
    from data.project_io import ProjectImportError, import_project

    _, storage, board = _open_board()
    if not yes and not click.confirm("Das aktuelle Brett wird überschrieben. Fortfahren?",
                                     default=False):
        return
    try:
        import_project(board, datei.read_text(encoding="utf-8"))
    except ProjectImportError as e:
        _abort(f"Import fehlgeschlagen:\n{e}")
    storage.save(board.state)
    console.print("[green]✓[/green] Import erfolgreich!")
    console.print(f"\n{board.state.summary()}")


@click.command("export-excel")
@click.option("--output", "-o", default="output/반편성.xlsx", help="Zieldatei.")
@click.option("--stats/--no-stats", "include_stats", default=False,
              help="Statistikblatt anhängen.")
def cmd_export_excel(output: str, include_stats: bool):
    """Exportiert die Klasseneinteilung als Excel-Datei."""
    from export.excel_export import ExcelExporter

    _, _, board = _open_board()
    path = ExcelExporter(board.state, include_stats=include_stats).export(Path(output))
    console.print(f"[green]✓[/green] Excel gespeichert: {path}")


# ─── KI-ANALYSE ───────────────────────────────────────────────────────────────

@click.command("analyze")
@click.option("--apply", "apply_moves", is_flag=True, default=False,
              help="Vorgeschlagene Verschiebungen nach Rückfrage übernehmen.")
def cmd_analyze(apply_moves: bool):
    """Lässt die aktuelle Einteilung vom KI-Dienst bewerten."""
    from analysis.gemini_client import GeminiClient
    from analysis.report import AnalysisReport, AnalysisRequest, apply_suggestion

    config, storage, board = _open_board()
    client = GeminiClient(config.analysis)
    with console.status("KI-Analyse läuft..."):
        result = client.analyze(AnalysisRequest.from_state(board.state))
    _print_report(result)

    if apply_moves and isinstance(result, AnalysisReport):
        changed = False
        for move in result.suggested_moves:
            if click.confirm(f"{move.student_name} → {move.target_class} übernehmen?",
                             default=False):
                changed = apply_suggestion(board, move) or changed
        if changed:
            storage.save(board.state)
            console.print("[green]✓[/green] Vorschläge übernommen.")


# ─── SHELL ────────────────────────────────────────────────────────────────────

_SHELL_HELP = """\
Befehle:
  show | conflicts
  move <schüler> [klasse]    (ohne Klasse = Pool)
  add <name> [male|female]   delete <schüler>
  tag <label>                untag <label>
  rule <schüler> <schüler> ...
  classes <n>
  analyze                    (KI-Analyse im Hintergrund)
  undo | redo
  save | quit"""


def _run_shell_command(board, args: list[str]) -> bool:
    """Führt einen Shell-Befehl aus; True = Zustand geändert."""
    cmd, rest = args[0], args[1:]
    if cmd == "show":
        _print_board(board)
    elif cmd == "conflicts":
        _print_conflicts(board)
    elif cmd == "move" and rest:
        student = _find_student(board, rest[0])
        return student is not None and board.move_student(student.id, rest[1] if len(rest) > 1 else None)
    elif cmd == "add" and rest:
        board.add_or_update_student(rest[0], rest[1] if len(rest) > 1 else None)
        return True
    elif cmd == "delete" and rest:
        student = _find_student(board, rest[0])
        return student is not None and board.delete_student(student.id)
    elif cmd == "tag" and rest:
        board.add_tag(rest[0])
        return True
    elif cmd == "untag" and rest:
        tag = next((t for t in board.tags if t.label == rest[0] or t.id == rest[0]), None)
        return tag is not None and board.delete_tag(tag.id)
    elif cmd == "rule":
        ids = [s.id for s in (_find_student(board, k) for k in rest) if s is not None]
        board.add_separation_rule(ids)
        return True
    elif cmd == "classes" and rest:
        return board.set_class_count(int(rest[0]))
    elif cmd == "undo":
        if not board.undo():
            console.print("[dim]Nichts rückgängig zu machen.[/dim]")
            return False
        return True
    elif cmd == "redo":
        if not board.redo():
            console.print("[dim]Nichts wiederherzustellen.[/dim]")
            return False
        return True
    else:
        console.print(_SHELL_HELP)
    return False


def _find_student(board, key: str):
    student = board.get_student(key)
    if student is None:
        student = next((s for s in board.students if s.name == key), None)
    if student is None:
        console.print(f"[yellow]Schüler '{key}' nicht gefunden.[/yellow]")
    return student


@click.command("shell")
def cmd_shell():
    """Interaktive Sitzung: Änderungen mit undo/redo, Speichern mit save."""
    from analysis.gemini_client import GeminiClient
    from analysis.runner import AnalysisRunner
    from board.errors import BoardValidationError

    config, storage, board = _open_board()
    runner = AnalysisRunner(GeminiClient(config.analysis), on_result=_print_report)
    console.print(Panel(_SHELL_HELP, title="Klassenbrett-Shell", border_style="cyan"))
    dirty = False
    while True:
        try:
            line = Prompt.ask("[bold cyan]brett[/bold cyan]")
        except (EOFError, KeyboardInterrupt):
            line = "quit"
        try:
            args = shlex.split(line)
        except ValueError as e:
            console.print(f"[yellow]{e}[/yellow]")
            continue
        if not args:
            continue
        if args[0] in ("quit", "exit"):
            if dirty and click.confirm("Änderungen speichern?", default=True):
                storage.save(board.state)
            break
        if args[0] == "analyze":
            runner.submit(board.state)
            console.print("[dim]KI-Analyse gestartet, das Brett bleibt bedienbar.[/dim]")
            continue
        if args[0] == "save":
            storage.save(board.state)
            dirty = False
            console.print("[green]✓[/green] Gespeichert.")
            continue
        try:
            dirty = _run_shell_command(board, args) or dirty
        except (BoardValidationError, ValueError) as e:
            console.print(f"[red]{e}[/red]")
    runner.shutdown(wait=False)


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
def cli():
    """Klassenbrett: Schüler auf Klassen verteilen, mit Trennungsregeln und Undo/Redo.

    Starten Sie mit: python main.py setup
    """


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_setup)
cli.add_command(cmd_config)
cli.add_command(cmd_show)
cli.add_command(cmd_sample)
cli.add_command(cmd_reset)
cli.add_command(cmd_student)
cli.add_command(cmd_tag)
cli.add_command(cmd_rule)
cli.add_command(cmd_settings)
cli.add_command(cmd_conflicts)
cli.add_command(cmd_stats)
cli.add_command(cmd_export_json)
cli.add_command(cmd_import)
cli.add_command(cmd_export_excel)
cli.add_command(cmd_analyze)
cli.add_command(cmd_shell)


if __name__ == "__main__":
    main()
