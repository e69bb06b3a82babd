"""Stundenplan-Portal — Haupt-CLI.

Verwendung:
  python main.py config init                    Konfiguration anlegen
  python main.py config show                    Konfiguration anzeigen
  python main.py login <benutzer>               Anmelden
  python main.py logout                         Abmelden
  python main.py whoami                         Angemeldeten Benutzer anzeigen
  python main.py menu                           Verfügbare Bereiche (rollenabhängig)
  python main.py schedule show --class 3        Stundenplan anzeigen (Filter UND-verknüpft)
  python main.py timetable weekly 3 --xlsx f    Wochenplan einer Klasse (+ Excel)
  python main.py timetable list --grade 2       Wochenplan-Einträge filtern
  python main.py browse                         Wochenpläne im TUI durchsuchen
  python main.py master classes|periods|rooms|subjects|teachers
                                                Stammdaten anzeigen
  python main.py request list|show|create       Änderungsanträge
  python main.py request approve|reject|cancel  Anträge moderieren / zurückziehen
  python main.py profile password               Eigenes Passwort ändern
  python main.py csv import <art> <datei>       CSV-Import (Admin)
  python main.py csv export <art>               CSV-Export (Admin)
"""

import functools
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from client.errors import PortalError, ValidationFailed

console = Console()
logger = logging.getLogger("stundenplan")


# ─── KONTEXT ──────────────────────────────────────────────────────────────────

class PortalContext:
    """Hält Konfiguration, Sitzung und ApiClient für einen CLI-Aufruf.

    Alles wird erst beim ersten Zugriff aufgebaut. Tests übergeben
    Konfiguration, Sitzung oder Transport direkt.
    """

    def __init__(self, config_path: Optional[Path] = None, config=None,
                 session=None, transport=None):
        self.config_path = config_path
        self.verbose = False
        self._config = config
        self._session = session
        self._api = None
        self.transport = transport

    @property
    def config(self):
        if self._config is None:
            from config.defaults import default_portal_config
            from config.manager import ConfigManager

            mgr = ConfigManager(self.config_path)
            if mgr.first_run_check():
                logger.info(f"Keine Konfiguration unter {mgr.path}, verwende Standardwerte")
                self._config = mgr.apply_env(default_portal_config())
            else:
                self._config = mgr.load()
            if not self.verbose:
                logging.getLogger().setLevel(self._config.logging.level)
        return self._config

    @property
    def session(self):
        if self._session is None:
            from client.session import Session, SessionStore
            store = SessionStore(Path(self.config.session.token_file))
            self._session = Session.from_store(store)
        return self._session

    @property
    def api(self):
        if self._api is None:
            from client.api import ApiClient
            self._api = ApiClient(
                self.config.api.base_url,
                self.session,
                transport=self.transport,
                timeout=self.config.api.timeout_seconds,
            )
        return self._api

    def time_grid(self):
        """Zeitraster aus der Konfiguration, Stunden möglichst vom Server."""
        from client.master import MasterDataService, time_grid_with_periods
        try:
            periods = MasterDataService(self.api).periods()
        except PortalError as e:
            logger.info(f"Stunden-Stammliste nicht geladen ({e.message}), nutze Konfiguration")
            return self.config.time_grid
        return time_grid_with_periods(self.config.time_grid, periods)

    def workflow(self):
        from workflow.change_requests import ChangeRequestWorkflow
        return ChangeRequestWorkflow(
            self.api, self.config.requests,
            days_per_week=len(self.config.time_grid.day_keys),
        )


pass_portal = click.make_pass_decorator(PortalContext)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def handle_errors(func):
    """Gibt Portal-Fehler formatiert aus und beendet mit Exit-Code 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationFailed as e:
            console.print("[red bold]Eingaben ungültig:[/red bold]")
            for field, message in e.field_errors.items():
                console.print(f"  [red]• {field}: {message}[/red]")
            sys.exit(1)
        except PortalError as e:
            console.print(f"[red bold]Fehler:[/red bold] {e.message}")
            sys.exit(1)
    return wrapper


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--base-url", default=None, help="Basis-URL der REST-API.")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
@pass_portal
def config_init(portal: PortalContext, base_url: Optional[str], force: bool):
    """Schreibt eine Standard-Konfiguration als YAML."""
    from config.defaults import default_portal_config
    from config.manager import ConfigManager

    mgr = ConfigManager(portal.config_path)
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Konfiguration existiert bereits: {mgr.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(default_portal_config(base_url))
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


@cmd_config.command("show")
@pass_portal
@handle_errors
def config_show(portal: PortalContext):
    """Zeigt die aktuelle Konfiguration an."""
    config = portal.config
    console.print(Panel(
        f"[bold]{config.school_name}[/bold]  |  API: {config.api.base_url}  |  "
        f"Timeout: {config.api.timeout_seconds:g}s",
        title="Portal-Konfiguration",
        border_style="cyan",
    ))

    tg = config.time_grid
    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("ID")
    table.add_column("Std.")
    table.add_column("Beginn")
    table.add_column("Ende")
    for p in sorted(tg.periods, key=lambda p: p.order):
        table.add_row(str(p.id), p.name, p.start_time, p.end_time)
    console.print(table)
    console.print(f"[bold]Tage:[/bold] {', '.join(tg.day_names)}")
    console.print(
        f"[bold]Anträge:[/bold] Begründung ≥ {config.requests.reason_min_length} Zeichen | "
        f"{config.requests.page_size} pro Seite"
    )
    console.print(f"[bold]Sitzungsdatei:[/bold] {config.session.token_file}")


# ─── ANMELDUNG ────────────────────────────────────────────────────────────────

@click.command("login")
@click.argument("identifier")
@click.option("--password", prompt="Passwort", hide_input=True,
              help="Passwort (wird sonst abgefragt).")
@pass_portal
@handle_errors
def cmd_login(portal: PortalContext, identifier: str, password: str):
    """Anmelden mit Benutzername oder E-Mail."""
    from client.auth import AuthService

    user = AuthService(portal.api).login(identifier, password)
    console.print(f"[green]✓[/green] Angemeldet als [bold]{user.name}[/bold] ({user.role.value})")


@click.command("logout")
@pass_portal
def cmd_logout(portal: PortalContext):
    """Abmelden und gespeichertes Token löschen."""
    from client.auth import AuthService

    AuthService(portal.api).logout()
    console.print("[green]✓[/green] Abgemeldet.")


@click.command("whoami")
@click.option("--check", is_flag=True, default=False,
              help="Token beim Server prüfen (GET /auth/me).")
@pass_portal
@handle_errors
def cmd_whoami(portal: PortalContext, check: bool):
    """Zeigt den angemeldeten Benutzer."""
    from client.auth import AuthService

    session = portal.session
    if check and not AuthService(portal.api).restore():
        console.print("[yellow]Sitzung ungültig oder abgelaufen.[/yellow]")
        sys.exit(1)
    if not session.is_authenticated:
        console.print("[dim]Nicht angemeldet.[/dim]")
        sys.exit(1)
    user = session.user
    lines = [f"[bold]{user.name}[/bold]  |  Rolle: {user.role.value}"]
    if user.email:
        lines.append(f"E-Mail: {user.email}")
    if user.class_id is not None:
        lines.append(f"Klasse: {user.class_id}")
    console.print(Panel("\n".join(lines), title="Benutzer", border_style="cyan"))


@click.command("menu")
@pass_portal
@handle_errors
def cmd_menu(portal: PortalContext):
    """Listet die für die eigene Rolle sichtbaren Bereiche."""
    from client.errors import AuthenticationError
    from workflow.navigation import navigation_for

    if not portal.session.is_authenticated:
        raise AuthenticationError("Nicht angemeldet. Bitte zuerst 'login' ausführen.")
    table = Table(title="Navigation", box=box.ROUNDED)
    table.add_column("Bereich", style="bold")
    table.add_column("Befehl", style="cyan")
    for item in navigation_for(portal.session):
        table.add_row(item.label, item.command)
    console.print(table)


# ─── STUNDENPLAN ──────────────────────────────────────────────────────────────

@click.group("schedule")
def cmd_schedule():
    """Stundenplan-Einträge abrufen."""


@cmd_schedule.command("show")
@click.option("--class", "class_id", type=int, default=None, help="Klassen-ID.")
@click.option("--teacher", "teacher_id", type=int, default=None, help="Lehrkraft-ID.")
@click.option("--room", "room_id", type=int, default=None, help="Raum-ID.")
@click.option("--day", "day_of_week", type=click.IntRange(1, 7), default=None,
              help="Wochentag (1=Mo … 5=Fr).")
@click.option("--term", type=click.Choice(["first_semester", "second_semester", "full_year"]),
              default=None, help="Halbjahr.")
@click.option("--list", "as_list", is_flag=True, default=False,
              help="Als Liste statt als Wochenraster ausgeben.")
@pass_portal
@handle_errors
def schedule_show(portal: PortalContext, class_id, teacher_id, room_id,
                  day_of_week, term, as_list: bool):
    """Zeigt Einträge; alle Filter werden UND-verknüpft."""
    from client.schedules import ScheduleFetcher
    from export.grid import build_weekly_grid
    from export.tui_renderer import grid_table
    from models.schedule import ScheduleFilter
    from models.subject import Term
    from models.user import Capability

    portal.session.require(Capability.VIEW_SCHEDULES)
    flt = ScheduleFilter(
        class_id=class_id, teacher_id=teacher_id, room_id=room_id,
        day_of_week=day_of_week, term=Term(term) if term else None,
    )
    time_grid = portal.time_grid()
    slots = ScheduleFetcher(portal.api, time_grid).fetch(flt)
    if not slots:
        console.print("[dim]Keine Einträge gefunden.[/dim]")
        return

    if as_list or day_of_week is not None:
        table = Table(title=f"Stundenplan ({len(slots)} Einträge)", box=box.ROUNDED)
        for col in ("ID", "Tag", "Stunde", "Klasse", "Fach", "Lehrkräfte", "Räume"):
            table.add_column(col)
        for s in sorted(slots, key=lambda s: (s.day_of_week, s.period_id, s.id)):
            table.add_row(
                str(s.id), s.day_name,
                s.period.name if s.period else str(s.period_id),
                s.class_label,
                s.subject_label + ("" if s.is_original else " (geändert)"),
                ", ".join(t.name for t in s.teachers),
                ", ".join(r.name for r in s.rooms),
            )
        console.print(table)
        return

    mode = "teacher" if teacher_id is not None else "room" if room_id is not None else "class"
    grid = build_weekly_grid(slots, time_grid)
    console.print(grid_table(grid, time_grid, title="Wochenplan", mode=mode))
    if grid.unplaced:
        console.print(f"[yellow]{len(grid.unplaced)} Einträge außerhalb des Rasters.[/yellow]")


@click.group("timetable")
def cmd_timetable():
    """Wochenpläne (CSV-basierter Stundenplan)."""


@cmd_timetable.command("weekly")
@click.argument("class_id", type=int)
@click.option("--xlsx", "xlsx_path", type=click.Path(path_type=Path), default=None,
              help="Zusätzlich als Excel-Datei speichern.")
@pass_portal
@handle_errors
def timetable_weekly(portal: PortalContext, class_id: int, xlsx_path: Optional[Path]):
    """Zeigt den Wochenplan einer Klasse."""
    from client.schedules import ScheduleFetcher
    from export.excel_export import ExcelExporter
    from export.tui_renderer import grid_table
    from models.user import Capability

    portal.session.require(Capability.VIEW_SCHEDULES)
    time_grid = portal.config.time_grid
    grid = ScheduleFetcher(portal.api, time_grid).weekly_timetable(class_id)
    title = f"Klasse {class_id}"
    console.print(grid_table(grid, time_grid, title=f"Wochenplan {title}"))
    conflicts = grid.conflicts()
    if conflicts:
        console.print(f"[yellow]{len(conflicts)} Zellen mehrfach belegt.[/yellow]")

    if xlsx_path is not None:
        out = ExcelExporter({title: grid}, time_grid,
                            school_name=portal.config.school_name).export(xlsx_path)
        console.print(f"[green]✓[/green] Excel gespeichert: {out}")


@cmd_timetable.command("list")
@click.option("--grade", type=int, default=None, help="Jahrgang.")
@click.option("--class", "class_id", type=int, default=None, help="Klassen-ID.")
@click.option("--day", type=click.Choice(["monday", "tuesday", "wednesday", "thursday",
                                          "friday"]), default=None, help="Wochentag.")
@pass_portal
@handle_errors
def timetable_list(portal: PortalContext, grade: Optional[int], class_id: Optional[int],
                   day: Optional[str]):
    """Listet Wochenplan-Einträge, gefiltert nach Jahrgang, Klasse und Tag."""
    from client.schedules import ScheduleFetcher
    from models.user import Capability

    portal.session.require(Capability.VIEW_SCHEDULES)
    entries = ScheduleFetcher(portal.api, portal.config.time_grid).timetables(
        grade=grade, class_id=class_id, day=day)
    if not entries:
        console.print("[dim]Keine Einträge gefunden.[/dim]")
        return
    day_order = {key: i for i, key in enumerate(portal.config.time_grid.day_keys)}
    table = Table(title=f"Wochenplan-Einträge ({len(entries)})", box=box.ROUNDED)
    for col in ("ID", "Klasse", "Tag", "Std.", "Fach", "Lehrkraft", "Raum"):
        table.add_column(col)
    for e in sorted(entries, key=lambda e: (e.class_id, day_order.get(e.day, 99), e.period)):
        table.add_row(str(e.id), e.class_label, e.day, str(e.period),
                      e.subject_label, e.teacher_label, e.room)
    console.print(table)


@click.command("browse")
@pass_portal
@handle_errors
def cmd_browse(portal: PortalContext):
    """Öffnet den interaktiven Wochenplan-Browser."""
    from client.master import MasterDataService
    from client.schedules import ScheduleFetcher
    from export.tui_browser import StundenplanApp
    from models.user import Capability

    portal.session.require(Capability.VIEW_SCHEDULES)
    classes = MasterDataService(portal.api).classes()
    if not classes:
        console.print("[dim]Keine Klassen vorhanden.[/dim]")
        return
    fetcher = ScheduleFetcher(portal.api, portal.config.time_grid)
    StundenplanApp(classes, fetcher.weekly_timetable, portal.config.time_grid).run()


# ─── STAMMDATEN ───────────────────────────────────────────────────────────────

@click.group("master")
def cmd_master():
    """Stammdaten anzeigen (Klassen, Stunden, Räume, Fächer, Lehrkräfte)."""


def _master_data(portal: PortalContext):
    from client.master import MasterDataService
    from models.user import Capability

    portal.session.require(Capability.VIEW_SCHEDULES)
    return MasterDataService(portal.api)


def _print_rows(title: str, columns: tuple, rows: list) -> None:
    if not rows:
        console.print(f"[dim]Keine {title} vorhanden.[/dim]")
        return
    table = Table(title=f"{title} ({len(rows)})", box=box.ROUNDED)
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*row)
    console.print(table)


@cmd_master.command("classes")
@pass_portal
@handle_errors
def master_classes(portal: PortalContext):
    """Listet alle Klassen."""
    classes = _master_data(portal).classes()
    _print_rows("Klassen", ("ID", "Jahrgang", "Klasse"),
                [(str(c.id), str(c.grade or "-"), c.label)
                 for c in sorted(classes, key=lambda c: (c.grade, c.label))])


@cmd_master.command("periods")
@pass_portal
@handle_errors
def master_periods(portal: PortalContext):
    """Listet die Unterrichtsstunden mit Uhrzeiten."""
    periods = _master_data(portal).periods()
    _print_rows("Stunden", ("ID", "Nr.", "Stunde", "Zeit"),
                [(str(p.id), str(p.order), p.name, p.time_label or "-") for p in periods])


@cmd_master.command("rooms")
@pass_portal
@handle_errors
def master_rooms(portal: PortalContext):
    """Listet alle Räume."""
    rooms = _master_data(portal).rooms()
    _print_rows("Räume", ("ID", "Raum", "Gebäude", "Plätze"),
                [(str(r.id), r.name, r.building or "-",
                  str(r.capacity) if r.capacity is not None else "-")
                 for r in sorted(rooms, key=lambda r: r.name)])


@cmd_master.command("subjects")
@pass_portal
@handle_errors
def master_subjects(portal: PortalContext):
    """Listet alle Fächer."""
    subjects = _master_data(portal).subjects()
    _print_rows("Fächer", ("ID", "Kürzel", "Fach", "Halbjahr"),
                [(str(s.id), s.code or "-", s.name, s.term.value if s.term else "-")
                 for s in sorted(subjects, key=lambda s: s.name)])


@cmd_master.command("teachers")
@pass_portal
@handle_errors
def master_teachers(portal: PortalContext):
    """Listet alle Lehrkräfte (IDs für 'schedule show --teacher')."""
    teachers = _master_data(portal).teachers()
    _print_rows("Lehrkräfte", ("ID", "Name"), [(str(t.id), t.name) for t in teachers])


# ─── ÄNDERUNGSANTRÄGE ─────────────────────────────────────────────────────────

def _print_request(request, actions=()) -> None:
    lines = [
        f"Status: [bold]{request.status.label}[/bold]",
        f"Eintrag: {request.original_schedule or request.original_schedule_id}",
        f"Neu: {request.target_label}  |  Räume: "
        f"{', '.join(str(r) for r in request.room_ids) or '-'}",
        f"Begründung: {request.reason}",
        f"Antragsteller: {request.requested_by_user or request.requested_by}",
    ]
    if request.comment:
        lines.append(f"Kommentar: {request.comment}")
    if request.reject_reason:
        lines.append(f"Ablehnungsgrund: {request.reject_reason}")
    if actions:
        lines.append(f"[dim]Mögliche Aktionen: {', '.join(sorted(a.value for a in actions))}[/dim]")
    console.print(Panel("\n".join(lines), title=f"Antrag #{request.id}", border_style="cyan"))


@click.group("request")
def cmd_request():
    """Änderungsanträge stellen und moderieren."""


@cmd_request.command("list")
@click.option("--status", type=click.Choice(["pending", "approved", "rejected", "cancelled"]),
              default=None, help="Nur Anträge mit diesem Status.")
@click.option("--page", type=click.IntRange(min=1), default=1)
@click.option("--page-size", type=click.IntRange(1, 100), default=None)
@click.option("--mine", is_flag=True, default=False, help="Nur eigene Anträge.")
@pass_portal
@handle_errors
def request_list(portal: PortalContext, status, page: int, page_size, mine: bool):
    """Listet Änderungsanträge seitenweise."""
    from models.change_request import RequestStatus

    result = portal.workflow().list_requests(
        status=RequestStatus(status) if status else None,
        page=page, page_size=page_size, mine=mine,
    )
    if not result.items:
        console.print("[dim]Keine Anträge gefunden.[/dim]")
        return
    table = Table(title=f"Änderungsanträge (Seite {result.page}/{max(result.total_pages, 1)}, "
                        f"{result.total} gesamt)", box=box.ROUNDED)
    for col in ("ID", "Status", "Eintrag", "Neu", "Antragsteller", "Begründung"):
        table.add_column(col)
    for r in result.items:
        table.add_row(
            str(r.id), r.status.label, str(r.original_schedule_id), r.target_label,
            r.requested_by_user.name if r.requested_by_user else str(r.requested_by),
            r.reason,
        )
    console.print(table)


@cmd_request.command("show")
@click.argument("request_id", type=int)
@pass_portal
@handle_errors
def request_show(portal: PortalContext, request_id: int):
    """Zeigt einen Antrag mit den möglichen Aktionen."""
    from models.user import Capability

    portal.session.require(Capability.VIEW_REQUESTS)
    wf = portal.workflow()
    request = wf.get(request_id)
    _print_request(request, wf.available_actions(request))


@cmd_request.command("create")
@click.option("--slot", "slot_id", type=int, required=True,
              help="ID des ursprünglichen Stundenplan-Eintrags.")
@click.option("--day", "new_day", type=int, required=True, help="Neuer Wochentag (1=Mo).")
@click.option("--period", "new_period", type=int, required=True, help="Neue Stunden-ID.")
@click.option("--room", "room_ids", type=int, multiple=True, help="Raum-ID (mehrfach möglich).")
@click.option("--reason", required=True, help="Begründung.")
@click.option("--yes", "-y", is_flag=True, default=False, help="Ohne Rückfrage absenden.")
@pass_portal
@handle_errors
def request_create(portal: PortalContext, slot_id: int, new_day: int, new_period: int,
                   room_ids: tuple, reason: str, yes: bool):
    """Stellt einen Antrag auf Verlegung eines Eintrags."""
    from models.timeslot import day_name
    from models.user import Capability

    portal.session.require(Capability.CREATE_REQUEST)
    wf = portal.workflow()
    draft = wf.new_draft()
    draft.select_slot(slot_id)
    if not draft.propose(new_day, new_period, list(room_ids), reason):
        raise ValidationFailed(draft.errors)

    console.print(
        f"Eintrag {slot_id} → {day_name(new_day)}, Stunde {new_period}, "
        f"Räume {', '.join(map(str, room_ids))}"
    )
    if not yes and not click.confirm("Antrag absenden?", default=True):
        console.print("[dim]Abgebrochen.[/dim]")
        return
    request = wf.submit(draft)
    console.print(f"[green]✓[/green] Antrag #{request.id} gestellt ({request.status.label}).")


@cmd_request.command("approve")
@click.argument("request_id", type=int)
@click.option("--comment", default=None, help="Kommentar zur Genehmigung.")
@pass_portal
@handle_errors
def request_approve(portal: PortalContext, request_id: int, comment: Optional[str]):
    """Genehmigt einen offenen Antrag (Admin)."""
    request = portal.workflow().approve(request_id, comment)
    console.print(f"[green]✓[/green] Antrag #{request.id}: {request.status.label}")


@cmd_request.command("reject")
@click.argument("request_id", type=int)
@click.option("--reason", required=True, help="Ablehnungsgrund (Pflicht).")
@pass_portal
@handle_errors
def request_reject(portal: PortalContext, request_id: int, reason: str):
    """Lehnt einen offenen Antrag ab (Admin)."""
    request = portal.workflow().reject(request_id, reason)
    console.print(f"[green]✓[/green] Antrag #{request.id}: {request.status.label}")


@cmd_request.command("cancel")
@click.argument("request_id", type=int)
@pass_portal
@handle_errors
def request_cancel(portal: PortalContext, request_id: int):
    """Zieht einen eigenen offenen Antrag zurück."""
    request = portal.workflow().cancel(request_id)
    console.print(f"[green]✓[/green] Antrag #{request.id}: {request.status.label}")


# ─── PROFIL ───────────────────────────────────────────────────────────────────

@click.group("profile")
def cmd_profile():
    """Eigenes Benutzerkonto."""


@cmd_profile.command("password")
@click.option("--current", prompt="Aktuelles Passwort", hide_input=True,
              help="Aktuelles Passwort (wird sonst abgefragt).")
@click.option("--new", "new_password", prompt="Neues Passwort", hide_input=True,
              confirmation_prompt=True, help="Neues Passwort (wird sonst abgefragt).")
@pass_portal
@handle_errors
def profile_password(portal: PortalContext, current: str, new_password: str):
    """Ändert das eigene Passwort."""
    from client.auth import AuthService
    from client.errors import AuthenticationError

    if not portal.session.is_authenticated:
        raise AuthenticationError("Nicht angemeldet. Bitte zuerst 'login' ausführen.")
    AuthService(portal.api).change_password(current, new_password)
    console.print("[green]✓[/green] Passwort geändert.")


# ─── CSV ──────────────────────────────────────────────────────────────────────

@click.group("csv")
def cmd_csv():
    """CSV-Import und -Export von Fächern und Stundenplänen (Admin)."""


@cmd_csv.command("import")
@click.argument("kind", type=click.Choice(["subjects", "timetables"]))
@click.argument("datei", type=click.Path(path_type=Path))
@pass_portal
@handle_errors
def csv_import(portal: PortalContext, kind: str, datei: Path):
    """Lädt eine CSV-Datei zur Auswertung hoch."""
    from client.csv_service import CsvService

    result = CsvService(portal.api).import_file(kind, datei)
    result.print_rich()
    if not result.success:
        sys.exit(1)


@cmd_csv.command("export")
@click.argument("kind", type=click.Choice(["subjects", "timetables"]))
@click.option("--grade", type=int, default=None, help="Nur diesen Jahrgang exportieren.")
@click.option("--out", "out_dir", type=click.Path(file_okay=False, path_type=Path),
              default=Path("."), help="Zielverzeichnis.")
@pass_portal
@handle_errors
def csv_export(portal: PortalContext, kind: str, grade: Optional[int], out_dir: Path):
    """Speichert den CSV-Export als {art}_{Datum}.csv."""
    from client.csv_service import CsvService

    path = CsvService(portal.api).export(kind, out_dir, grade=grade)
    console.print(f"[green]✓[/green] Export gespeichert: {path}")


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None,
              help="Pfad zur Konfigurationsdatei.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug-Ausgaben.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool):
    """Stundenplan-Portal: Stundenpläne ansehen und Änderungen beantragen.

    Starten Sie mit: python main.py login <benutzer>
    """
    _setup_logging("DEBUG" if verbose else "WARNING")
    if ctx.obj is None:
        ctx.obj = PortalContext(config_path=config_path)
    elif config_path is not None:
        ctx.obj.config_path = config_path
    ctx.obj.verbose = verbose


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_login)
cli.add_command(cmd_logout)
cli.add_command(cmd_whoami)
cli.add_command(cmd_menu)
cli.add_command(cmd_schedule)
cli.add_command(cmd_timetable)
cli.add_command(cmd_browse)
cli.add_command(cmd_master)
cli.add_command(cmd_request)
cli.add_command(cmd_profile)
cli.add_command(cmd_csv)


if __name__ == "__main__":
    main()
