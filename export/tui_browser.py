"""Textual-Oberfläche zum Durchblättern der Klassen-Wochenpläne.

Aufruf: python main.py browse
Tasten: ↑↓ Klasse wählen, Enter laden, / filtern, r neu laden, q beenden, ? Hilfe
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from config.schema import TimeGridConfig
    from export.grid import WeeklyGrid
    from models.school_class import ClassGroup


def _matches(cls: "ClassGroup", query: str) -> bool:
    """Filter auf Klassenname oder Jahrgang (z.B. "2-3" oder "2")."""
    if not query:
        return True
    return query in cls.label.lower() or query == str(cls.grade)


def _grid_summary(grid: "WeeklyGrid") -> str:
    parts = [f"{grid.entry_count} Einträge"]
    if grid.conflicts():
        parts.append(f"{len(grid.conflicts())} mehrfach belegt")
    if grid.unplaced:
        parts.append(f"{len(grid.unplaced)} außerhalb des Rasters")
    return " · ".join(parts)


class StundenplanApp:
    """Klassen links, Wochenraster der gewählten Klasse rechts.

    Wochenpläne werden erst bei Auswahl über ``load_grid`` vom Server geholt.
    textual wird erst in ``run`` importiert.
    """

    def __init__(
        self,
        classes: list["ClassGroup"],
        load_grid: Callable[[int], "WeeklyGrid"],
        time_grid: "TimeGridConfig",
    ) -> None:
        self.classes = sorted(classes, key=lambda c: (c.grade, c.label))
        self.load_grid = load_grid
        self.time_grid = time_grid

    def run(self) -> None:
        try:
            from textual.app import App, ComposeResult
            from textual.binding import Binding
            from textual.containers import Horizontal, Vertical
            from textual.widgets import (
                DataTable, Footer, Header, Input, Label, ListItem, ListView, Static,
            )
        except ImportError:
            raise ImportError("Für 'browse' wird textual benötigt: pip install textual>=0.60")

        from client.errors import PortalError
        from export.tui_renderer import render_grid_rows

        browser = self

        class _BrowserApp(App):
            TITLE = "Stundenplan-Portal"
            CSS = """
            #classes { width: 28; border: round $primary; }
            #week { border: round $secondary; }
            #status { height: 1; color: $text-muted; }
            #filter { dock: bottom; }
            """
            BINDINGS = [
                Binding("q", "quit", "Beenden"),
                Binding("escape", "quit", "Beenden", show=False),
                Binding("/", "focus_filter", "Filter"),
                Binding("r", "reload", "Neu laden"),
                Binding("?", "help", "Hilfe"),
            ]

            def compose(self) -> ComposeResult:
                yield Header()
                with Horizontal():
                    yield ListView(id="classes")
                    with Vertical():
                        yield DataTable(id="week", zebra_stripes=True)
                        yield Static("", id="status")
                yield Input(placeholder="Klasse oder Jahrgang filtern…", id="filter")
                yield Footer()

            def on_mount(self) -> None:
                self.visible_ids: list[int] = []
                self.selected: int | None = None
                self.refill("")
                if self.visible_ids:
                    self.show(self.visible_ids[0])

            def refill(self, query: str) -> None:
                view = self.query_one("#classes", ListView)
                view.clear()
                self.visible_ids = []
                for cls in browser.classes:
                    if _matches(cls, query):
                        self.visible_ids.append(cls.id)
                        view.append(ListItem(Label(cls.label)))

            def show(self, class_id: int) -> None:
                self.selected = class_id
                week = self.query_one("#week", DataTable)
                status = self.query_one("#status", Static)
                week.clear(columns=True)
                week.add_columns("Std.", "Zeit", *browser.time_grid.day_names)
                try:
                    grid = browser.load_grid(class_id)
                except PortalError as e:
                    status.update(f"Fehler: {e.message}")
                    self.notify(e.message, title="Fehler", severity="error")
                    return
                for row in render_grid_rows(grid, browser.time_grid):
                    week.add_row(*row, height=None)
                status.update(_grid_summary(grid))

            def on_list_view_selected(self, event: ListView.Selected) -> None:
                idx = event.list_view.index
                if idx is not None and idx < len(self.visible_ids):
                    self.show(self.visible_ids[idx])

            def on_input_changed(self, event: Input.Changed) -> None:
                self.refill(event.value.strip().lower())

            def action_reload(self) -> None:
                if self.selected is not None:
                    self.show(self.selected)

            def action_focus_filter(self) -> None:
                self.query_one("#filter", Input).focus()

            def action_help(self) -> None:
                self.notify("↑↓ wählen · Enter laden · / filtern · r neu laden · q beenden",
                            title="Tasten")

        _BrowserApp().run()
