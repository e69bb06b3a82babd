"""Ergebnis eines CSV-Imports (vom Backend ausgewertet)."""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import BaseModel, field_validator


class CsvErrorRow(BaseModel):
    """Eine fehlerhafte Zeile der importierten Datei."""

    row: int
    error: str
    data: str = ""


class CsvImportResult(BaseModel):
    """Antwort von POST /csv/import/{kind}."""

    success: bool
    total_rows: int = 0
    processed_rows: int = 0
    error_rows: list[CsvErrorRow] = []
    errors: list[str] = []
    processed_at: Optional[datetime] = None

    # Anzahl der in der Ausgabe gezeigten Fehlerzeilen
    MAX_SHOWN_ERRORS: ClassVar[int] = 10

    @field_validator("error_rows", "errors", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v

    @property
    def failed_rows(self) -> int:
        return len(self.error_rows)

    def print_rich(self) -> None:
        """Gibt das Import-Ergebnis formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.success and not self.error_rows:
            status = "[bold green]✓ IMPORT ERFOLGREICH[/bold green]"
        elif self.success:
            status = "[bold yellow]⚠ IMPORT MIT FEHLERN[/bold yellow]"
        else:
            status = "[bold red]✗ IMPORT FEHLGESCHLAGEN[/bold red]"

        lines = [
            status,
            f"Zeilen gesamt: {self.total_rows}  |  "
            f"verarbeitet: {self.processed_rows}  |  Fehler: {self.failed_rows}",
        ]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.error_rows:
            lines.append("\n[yellow bold]Fehlerhafte Zeilen:[/yellow bold]")
            for er in self.error_rows[: self.MAX_SHOWN_ERRORS]:
                lines.append(f"  [yellow]• Zeile {er.row}: {er.error}[/yellow]")
                if er.data:
                    lines.append(f"    [dim]{er.data}[/dim]")
            rest = len(self.error_rows) - self.MAX_SHOWN_ERRORS
            if rest > 0:
                lines.append(f"  [dim]… weitere {rest} fehlerhafte Zeilen[/dim]")

        console.print(Panel("\n".join(lines), title="CSV-Import", border_style="cyan"))
