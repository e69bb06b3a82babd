from pydantic import BaseModel, Field, model_validator
from typing import Optional


# ─── API ───

class ApiConfig(BaseModel):
    """Verbindung zum Stundenplan-Backend."""
    # Basis-URL der REST-API (ohne abschließenden Slash)
    base_url: str = Field("http://localhost:8080/api",
        description="Basis-URL der REST-API")
    # Timeout pro HTTP-Anfrage in Sekunden
    timeout_seconds: float = Field(20.0, gt=0, le=300,
        description="Timeout pro Anfrage (Sekunden)")

    @model_validator(mode='after')
    def strip_trailing_slash(self):
        self.base_url = self.base_url.rstrip("/")
        return self


# ─── ZEITRASTER ───

class PeriodDefinition(BaseModel):
    """Eine Unterrichtsstunde (Period) aus der Stammliste."""
    # Server-ID der Stunde (periodId in Stundenplan-Einträgen)
    id: int
    # Reihenfolge im Tagesraster, 1-basiert
    order: int = Field(ge=1)
    # Anzeigename, z.B. "1. Stunde"
    name: str
    # Beginn im Format "HH:MM"
    start_time: str
    # Ende im Format "HH:MM"
    end_time: str


class PauseSlot(BaseModel):
    """Eine Pause zwischen zwei Unterrichtsstunden."""
    # Nach welcher Stunde (order) die Pause folgt
    after_order: int
    # Dauer der Pause in Minuten
    duration_minutes: int
    label: str = "Pause"


class TimeGridConfig(BaseModel):
    """Wochenraster: Tage × Stunden.

    Die Tagesschlüssel entsprechen den Schlüsseln des Wochenplans der API
    ("monday" … "friday"), Index 0 = dayOfWeek 1.
    """
    # Tagesschlüssel wie von der API verwendet
    day_keys: list[str] = Field(
        default=["monday", "tuesday", "wednesday", "thursday", "friday"],
        description="Tagesschlüssel (API)")
    # Anzeigenamen der Wochentage (gleiche Länge wie day_keys)
    day_names: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr"],
        description="Namen der Wochentage")
    # Stammliste der Unterrichtsstunden
    periods: list[PeriodDefinition] = Field(
        description="Alle Unterrichtsstunden des Tages")
    # Pausen zwischen den Stunden
    pauses: list[PauseSlot] = Field(default_factory=list,
        description="Pausen zwischen den Stunden")

    @model_validator(mode='after')
    def validate_grid(self):
        """Prüft Tagesnamen, eindeutige Stunden und Pausen-Positionen."""
        if len(self.day_keys) != len(self.day_names):
            raise ValueError(
                f"day_keys ({len(self.day_keys)}) und day_names "
                f"({len(self.day_names)}) müssen gleich lang sein")
        if not self.periods:
            raise ValueError("Mindestens eine Unterrichtsstunde erforderlich")
        orders = [p.order for p in self.periods]
        if len(set(orders)) != len(orders):
            raise ValueError(f"Doppelte Stunden-Reihenfolge: {orders}")
        ids = [p.id for p in self.periods]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Doppelte Stunden-ID: {ids}")
        for pause in self.pauses:
            if pause.after_order not in orders:
                raise ValueError(
                    f"Pause nach Stunde {pause.after_order} existiert nicht im Zeitraster")
        return self

    @property
    def period_orders(self) -> list[int]:
        """Sortierte Liste aller Stunden-Ordinalzahlen."""
        return sorted(p.order for p in self.periods)

    def order_for_period_id(self, period_id: int) -> Optional[int]:
        for p in self.periods:
            if p.id == period_id:
                return p.order
        return None


# ─── ÄNDERUNGSANTRÄGE ───

class RequestConfig(BaseModel):
    """Regeln für Änderungsanträge."""
    # Mindestlänge der Begründung
    reason_min_length: int = Field(10, ge=1, le=500,
        description="Mindestlänge der Begründung (Zeichen)")
    # Standard-Seitengröße für Antragslisten
    page_size: int = Field(10, ge=1, le=100,
        description="Einträge pro Seite")


# ─── SITZUNG ───

class SessionConfig(BaseModel):
    """Ablage der Anmeldedaten zwischen CLI-Aufrufen."""
    token_file: str = Field(".stundenplan/session.json",
        description="Pfad der Sitzungsdatei (Token + Benutzer)")


# ─── LOGGING ───

class LoggingConfig(BaseModel):
    level: str = Field("WARNING", description="Log-Level (DEBUG, INFO, WARNING, ERROR)")

    @model_validator(mode='after')
    def normalize_level(self):
        self.level = self.level.upper()
        if self.level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unbekanntes Log-Level: {self.level}")
        return self


# ─── GESAMT-CONFIG ───

class PortalConfig(BaseModel):
    """Gesamtkonfiguration des Stundenplan-Portals."""
    # Name der Schule (nur Anzeige)
    school_name: str = Field("Muster-Schule", description="Name der Schule")
    api: ApiConfig = Field(default_factory=ApiConfig)
    # Wochenraster mit Stunden-Stammliste
    time_grid: TimeGridConfig
    requests: RequestConfig = Field(default_factory=RequestConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
