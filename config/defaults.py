from config.schema import (
    ApiConfig,
    PauseSlot,
    PeriodDefinition,
    PortalConfig,
    TimeGridConfig,
)


def default_time_grid() -> TimeGridConfig:
    """Standard-Wochenraster mit vier Doppelstunden-Blöcken.

    Stundenraster:
    1. Stunde  08:00 - 09:30
       ── Pause (15 min) ──
    2. Stunde  09:45 - 11:15
       ── Pause (15 min) ──
    3. Stunde  11:30 - 13:00
       ── Mittagspause (45 min) ──
    4. Stunde  13:45 - 15:15

    Die Stunden-IDs entsprechen der Period-Stammliste des Backends.
    Weicht die Schule davon ab, wird die Liste per `config init` oder
    direkt in der YAML-Datei angepasst.
    """
    return TimeGridConfig(
        day_keys=["monday", "tuesday", "wednesday", "thursday", "friday"],
        day_names=["Mo", "Di", "Mi", "Do", "Fr"],
        periods=[
            PeriodDefinition(id=1, order=1, name="1. Stunde",
                             start_time="08:00", end_time="09:30"),
            PeriodDefinition(id=2, order=2, name="2. Stunde",
                             start_time="09:45", end_time="11:15"),
            PeriodDefinition(id=3, order=3, name="3. Stunde",
                             start_time="11:30", end_time="13:00"),
            PeriodDefinition(id=4, order=4, name="4. Stunde",
                             start_time="13:45", end_time="15:15"),
        ],
        pauses=[
            PauseSlot(after_order=1, duration_minutes=15, label="Pause"),
            PauseSlot(after_order=2, duration_minutes=15, label="Pause"),
            PauseSlot(after_order=3, duration_minutes=45, label="Mittagspause"),
        ],
    )


def default_portal_config(base_url: str | None = None) -> PortalConfig:
    """Vollständige Default-Konfiguration."""
    api = ApiConfig(base_url=base_url) if base_url else ApiConfig()
    return PortalConfig(
        school_name="Muster-Schule",
        api=api,
        time_grid=default_time_grid(),
    )


# Umgebungsvariable überschreibt api.base_url aus der YAML-Datei
API_URL_ENV = "STUNDENPLAN_API_URL"

# Maximale Größe einer CSV-Datei für den Import (10 MiB)
CSV_MAX_BYTES = 10 * 1024 * 1024

# Gültige CSV-Arten (Import und Export)
CSV_KINDS = ("subjects", "timetables")
