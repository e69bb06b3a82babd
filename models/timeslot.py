"""Datenmodell für eine Unterrichtsstunde (Period) und Wochentag-Helfer."""

from models.base import ApiModel

# dayOfWeek der API: 1=Montag … 5=Freitag (6=Samstag möglich)
DAY_NAMES = ["Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"]


def day_name(day_of_week: int) -> str:
    """Abgekürzter Tagesname für ein 1-basiertes dayOfWeek."""
    if 1 <= day_of_week <= len(DAY_NAMES):
        return DAY_NAMES[day_of_week - 1]
    return str(day_of_week)


class Period(ApiModel):
    """Eine Unterrichtsstunde im Tagesraster (Stammdaten des Backends)."""

    id: int
    name: str
    start_time: str = ""
    end_time: str = ""
    # Reihenfolge im Tag, 1-basiert
    order: int

    @property
    def time_label(self) -> str:
        if self.start_time and self.end_time:
            return f"{self.start_time}–{self.end_time}"
        return ""

    def __str__(self) -> str:
        return self.name
