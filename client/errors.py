"""Fehlerhierarchie des Portal-Clients.

PortalError
├── ValidationFailed       lokale Eingabeprüfung, erreicht nie das Netz
├── TransportError         Netzwerk / Timeout
└── ApiError               vom Server gemeldet (HTTP-Status ≥ 400)
    │                      oder Antwort passt nicht zum Datenmodell
    ├── AuthenticationError   401 → erzwungene Abmeldung
    ├── AuthorizationError    403 oder lokale Rollenprüfung
    ├── NotFoundError         404
    └── ConflictError         409 (z.B. Antrag bereits entschieden)
"""

from contextlib import contextmanager
from typing import Optional

from pydantic import ValidationError

# Fallback, wenn die API keine eigene Meldung liefert
GENERIC_MESSAGE = "Unerwarteter Fehler bei der Kommunikation mit dem Server."
NETWORK_MESSAGE = "Server nicht erreichbar. Bitte Verbindung prüfen und erneut versuchen."
INVALID_RESPONSE_MESSAGE = "Unerwartete Antwort des Servers"


class PortalError(Exception):
    """Basisklasse aller Client-Fehler."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(PortalError):
    """Eingaben ungültig; field_errors bildet Feldname → Meldung ab."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{k}: {v}" for k, v in self.field_errors.items())
        super().__init__(f"Eingaben ungültig – {details}")


class TransportError(PortalError):
    """Anfrage hat den Server nicht erreicht (oder keine Antwort erhalten)."""

    def __init__(self, message: str = NETWORK_MESSAGE, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ApiError(PortalError):
    """Vom Server gemeldeter Fehler."""

    def __init__(self, status: int, message: str = GENERIC_MESSAGE,
                 payload: Optional[dict] = None):
        super().__init__(message)
        self.status = status
        self.payload = payload or {}

    def __str__(self) -> str:
        return f"[{self.status}] {self.message}"


class AuthenticationError(ApiError):
    """Nicht (mehr) angemeldet."""

    def __init__(self, message: str = "Sitzung abgelaufen. Bitte erneut anmelden.",
                 status: int = 401, payload: Optional[dict] = None):
        super().__init__(status, message, payload)


class AuthorizationError(ApiError):
    """Angemeldet, aber nicht berechtigt."""

    def __init__(self, message: str = "Keine Berechtigung für diese Aktion.",
                 status: int = 403, payload: Optional[dict] = None):
        super().__init__(status, message, payload)


class NotFoundError(ApiError):
    pass


class ConflictError(ApiError):
    pass


_STATUS_ERRORS: dict[int, type[ApiError]] = {
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(status: int, payload: Optional[dict]) -> ApiError:
    """Baut den passenden ApiError aus HTTP-Status und Antwort-JSON.

    Die Meldung stammt aus dem Feld "message" (sonst "error"), andernfalls
    wird die generische Meldung verwendet.
    """
    payload = payload if isinstance(payload, dict) else {}
    message = payload.get("message") or payload.get("error") or GENERIC_MESSAGE
    if status == 401:
        return AuthenticationError(message, status, payload)
    if status == 403:
        return AuthorizationError(message, status, payload)
    cls = _STATUS_ERRORS.get(status, ApiError)
    return cls(status, message, payload)


@contextmanager
def server_data(what: str, status: int = 200):
    """Übersetzt Pydantic-Fehler beim Einlesen von Server-Daten in ApiError.

    Beispiel:
        with server_data("Stundenplan"):
            slots = [ScheduleSlot.model_validate(item) for item in data]
    """
    try:
        yield
    except ValidationError as e:
        first = e.errors()[0] if e.error_count() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        detail = f"{what}: {location} – {first.get('msg', '')}" if location else what
        raise ApiError(status, f"{INVALID_RESPONSE_MESSAGE} ({detail}).") from e
