"""Sitzungskontext: Token, angemeldeter Benutzer und Berechtigungen.

Die Session wird explizit an ApiClient und alle Dienste übergeben.
Schreibzugriffe auf das Token gibt es nur bei Anmeldung, Abmeldung und
Token-Erneuerung; der letzte Schreibvorgang gewinnt.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from client.errors import AuthenticationError, AuthorizationError
from models.user import Capability, User

logger = logging.getLogger(__name__)


class Session:
    """Aktuelle Anmeldung eines Benutzers."""

    def __init__(self, store: Optional["SessionStore"] = None):
        self.store = store
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.user: Optional[User] = None
        self._capabilities: frozenset[Capability] = frozenset()

    # ─── Zustand ───

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.user is not None

    @property
    def capabilities(self) -> frozenset[Capability]:
        return self._capabilities

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user else None

    def can(self, capability: Capability) -> bool:
        return capability in self._capabilities

    def require(self, capability: Capability) -> User:
        """Gibt den Benutzer zurück oder wirft, wenn die Berechtigung fehlt."""
        if self.user is None:
            raise AuthenticationError("Nicht angemeldet. Bitte zuerst 'login' ausführen.")
        if not self.can(capability):
            raise AuthorizationError(
                f"Rolle '{self.user.role.value}' darf '{capability.value}' nicht ausführen."
            )
        return self.user

    # ─── Übergänge ───

    def establish(self, token: str, user: User,
                  refresh_token: Optional[str] = None) -> None:
        """Setzt eine neue Anmeldung; Berechtigungen werden einmalig berechnet."""
        self.token = token
        self.refresh_token = refresh_token
        self.user = user
        self._capabilities = user.capabilities
        logger.info(f"Angemeldet: {user}")
        self._persist()

    def update_token(self, token: str, refresh_token: Optional[str] = None) -> None:
        """Token-Erneuerung (letzter Schreibvorgang gewinnt)."""
        self.token = token
        if refresh_token is not None:
            self.refresh_token = refresh_token
        self._persist()

    def update_user(self, user: User) -> None:
        self.user = user
        self._capabilities = user.capabilities
        self._persist()

    def clear(self) -> None:
        """Abmeldung: Token und Benutzer verwerfen."""
        self.token = None
        self.refresh_token = None
        self.user = None
        self._capabilities = frozenset()
        if self.store is not None:
            self.store.delete()

    def force_logout(self, reason: str = "") -> None:
        """Wird bei jeder 401-Antwort ausgelöst."""
        if self.token is not None:
            logger.warning(f"Erzwungene Abmeldung{': ' + reason if reason else ''}")
        self.clear()

    def _persist(self) -> None:
        if self.store is not None and self.token is not None:
            self.store.save(self)

    # ─── Laden ───

    @classmethod
    def from_store(cls, store: "SessionStore") -> "Session":
        """Stellt eine gespeicherte Sitzung wieder her (ohne Serverprüfung)."""
        session = cls(store=store)
        raw = store.load()
        if not (isinstance(raw, dict) and raw.get("token") and raw.get("user")):
            return session
        try:
            user = User.model_validate(raw["user"])
        except ValidationError as e:
            logger.warning(f"Gespeicherte Sitzung verworfen ({store.path}): {e.error_count()} Fehler")
            store.delete()
            return session
        session.token = raw["token"]
        session.refresh_token = raw.get("refreshToken")
        session.user = user
        session._capabilities = user.capabilities
        return session


class SessionStore:
    """JSON-Datei mit Token, Refresh-Token und Benutzerdaten."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[dict]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Sitzungsdatei unlesbar ({self.path}): {e}")
            return None

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "token": session.token,
            "refreshToken": session.refresh_token,
            "user": session.user.model_dump(mode="json", by_alias=True) if session.user else None,
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def delete(self) -> None:
        if self.path.exists():
            self.path.unlink()
