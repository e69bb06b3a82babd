"""Anmeldung und Benutzerdaten (POST /auth/login, GET /auth/me)."""

import logging

from client.api import ApiClient
from client.errors import ApiError, PortalError, ValidationFailed, server_data
from models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Stellt die Identität her und hält die Session aktuell."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.session = api.session

    def login(self, identifier: str, password: str) -> User:
        """Meldet an und setzt Token + Benutzer in der Session."""
        errors = {}
        if not identifier or not identifier.strip():
            errors["identifier"] = "Benutzername oder E-Mail ist erforderlich."
        if not password:
            errors["password"] = "Passwort ist erforderlich."
        if errors:
            raise ValidationFailed(errors)

        data = self.api.post(
            "/auth/login",
            {"identifier": identifier.strip(), "password": password},
            auth=False,
        )
        if not isinstance(data, dict) or not data.get("token"):
            raise ApiError(200, "Anmeldung fehlgeschlagen: kein Token in der Antwort.")
        user_raw = data.get("user")
        if user_raw is None:
            # Manche Backends liefern den Benutzer nur über /auth/me
            self.session.token = data["token"]
            user_raw = self._fetch_me_raw()
        with server_data("Benutzer"):
            user = User.model_validate(user_raw)
        self.session.establish(data["token"], user, data.get("refreshToken"))
        return user

    def me(self) -> User:
        """Aktuellen Benutzer vom Server laden und Session aktualisieren."""
        data = self._fetch_me_raw()
        with server_data("Benutzer"):
            user = User.model_validate(data)
        self.session.update_user(user)
        return user

    def restore(self) -> bool:
        """Prüft ein gespeichertes Token über /auth/me.

        Bei ungültigem Token wird die Sitzung verworfen. Gibt True zurück,
        wenn die Sitzung gültig ist.
        """
        if not self.session.token:
            return False
        try:
            self.me()
        except PortalError as e:
            logger.info(f"Gespeicherte Sitzung ungültig: {e.message}")
            self.session.clear()
            return False
        return True

    def logout(self) -> None:
        self.session.clear()

    def change_password(self, current_password: str, new_password: str,
                        min_length: int = 8) -> None:
        if len(new_password) < min_length:
            raise ValidationFailed(
                {"new_password": f"Mindestens {min_length} Zeichen erforderlich."})
        if new_password == current_password:
            raise ValidationFailed(
                {"new_password": "Neues Passwort muss sich vom aktuellen unterscheiden."})
        self.api.post("/auth/change-password", {
            "currentPassword": current_password,
            "newPassword": new_password,
        })

    def _fetch_me_raw(self) -> dict:
        data = self.api.get("/auth/me")
        # GET /auth/me → {user} oder direkt das Benutzerobjekt
        if isinstance(data, dict) and isinstance(data.get("user"), dict):
            return data["user"]
        return data
