"""ApiClient: gemeinsamer Zugang zur REST-API des Stundenplan-Backends.

Aufgaben:
- Bearer-Token aus der Session an jede Anfrage hängen (außer Login)
- Antwort-Hülle {success, data, message} auspacken
- HTTP-Fehler in die Fehlerhierarchie übersetzen
- bei 401 die Session abmelden
Keine automatischen Wiederholungen.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote, urlencode

from client.errors import (
    ApiError,
    AuthenticationError,
    GENERIC_MESSAGE,
    error_for_status,
)
from client.session import Session
from client.transport import HttpResponse, UrllibTransport, encode_multipart

logger = logging.getLogger(__name__)


class ApiClient:
    """Synchroner JSON-Client; eine Anfrage pro Aufruf."""

    def __init__(self, base_url: str, session: Session,
                 transport=None, timeout: float = 20.0):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.transport = transport or UrllibTransport()
        self.timeout = timeout

    # ─── Öffentliche API ─────────────────────────────────────────────────────

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self.unwrap(self.request("GET", endpoint, params=params))

    def post(self, endpoint: str, data: Optional[dict] = None,
             auth: bool = True) -> Any:
        return self.unwrap(self.request("POST", endpoint, json_body=data, auth=auth))

    def put(self, endpoint: str, data: Optional[dict] = None) -> Any:
        return self.unwrap(self.request("PUT", endpoint, json_body=data))

    def delete(self, endpoint: str) -> Any:
        return self.unwrap(self.request("DELETE", endpoint))

    def upload(self, endpoint: str, path: Path, field_name: str = "file",
               unwrap: bool = True) -> Any:
        """Lädt eine Datei als multipart/form-data hoch.

        Mit unwrap=False wird das Antwort-JSON unverändert zurückgegeben
        (der CSV-Import meldet Teilerfolge über success=false).
        """
        path = Path(path)
        body, content_type = encode_multipart(field_name, path.name, path.read_bytes())
        response = self.request("POST", endpoint, body=body, content_type=content_type)
        if not unwrap:
            return response.json()
        return self.unwrap(response)

    def download(self, endpoint: str, params: Optional[dict] = None) -> bytes:
        """GET mit binärer Antwort (z.B. CSV-Export).

        Eine JSON-Antwort ist keine Datei: sie wird wie bei get() ausgepackt,
        success=false wird damit zum ApiError.
        """
        response = self.request("GET", endpoint, params=params)
        if response.content_type.lower().startswith("application/json"):
            data = self.unwrap(response)
            if isinstance(data, str):
                return data.encode("utf-8")
            raise ApiError(response.status, "Server hat keine Datei geliefert.")
        return response.body

    # ─── Kern ────────────────────────────────────────────────────────────────

    def url_for(self, endpoint: str, params: Optional[dict] = None) -> str:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        clean = {k: v for k, v in (params or {}).items() if v is not None and v != ""}
        if clean:
            url = f"{url}?{urlencode(clean, doseq=True)}"
        return url

    def request(self, method: str, endpoint: str, params: Optional[dict] = None,
                json_body: Optional[dict] = None, body: Optional[bytes] = None,
                content_type: Optional[str] = None, auth: bool = True) -> HttpResponse:
        """Führt eine Anfrage aus und wirft bei Status ≥ 400."""
        url = self.url_for(endpoint, params)
        headers = {"Accept": "application/json"}
        if json_body is not None:
            body = json.dumps(json_body).encode("utf-8")
            content_type = "application/json"
        if content_type:
            headers["Content-Type"] = content_type
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"

        logger.debug(f"→ {method} {url}")
        response = self.transport(method, url, headers, body, self.timeout)
        logger.debug(f"← {response.status} {method} {url}")

        if response.ok:
            return response

        error = error_for_status(response.status, response.json())
        if isinstance(error, AuthenticationError):
            self.session.force_logout(error.message)
        logger.info(f"API-Fehler {response.status} bei {method} {endpoint}: {error.message}")
        raise error

    def unwrap(self, response: HttpResponse) -> Any:
        """Packt {success, data, message} aus; success=false gilt als Fehler."""
        payload = response.json()
        if isinstance(payload, dict) and "success" in payload:
            if payload.get("success") is False:
                message = payload.get("message") or payload.get("error") or GENERIC_MESSAGE
                raise ApiError(response.status, message, payload)
            if "data" in payload:
                return payload["data"]
        return payload


def path_id(value: Any) -> str:
    """Kodiert eine ID sicher als Pfadsegment."""
    return quote(str(value), safe="")
