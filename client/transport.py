"""HTTP-Transport über urllib.request.

Der Transport ist ein aufrufbares Objekt
``transport(method, url, headers, body, timeout) -> HttpResponse``.
ApiClient erhält ihn per Konstruktor; Tests übergeben eine Attrappe.
HTTP-Fehlerstatus werden NICHT als Ausnahme geworfen, sondern als
HttpResponse zurückgegeben. Nur Netzwerkfehler lösen TransportError aus.
"""

import json
import logging
import urllib.error
import urllib.request
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from client.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Rohantwort des Servers."""

    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        for k, v in self.headers.items():
            if k.lower() == "content-type":
                return v
        return ""

    def json(self) -> Any:
        """Dekodiert den Body als JSON; leerer oder ungültiger Body → None."""
        if not self.body:
            return None
        try:
            return json.loads(self.body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None


class UrllibTransport:
    """Standard-Transport (synchron, eine Anfrage pro Aufruf)."""

    def __call__(self, method: str, url: str, headers: dict[str, str],
                 body: Optional[bytes], timeout: float) -> HttpResponse:
        req = urllib.request.Request(url, data=body, headers=headers, method=method)
        try:
            with urllib.request.urlopen(req, timeout=timeout) as response:
                return HttpResponse(
                    status=response.status,
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except urllib.error.HTTPError as e:
            return HttpResponse(
                status=e.code,
                body=e.read() or b"",
                headers=dict(e.headers.items()) if e.headers else {},
            )
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            logger.warning(f"{method} {url} fehlgeschlagen: {e}")
            raise TransportError(cause=e) from e


def encode_multipart(field_name: str, filename: str, content: bytes,
                     content_type: str = "text/csv") -> tuple[bytes, str]:
    """Baut einen multipart/form-data-Body mit genau einer Datei.

    Gibt (body, Content-Type-Header) zurück.
    """
    boundary = f"----stundenplan{uuid.uuid4().hex}"
    head = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{field_name}"; filename="{filename}"\r\n'
        f"Content-Type: {content_type}\r\n\r\n"
    ).encode("utf-8")
    tail = f"\r\n--{boundary}--\r\n".encode("utf-8")
    return head + content + tail, f"multipart/form-data; boundary={boundary}"
