"""CSV-Import und -Export über das Backend.

Auswertung und Erzeugung der CSV-Dateien übernimmt der Server; der Client
prüft nur Dateiart und -größe, lädt hoch bzw. speichert den Download.
"""

import logging
from pathlib import Path
from typing import Optional

from client.api import ApiClient
from client.errors import ValidationFailed, server_data
from config.defaults import CSV_KINDS, CSV_MAX_BYTES
from export.helpers import export_filename
from models.csv_result import CsvImportResult
from models.user import Capability

logger = logging.getLogger(__name__)


def check_kind(kind: str) -> str:
    if kind not in CSV_KINDS:
        raise ValidationFailed(
            {"kind": f"Unbekannte Art '{kind}'. Erlaubt: {', '.join(CSV_KINDS)}"})
    return kind


def check_csv_file(path: Path, max_bytes: int = CSV_MAX_BYTES) -> Path:
    """Prüft Existenz, Endung .csv und Maximalgröße der Datei."""
    path = Path(path)
    if not path.is_file():
        raise ValidationFailed({"file": f"Datei nicht gefunden: {path}"})
    if path.suffix.lower() != ".csv":
        raise ValidationFailed({"file": "Nur CSV-Dateien (.csv) können importiert werden."})
    size = path.stat().st_size
    if size > max_bytes:
        raise ValidationFailed(
            {"file": f"Datei zu groß ({size / 1024 / 1024:.1f} MiB, max. "
                     f"{max_bytes / 1024 / 1024:.0f} MiB)."})
    return path


class CsvService:
    """Import/Export von Fach- und Stundenplandaten (nur Admin)."""

    def __init__(self, api: ApiClient):
        self.api = api
        self.session = api.session

    def import_file(self, kind: str, path: Path) -> CsvImportResult:
        """Lädt die Datei nach /csv/import/{kind} hoch."""
        self.session.require(Capability.MANAGE_CSV)
        check_kind(kind)
        path = check_csv_file(path)

        logger.info(f"CSV-Import ({kind}): {path}")
        payload = self.api.upload(f"/csv/import/{kind}", path, unwrap=False)
        # Ergebnis kann direkt oder in {"data": …} verpackt kommen
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict) \
                and "total_rows" in payload["data"]:
            payload = payload["data"]
        with server_data("CSV-Import"):
            return CsvImportResult.model_validate(payload or {"success": False})

    def export(self, kind: str, target_dir: Path = Path("."),
               grade: Optional[int] = None) -> Path:
        """Lädt /csv/export/{kind} herunter und speichert {kind}_{Datum}.csv."""
        self.session.require(Capability.MANAGE_CSV)
        check_kind(kind)

        content = self.api.download(f"/csv/export/{kind}", params={"grade": grade})
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        out_path = target_dir / export_filename(kind)
        out_path.write_bytes(content)
        logger.info(f"CSV-Export ({kind}) gespeichert: {out_path} ({len(content)} Bytes)")
        return out_path
