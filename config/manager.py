"""Konfigurationsmanager: Laden, Speichern und Validieren der Portal-Konfiguration.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.defaults import API_URL_ENV
from config.schema import ApiConfig, PortalConfig

logger = logging.getLogger(__name__)

yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Stundenplan-Portal — Client-Konfiguration
# Version: 1.0
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "api": (
        "Backend-API",
        f"Die Umgebungsvariable {API_URL_ENV} überschreibt base_url.",
    ),
    "time_grid": (
        "Wochenraster",
        "Stunden-IDs müssen mit der Period-Stammliste des Backends übereinstimmen.",
    ),
    "requests": (
        "Änderungsanträge",
        None,
    ),
    "session": (
        "Sitzung",
        "Die Sitzungsdatei enthält das Bearer-Token. Nicht einchecken!",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "portal_config.yaml"

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.path.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> PortalConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.path
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = PortalConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        return self.apply_env(config)

    def apply_env(self, config: PortalConfig) -> PortalConfig:
        """Übernimmt die API-URL aus der Umgebung, falls gesetzt."""
        env_url = os.environ.get(API_URL_ENV)
        if not env_url:
            return config
        logger.debug(f"{API_URL_ENV} gesetzt – verwende {env_url}")
        api = ApiConfig(base_url=env_url,
                        timeout_seconds=config.api.timeout_seconds)
        return config.model_copy(update={"api": api})

    # ─── Speichern ───

    def save(self, config: PortalConfig, path: Optional[Path] = None) -> Path:
        """Speichere Config als YAML mit deutschen Kommentaren."""
        target = path or self.path
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        logger.info(f"Konfiguration gespeichert: {target}")
        return target

    def _build_commented_yaml(self, config: PortalConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "requests" in cm:
            req_map = CommentedMap(cm["requests"])
            req_map.yaml_add_eol_comment("Zeichen", "reason_min_length")
            cm["requests"] = req_map

        return cm
