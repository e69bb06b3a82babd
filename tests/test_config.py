"""Tests für das Konfigurationssystem."""

import pytest

from config.defaults import (
    API_URL_ENV,
    CSV_KINDS,
    CSV_MAX_BYTES,
    default_portal_config,
    default_time_grid,
)
from config.manager import ConfigManager
from config.schema import (
    ApiConfig,
    LoggingConfig,
    PauseSlot,
    PeriodDefinition,
    TimeGridConfig,
)


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_time_grid_valid(self):
        """Default-Zeitraster lässt sich ohne Fehler erstellen."""
        tg = default_time_grid()
        assert tg.day_keys == ["monday", "tuesday", "wednesday", "thursday", "friday"]
        assert tg.period_orders == [1, 2, 3, 4]
        assert len(tg.pauses) == 3

    def test_default_portal_config(self):
        config = default_portal_config()
        assert config.api.base_url == "http://localhost:8080/api"
        assert config.requests.reason_min_length == 10
        assert config.requests.page_size == 10
        assert config.session.token_file == ".stundenplan/session.json"

    def test_base_url_trailing_slash(self):
        assert ApiConfig(base_url="http://x/api/").base_url == "http://x/api"
        assert default_portal_config("http://y/api/").api.base_url == "http://y/api"

    def test_constants(self):
        assert CSV_MAX_BYTES == 10 * 1024 * 1024
        assert CSV_KINDS == ("subjects", "timetables")

    def test_order_for_period_id(self):
        tg = default_time_grid()
        assert tg.order_for_period_id(3) == 3
        assert tg.order_for_period_id(99) is None


# ─── VALIDIERUNG ──────────────────────────────────────────────────────────────

def _period(pid: int, order: int) -> PeriodDefinition:
    return PeriodDefinition(id=pid, order=order, name=f"{order}. Stunde",
                            start_time="08:00", end_time="08:45")


class TestTimeGridValidation:
    def test_day_lists_must_match(self):
        with pytest.raises(Exception):
            TimeGridConfig(day_keys=["monday"], day_names=["Mo", "Di"],
                           periods=[_period(1, 1)])

    def test_periods_required(self):
        with pytest.raises(Exception):
            TimeGridConfig(periods=[])

    def test_duplicate_order(self):
        with pytest.raises(Exception):
            TimeGridConfig(periods=[_period(1, 1), _period(2, 1)])

    def test_duplicate_id(self):
        with pytest.raises(Exception):
            TimeGridConfig(periods=[_period(1, 1), _period(1, 2)])

    def test_pause_after_unknown_period(self):
        with pytest.raises(Exception):
            TimeGridConfig(periods=[_period(1, 1)],
                           pauses=[PauseSlot(after_order=5, duration_minutes=10)])

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        with pytest.raises(Exception):
            LoggingConfig(level="laut")


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_first_run(self, tmp_path):
        mgr = ConfigManager(tmp_path / "portal.yaml")
        assert mgr.first_run_check()

    def test_save_and_load(self, tmp_path, monkeypatch):
        """Speichern und Laden ergibt dieselbe Konfiguration."""
        monkeypatch.delenv(API_URL_ENV, raising=False)
        mgr = ConfigManager(tmp_path / "portal.yaml")
        original = default_portal_config("http://schule.test/api")
        path = mgr.save(original)

        text = path.read_text(encoding="utf-8")
        assert text.startswith("# ===")
        assert "Backend-API" in text

        loaded = mgr.load()
        assert loaded == original
        assert not mgr.first_run_check()

    def test_env_overrides_base_url(self, tmp_path, monkeypatch):
        mgr = ConfigManager(tmp_path / "portal.yaml")
        mgr.save(default_portal_config())
        monkeypatch.setenv(API_URL_ENV, "http://env.test/api/")
        assert mgr.load().api.base_url == "http://env.test/api"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "fehlt.yaml").load()

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "portal.yaml"
        path.write_text("time_grid:\n  periods: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            ConfigManager(path).load()
