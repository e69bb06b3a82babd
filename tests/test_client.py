"""Tests für ApiClient, Fehlerübersetzung, Transport-Hilfen und Stammdaten."""

import pytest

from client.api import ApiClient, path_id
from client.errors import (
    GENERIC_MESSAGE,
    INVALID_RESPONSE_MESSAGE,
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    TransportError,
    error_for_status,
    server_data,
)
from client.master import MasterDataService, time_grid_with_periods
from client.schedules import ScheduleFetcher
from client.transport import HttpResponse, encode_multipart
from config.defaults import default_time_grid
from models.schedule import ScheduleFilter
from models.subject import Term
from models.timeslot import Period

from conftest import BASE_URL, flat_timetable_payload, slot_payload, timetable_payload


# ─── ApiClient ────────────────────────────────────────────────────────────────

class TestApiClient:
    def test_bearer_header_attached(self, transport, make_api):
        """Angemeldete Anfragen tragen das Bearer-Token."""
        api = make_api("teacher")
        transport.ok([])
        api.get("/classes")
        assert transport.calls[0].headers["Authorization"] == "Bearer tok-123"

    def test_no_auth_header_when_disabled(self, transport, make_api):
        """auth=False (Login) sendet kein Token."""
        api = make_api("teacher")
        transport.ok({"token": "x"})
        api.post("/auth/login", {"identifier": "a", "password": "b"}, auth=False)
        assert "Authorization" not in transport.calls[0].headers

    def test_envelope_unwrapped(self, transport, make_api):
        """{success, data, message} → data."""
        api = make_api()
        transport.ok({"id": 1})
        assert api.get("/x") == {"id": 1}

    def test_plain_payload_passed_through(self, transport, make_api):
        """Antwort ohne Hülle wird unverändert zurückgegeben."""
        api = make_api()
        transport.reply([{"id": 1}])
        assert api.get("/x") == [{"id": 1}]

    def test_success_false_raises(self, transport, make_api):
        """success=false bei HTTP 200 gilt als Fehler mit Server-Meldung."""
        api = make_api()
        transport.reply({"success": False, "message": "Kaputt"})
        with pytest.raises(ApiError) as exc:
            api.get("/x")
        assert exc.value.message == "Kaputt"

    def test_params_without_none(self, transport, make_api):
        """None- und Leerwerte werden nicht als Query-Parameter gesendet."""
        api = make_api()
        transport.ok([])
        api.get("/schedules", params={"classId": 3, "teacherId": None, "term": ""})
        assert transport.calls[0].query == {"classId": "3"}

    def test_json_body_encoded(self, transport, make_api):
        api = make_api()
        transport.ok({})
        api.post("/requests", {"reason": "Ä"})
        call = transport.calls[0]
        assert call.headers["Content-Type"] == "application/json"
        assert call.json == {"reason": "Ä"}

    def test_url_joins_base(self, make_api):
        api = make_api()
        assert api.url_for("/rooms") == f"{BASE_URL}/rooms"
        assert api.url_for("rooms") == f"{BASE_URL}/rooms"

    def test_path_id_escapes(self):
        assert path_id(10) == "10"
        assert path_id("a/b") == "a%2Fb"

    def test_download_returns_bytes(self, transport, make_api):
        api = make_api()
        transport.reply(raw=b"id,name\n1,Mathe\n", headers={"Content-Type": "text/csv"})
        assert api.download("/csv/export/subjects") == b"id,name\n1,Mathe\n"

    def test_upload_multipart(self, transport, make_api, tmp_path):
        """Upload sendet multipart/form-data mit Dateiinhalt."""
        api = make_api("admin")
        f = tmp_path / "fach.csv"
        f.write_bytes(b"name\nMathe\n")
        transport.ok({"total_rows": 1})
        api.upload("/csv/import/subjects", f)
        call = transport.calls[0]
        assert call.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b"Mathe" in call.body
        assert b'filename="fach.csv"' in call.body


# ─── Fehlerübersetzung ────────────────────────────────────────────────────────

class TestErrors:
    def test_message_from_message_field(self, transport, make_api):
        api = make_api()
        transport.reply({"success": False, "message": "Nicht gefunden"}, status=404)
        with pytest.raises(NotFoundError) as exc:
            api.get("/requests/99")
        assert exc.value.status == 404
        assert exc.value.message == "Nicht gefunden"

    def test_message_from_error_field(self, transport, make_api):
        api = make_api()
        transport.reply({"error": "Antrag bereits entschieden"}, status=409)
        with pytest.raises(ConflictError) as exc:
            api.post("/requests/10/reject", {"reason": "x"})
        assert exc.value.message == "Antrag bereits entschieden"

    def test_generic_message_without_body(self, transport, make_api):
        """Ohne Server-Meldung wird die generische Meldung verwendet."""
        api = make_api()
        transport.reply(status=500)
        with pytest.raises(ApiError) as exc:
            api.get("/x")
        assert exc.value.message == GENERIC_MESSAGE
        assert exc.value.status == 500

    def test_403_is_authorization_error(self):
        assert isinstance(error_for_status(403, None), AuthorizationError)

    def test_401_forces_logout(self, transport, make_api):
        """Jede 401-Antwort beendet die Sitzung."""
        api = make_api("teacher")
        transport.reply({"message": "Token abgelaufen"}, status=401)
        with pytest.raises(AuthenticationError):
            api.get("/schedules")
        assert api.session.token is None
        assert api.session.user is None
        assert not api.session.capabilities

    def test_transport_error_propagates(self, transport, make_api):
        """Netzwerkfehler werden nicht wiederholt."""
        api = make_api()
        transport.fail(TransportError())
        with pytest.raises(TransportError):
            api.get("/schedules")
        assert len(transport.calls) == 1
        assert api.session.is_authenticated


# ─── Transport-Hilfen ─────────────────────────────────────────────────────────

class TestTransportHelpers:
    def test_response_json_empty(self):
        assert HttpResponse(status=204).json() is None

    def test_response_json_invalid(self):
        assert HttpResponse(status=500, body=b"<html>").json() is None

    def test_content_type_case_insensitive(self):
        r = HttpResponse(status=200, headers={"content-type": "text/csv"})
        assert r.content_type == "text/csv"

    def test_encode_multipart(self):
        body, ctype = encode_multipart("file", "a.csv", b"x,y")
        boundary = ctype.split("boundary=")[1]
        assert body.startswith(f"--{boundary}\r\n".encode())
        assert body.endswith(f"--{boundary}--\r\n".encode())
        assert b"x,y" in body


# ─── Stundenplan & Stammdaten ─────────────────────────────────────────────────

class TestScheduleFetcher:
    def test_filters_sent_camel_case(self, transport, make_api):
        """Alle gesetzten Filter gehen UND-verknüpft als Parameter raus."""
        fetcher = ScheduleFetcher(make_api("student"), default_time_grid())
        transport.ok([slot_payload(1)])
        slots = fetcher.fetch(ScheduleFilter(class_id=3, day_of_week=2,
                                             term=Term.FIRST_SEMESTER))
        assert transport.calls[0].query == {
            "classId": "3", "dayOfWeek": "2", "term": "first_semester"}
        assert slots[0].subject_label == "Mathematik"

    def test_no_data_is_empty_list(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok(None)
        assert fetcher.by_teacher(5) == []
        assert transport.calls[0].query == {"teacherId": "5"}

    def test_weekly_timetable(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok({"monday": {"1": timetable_payload(1)}})
        grid = fetcher.weekly_timetable(3)
        assert transport.calls[0].path == "/timetables/weekly/3"
        assert [e.id for e in grid.cell("monday", 1)] == [1]
        assert grid.entry_count == 1


class TestMasterData:
    def test_periods_sorted_by_order(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok([
            {"id": 12, "name": "2. Stunde", "order": 2},
            {"id": 11, "name": "1. Stunde", "order": 1},
        ])
        assert [p.id for p in svc.periods()] == [11, 12]

    def test_subjects_paginated(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok({"items": [{"id": 1, "name": "Mathe"}], "total": 1})
        assert svc.subjects()[0].name == "Mathe"

    def test_classes_accept_class_name(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok([{"id": 3, "grade": 2, "className": "2-3"}])
        assert svc.classes()[0].label == "2-3"

    def test_time_grid_with_server_periods(self):
        """Server-Stunden ersetzen das Raster; verwaiste Pausen entfallen."""
        tg = time_grid_with_periods(default_time_grid(), [
            Period(id=21, name="A", order=1),
            Period(id=22, name="B", order=2),
        ])
        assert tg.period_orders == [1, 2]
        assert tg.order_for_period_id(22) == 2
        assert [p.after_order for p in tg.pauses] == [1, 2]

    def test_time_grid_unchanged_without_periods(self):
        tg = default_time_grid()
        assert time_grid_with_periods(tg, []) is tg

    def test_rooms_null_data(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok(None)
        assert svc.rooms() == []


class TestTimetableQueries:
    def test_timetables_filters(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok([timetable_payload(1)])
        entries = fetcher.timetables(grade=2, day="monday")
        assert transport.calls[0].query == {"grade": "2", "day": "monday"}
        assert entries[0].room == "R101"

    def test_get_slot(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok(slot_payload(42))
        assert fetcher.get(42).id == 42
        assert transport.calls[0].path == "/schedules/42"


# ─── Unerwartete Server-Daten ─────────────────────────────────────────────────

class TestUnexpectedServerData:
    def test_null_lists_accepted(self, transport, make_api):
        """Leere Go-Slices kommen als null und gelten als leere Liste."""
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok([{**slot_payload(1), "teachers": None, "rooms": None}])
        slot = fetcher.fetch()[0]
        assert slot.teachers == []
        assert slot.rooms == []

    def test_invalid_slot_is_api_error(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        broken = slot_payload(1)
        del broken["subjectId"]
        transport.ok([broken])
        with pytest.raises(ApiError) as exc:
            fetcher.fetch()
        assert exc.value.message.startswith(INVALID_RESPONSE_MESSAGE)
        assert "subjectId" in exc.value.message

    def test_day_outside_week_accepted(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok([slot_payload(1, day=9)])
        assert fetcher.fetch()[0].day_of_week == 9

    def test_weekly_with_flat_names(self, transport, make_api):
        """Wochenplan mit day_of_week und subject_name statt eingebetteter Objekte."""
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok({"monday": {"1": flat_timetable_payload(1, subject="Mathe")}})
        grid = fetcher.weekly_timetable(3)
        entry = grid.cell("monday", 1)[0]
        assert entry.day == "monday"
        assert entry.display_lines() == ["Mathe", "Herr Schmidt", "R204"]

    def test_invalid_weekly_entry_is_api_error(self, transport, make_api):
        fetcher = ScheduleFetcher(make_api(), default_time_grid())
        transport.ok({"monday": {"1": {"id": 1, "day": "monday"}}})
        with pytest.raises(ApiError):
            fetcher.weekly_timetable(3)

    def test_invalid_periods_are_api_error(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok([{"id": 11, "order": 1}])
        with pytest.raises(ApiError):
            svc.periods()

    def test_server_data_passes_other_errors(self):
        with pytest.raises(KeyError):
            with server_data("Test"):
                raise KeyError("x")


class TestDownload:
    def test_json_error_envelope_raises(self, transport, make_api):
        """success=false als JSON wird nicht als Datei zurückgegeben."""
        api = make_api("admin")
        transport.reply({"success": False, "message": "Export fehlgeschlagen"},
                        headers={"Content-Type": "application/json; charset=utf-8"})
        with pytest.raises(ApiError) as exc:
            api.download("/csv/export/subjects")
        assert exc.value.message == "Export fehlgeschlagen"

    def test_json_without_file_raises(self, transport, make_api):
        api = make_api("admin")
        transport.reply({"success": True, "data": {"rows": 3}},
                        headers={"Content-Type": "application/json"})
        with pytest.raises(ApiError):
            api.download("/csv/export/subjects")


class TestTeachers:
    def test_teachers_sorted_and_paginated(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok({"items": [{"id": 6, "name": "Herr Weber", "departmentId": 2},
                                {"id": 5, "name": "Frau Müller"}], "total": 2})
        teachers = svc.teachers()
        assert [t.name for t in teachers] == ["Frau Müller", "Herr Weber"]
        assert transport.calls[0].path == "/teachers"
        assert transport.calls[0].query == {"page": "1", "pageSize": "50"}

    def test_teachers_plain_list(self, transport, make_api):
        svc = MasterDataService(make_api())
        transport.ok([{"id": 5, "name": "Frau Müller"}])
        assert svc.teachers()[0].id == 5
