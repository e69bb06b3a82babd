"""Tests für die API-Datenmodelle."""

import pytest

from models.change_request import ChangeRequest, RequestStatus
from models.csv_result import CsvImportResult
from models.page import Page
from models.schedule import ScheduleFilter, ScheduleSlot
from models.timeslot import day_name
from models.timetable import Timetable
from models.user import Capability, User

from conftest import flat_timetable_payload, request_payload, slot_payload, timetable_payload


class TestChangeRequestModel:
    def test_camel_case_payload(self):
        req = ChangeRequest.model_validate(request_payload(
            10, rejectReason="Raum belegt", approvedAt="2024-03-02T09:00:00Z"))
        assert req.original_schedule_id == 42
        assert req.new_room_ids == [7]
        assert req.reject_reason == "Raum belegt"
        assert req.decided_at is not None
        assert req.is_pending and not req.is_terminal

    @pytest.mark.parametrize("raw,expected", [
        ("canceled", RequestStatus.CANCELLED),
        ("cancelled", RequestStatus.CANCELLED),
        ("APPROVED", RequestStatus.APPROVED),
    ])
    def test_status_spellings(self, raw, expected):
        assert ChangeRequest.model_validate(request_payload(status=raw)).status == expected

    def test_unknown_status(self):
        with pytest.raises(Exception):
            ChangeRequest.model_validate(request_payload(status="unbekannt"))

    def test_null_room_lists(self):
        req = ChangeRequest.model_validate(request_payload(10, newRoomIds=None, rooms=None))
        assert req.new_room_ids == [] and req.rooms == []

    def test_room_ids_fallback(self):
        req = ChangeRequest.model_validate(request_payload(
            new_room_ids=(), rooms=[{"id": 8, "name": "R8"}]))
        assert req.room_ids == [8]

    def test_target_label(self):
        req = ChangeRequest.model_validate(request_payload(
            newPeriod={"id": 2, "name": "2. Stunde", "order": 2}))
        assert req.target_label == "Mi 2. Stunde"

    def test_terminal_statuses(self):
        assert not RequestStatus.PENDING.is_terminal
        for status in (RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.CANCELLED):
            assert status.is_terminal


class TestScheduleModels:
    def test_slot_from_api(self):
        slot = ScheduleSlot.model_validate(slot_payload(1, day=2))
        assert slot.day_name == "Di"
        assert slot.class_label == "2-3"
        assert slot.teachers[0].name == "Frau Müller"

    def test_slot_day_outside_week(self):
        """Tage außerhalb 1–7 werden angenommen und erst im Raster aussortiert."""
        slot = ScheduleSlot.model_validate(slot_payload(1, day=0))
        assert slot.day_of_week == 0
        assert slot.day_name == "0"

    def test_slot_null_lists(self):
        slot = ScheduleSlot.model_validate(
            {**slot_payload(1), "teachers": None, "rooms": None})
        assert slot.teachers == [] and slot.rooms == []
        assert slot.display_lines() == ["Mathematik"]

    def test_filter_params(self):
        assert ScheduleFilter().is_empty()
        assert ScheduleFilter(room_id=7).to_params() == {"roomId": 7}

    def test_timetable_snake_case(self):
        entry = Timetable.model_validate(timetable_payload(1, day="Monday"))
        assert entry.day == "monday"
        assert entry.teacher.name == "Herr Schmidt"

    def test_timetable_flat_names(self):
        """Eintrag mit day_of_week und flachen Namen statt eingebetteter Objekte."""
        entry = Timetable.model_validate(flat_timetable_payload(1, day="Tuesday"))
        assert entry.day == "tuesday"
        assert entry.subject_label == "Mathe"
        assert entry.teacher_label == "Herr Schmidt"
        assert entry.class_label == "2-3"
        assert entry.display_lines("teacher") == ["Mathe", "2-3", "R204"]
        assert entry.display_lines("room") == ["2-3", "Mathe"]

    def test_timetable_without_names(self):
        entry = Timetable.model_validate(
            {"id": 1, "class_id": 3, "subject_id": 9, "period": 2, "room": None})
        assert entry.subject_label == "Fach 9"
        assert entry.display_lines() == ["Fach 9"]

    def test_day_name_fallback(self):
        assert day_name(1) == "Mo"
        assert day_name(9) == "9"


class TestUserModel:
    def test_unknown_role_rejected(self):
        with pytest.raises(Exception):
            User.model_validate({"id": 1, "name": "X", "role": "janitor"})

    def test_capabilities(self):
        user = User.model_validate({"id": 1, "name": "X", "role": "student", "classId": 3})
        assert user.class_id == 3
        assert Capability.VIEW_SCHEDULES in user.capabilities
        assert not user.is_admin


class TestPage:
    def test_frontend_format(self):
        page = Page[ChangeRequest].from_payload(ChangeRequest, {
            "items": [request_payload(1)], "total": 21, "page": 2,
            "pageSize": 10, "totalPages": 3})
        assert page.page == 2 and page.total_pages == 3 and page.has_next

    def test_offset_format(self):
        page = Page[ChangeRequest].from_payload(ChangeRequest, {
            "requests": [request_payload(1)], "total": 21, "limit": 10, "offset": 20})
        assert page.page == 3 and page.total_pages == 3 and not page.has_next

    def test_plain_list(self):
        page = Page[ChangeRequest].from_payload(ChangeRequest, [request_payload(1)])
        assert page.total == 1 and page.total_pages == 1

    def test_none(self):
        page = Page[ChangeRequest].from_payload(ChangeRequest, None)
        assert page.items == [] and page.total == 0 and not page.has_next


class TestCsvImportResult:
    def test_defaults(self):
        result = CsvImportResult.model_validate({"success": False})
        assert result.failed_rows == 0
        assert "MAX_SHOWN_ERRORS" not in CsvImportResult.model_fields

    def test_null_lists(self):
        result = CsvImportResult.model_validate(
            {"success": True, "total_rows": 2, "error_rows": None, "errors": None})
        assert result.error_rows == [] and result.errors == []
        assert result.failed_rows == 0

    def test_print_rich(self, capsys):
        result = CsvImportResult.model_validate({
            "success": True, "total_rows": 2, "processed_rows": 1,
            "error_rows": [{"row": 2, "error": "Ungültiger Tag"}]})
        result.print_rich()
        out = capsys.readouterr().out
        assert "IMPORT MIT FEHLERN" in out
        assert "Ungültiger Tag" in out
