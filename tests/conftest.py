"""Gemeinsame Test-Hilfen: Attrappe für den HTTP-Transport und Beispieldaten."""

import json
from collections import deque
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from client.api import ApiClient
from client.session import Session
from client.transport import HttpResponse
from models.user import User

BASE_URL = "http://portal.test/api"


@dataclass
class Call:
    method: str
    url: str
    headers: dict
    body: Optional[bytes]

    @property
    def path(self) -> str:
        return urlsplit(self.url).path[len(urlsplit(BASE_URL).path):]

    @property
    def query(self) -> dict:
        return {k: v[0] for k, v in parse_qs(urlsplit(self.url).query).items()}

    @property
    def json(self):
        return json.loads(self.body.decode("utf-8")) if self.body else None


class FakeTransport:
    """Zeichnet Anfragen auf und liefert vorbereitete Antworten der Reihe nach."""

    def __init__(self):
        self.calls: list[Call] = []
        self._queue: deque = deque()

    def reply(self, payload=None, status: int = 200, raw: Optional[bytes] = None,
              headers: Optional[dict] = None) -> "FakeTransport":
        body = raw if raw is not None else (
            b"" if payload is None else json.dumps(payload).encode("utf-8"))
        self._queue.append(HttpResponse(status=status, body=body, headers=headers or {}))
        return self

    def ok(self, data=None, message: str = "") -> "FakeTransport":
        """Antwort in der üblichen Hülle {success, data, message}."""
        return self.reply({"success": True, "data": data, "message": message})

    def fail(self, exc: Exception) -> "FakeTransport":
        self._queue.append(exc)
        return self

    def __call__(self, method, url, headers, body, timeout):
        self.calls.append(Call(method, url, dict(headers), body))
        if not self._queue:
            raise AssertionError(f"Unerwartete Anfrage: {method} {url}")
        item = self._queue.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def pending(self) -> int:
        return len(self._queue)


# ─── Beispieldaten ────────────────────────────────────────────────────────────

def user_payload(user_id: int = 1, role: str = "teacher", name: str = "") -> dict:
    return {
        "id": user_id,
        "name": name or f"{role.capitalize()} {user_id}",
        "email": f"user{user_id}@schule.test",
        "role": role,
        "username": f"user{user_id}",
    }


def make_user(user_id: int = 1, role: str = "teacher") -> User:
    return User.model_validate(user_payload(user_id, role))


def request_payload(request_id: int = 10, status: str = "pending", requested_by: int = 1,
                    original_schedule_id: int = 42, new_day_of_week: int = 3,
                    new_period_id: int = 2, new_room_ids=(7,),
                    reason: str = "Room conflict resolution", **extra) -> dict:
    data = {
        "id": request_id,
        "originalScheduleId": original_schedule_id,
        "newDayOfWeek": new_day_of_week,
        "newPeriodId": new_period_id,
        "newRoomIds": list(new_room_ids),
        "reason": reason,
        "status": status,
        "requestedBy": requested_by,
        "createdAt": "2024-03-01T08:00:00Z",
    }
    data.update(extra)
    return data


def slot_payload(slot_id: int, day: int = 1, period_id: int = 1, class_id: int = 3,
                 subject: str = "Mathematik", is_original: bool = True,
                 period_order: Optional[int] = None) -> dict:
    data = {
        "id": slot_id,
        "subjectId": 100 + slot_id,
        "subject": {"id": 100 + slot_id, "name": subject},
        "classId": class_id,
        "class": {"id": class_id, "grade": 2, "name": f"2-{class_id}"},
        "dayOfWeek": day,
        "periodId": period_id,
        "isOriginal": is_original,
        "teachers": [{"id": 5, "name": "Frau Müller"}],
        "rooms": [{"id": 7, "name": "R101"}],
    }
    if period_order is not None:
        data["period"] = {"id": period_id, "name": f"{period_order}. Stunde",
                          "order": period_order}
    return data


def timetable_payload(entry_id: int, day: str = "monday", period: int = 1,
                      subject: str = "Deutsch", class_id: int = 3) -> dict:
    return {
        "id": entry_id,
        "class_id": class_id,
        "subject_id": 200 + entry_id,
        "teacher_id": 5,
        "day": day,
        "period": period,
        "room": "R101",
        "subject": {"id": 200 + entry_id, "name": subject},
        "teacher": user_payload(5, "teacher", "Herr Schmidt"),
    }


def flat_timetable_payload(entry_id: int, day: str = "monday", period: int = 1,
                           subject: str = "Mathe", class_id: int = 3) -> dict:
    """Wochenplan-Eintrag mit flachen Namensfeldern statt eingebetteter Objekte."""
    return {
        "id": entry_id,
        "class_id": class_id,
        "subject_id": 300 + entry_id,
        "teacher_id": 5,
        "day_of_week": day,
        "period": period,
        "room": "R204",
        "created_at": "2024-04-01T08:00:00Z",
        "class_name": "2-3",
        "grade": 2,
        "subject_name": subject,
        "teacher_name": "Herr Schmidt",
    }


# ─── Fixtures ─────────────────────────────────────────────────────────────────

@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


def logged_in_session(role: str = "teacher", user_id: int = 1) -> Session:
    session = Session()
    session.establish("tok-123", make_user(user_id, role))
    return session


@pytest.fixture
def make_api(transport):
    """Baut einen ApiClient mit angemeldeter Rolle (oder None = abgemeldet)."""
    def _make(role: Optional[str] = "teacher", user_id: int = 1) -> ApiClient:
        session = logged_in_session(role, user_id) if role else Session()
        return ApiClient(BASE_URL, session, transport=transport)
    return _make
