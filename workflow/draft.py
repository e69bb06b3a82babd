"""Mehrstufiges Antragsformular als Zustandsautomat (rein lokal).

    select_slot ──► propose ──► confirm ──► submitted
         ▲             │  ▲        │
         └──── back ───┘  └─ back ─┘

Bis zur Übermittlung wird nichts an den Server gesendet.
"""

from enum import Enum
from typing import Optional, Union

from client.errors import ValidationFailed
from models.change_request import ChangeRequestCreate
from models.schedule import ScheduleSlot


class DraftStep(str, Enum):
    SELECT_SLOT = "select_slot"
    PROPOSE = "propose"
    CONFIRM = "confirm"
    SUBMITTED = "submitted"


def validate_request_fields(
    original_slot_id: Optional[int],
    new_day_of_week: Optional[int],
    new_period_id: Optional[int],
    new_room_ids: Optional[list[int]],
    reason: Optional[str],
    reason_min_length: int = 10,
    days_per_week: int = 5,
) -> dict[str, str]:
    """Prüft die Antragsfelder; gibt Feldname → Fehlermeldung zurück (leer = gültig)."""
    errors: dict[str, str] = {}
    if original_slot_id is None:
        errors["original_slot_id"] = "Ursprünglicher Stundenplan-Eintrag fehlt."
    if new_day_of_week is None:
        errors["new_day_of_week"] = "Neuer Wochentag fehlt."
    elif not 1 <= new_day_of_week <= days_per_week:
        errors["new_day_of_week"] = f"Wochentag muss zwischen 1 und {days_per_week} liegen."
    if new_period_id is None:
        errors["new_period_id"] = "Neue Stunde fehlt."
    if not new_room_ids:
        errors["new_room_ids"] = "Mindestens ein Raum ist erforderlich."
    text = (reason or "").strip()
    if not text:
        errors["reason"] = "Begründung fehlt."
    elif len(text) < reason_min_length:
        errors["reason"] = f"Begründung muss mindestens {reason_min_length} Zeichen lang sein."
    return errors


class ChangeRequestDraft:
    """Client-lokaler Entwurf eines Änderungsantrags (Zustand 'Drafting')."""

    def __init__(self, reason_min_length: int = 10, days_per_week: int = 5):
        self.reason_min_length = reason_min_length
        self.days_per_week = days_per_week
        self.step = DraftStep.SELECT_SLOT
        self.slot: Optional[ScheduleSlot] = None
        self.original_slot_id: Optional[int] = None
        self.new_day_of_week: Optional[int] = None
        self.new_period_id: Optional[int] = None
        self.new_room_ids: list[int] = []
        self.reason: str = ""
        self.errors: dict[str, str] = {}
        self.request_id: Optional[int] = None

    def _expect(self, *steps: DraftStep) -> None:
        if self.step not in steps:
            raise RuntimeError(
                f"Aktion im Schritt '{self.step.value}' nicht möglich "
                f"(erwartet: {', '.join(s.value for s in steps)})"
            )

    # ─── Schritte ───

    def select_slot(self, slot: Union[ScheduleSlot, int]) -> None:
        """Schritt 1: ursprünglichen Eintrag wählen."""
        self._expect(DraftStep.SELECT_SLOT, DraftStep.PROPOSE)
        if isinstance(slot, ScheduleSlot):
            self.slot = slot
            self.original_slot_id = slot.id
        else:
            self.slot = None
            self.original_slot_id = slot
        self.step = DraftStep.PROPOSE

    def propose(self, new_day_of_week: int, new_period_id: int,
                new_room_ids: list[int], reason: str) -> bool:
        """Schritt 2: Ziel und Begründung erfassen.

        Bei Fehlern bleibt der Entwurf in 'propose' und ``errors`` ist gefüllt.
        """
        self._expect(DraftStep.PROPOSE)
        self.new_day_of_week = new_day_of_week
        self.new_period_id = new_period_id
        self.new_room_ids = list(new_room_ids or [])
        self.reason = reason or ""
        self.errors = self.validate()
        if self.errors:
            return False
        self.step = DraftStep.CONFIRM
        return True

    def back(self) -> None:
        if self.step == DraftStep.CONFIRM:
            self.step = DraftStep.PROPOSE
        elif self.step == DraftStep.PROPOSE:
            self.step = DraftStep.SELECT_SLOT

    def confirm(self) -> ChangeRequestCreate:
        """Schritt 3: bestätigten Request-Body erzeugen."""
        self._expect(DraftStep.CONFIRM)
        errors = self.validate()
        if errors:
            raise ValidationFailed(errors)
        return self.payload()

    def mark_submitted(self, request_id: int) -> None:
        self._expect(DraftStep.CONFIRM)
        self.request_id = request_id
        self.step = DraftStep.SUBMITTED

    # ─── Hilfen ───

    def validate(self) -> dict[str, str]:
        return validate_request_fields(
            self.original_slot_id, self.new_day_of_week, self.new_period_id,
            self.new_room_ids, self.reason,
            reason_min_length=self.reason_min_length,
            days_per_week=self.days_per_week,
        )

    def payload(self) -> ChangeRequestCreate:
        return ChangeRequestCreate(
            original_schedule_id=self.original_slot_id,
            new_day_of_week=self.new_day_of_week,
            new_period_id=self.new_period_id,
            new_room_ids=self.new_room_ids,
            reason=self.reason.strip(),
        )
