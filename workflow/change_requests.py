"""Change-Request-Workflow: Anträge anlegen und moderieren.

Zustände:
    Drafting (lokal, siehe workflow.draft) → pending → approved | rejected
    pending → cancelled (nur Antragsteller:in)

Regeln:
- Eingaben werden lokal geprüft; ungültige Anträge erreichen nie das Netz.
- Rollenprüfung (Admin für approve/reject) erfolgt lokal vor dem Aufruf.
- Statusübergänge prüft der Server. Der Client blendet nur Aktionen für
  bereits finale Anträge aus (``available_actions``).
- Keine optimistischen Änderungen: nach jedem erfolgreichen Schreibaufruf
  wird der Antrag neu geladen, erst dann ändert sich der lokale Cache.
"""

import logging
from enum import Enum
from typing import Optional

from client.api import ApiClient, path_id
from client.errors import ApiError, AuthorizationError, ValidationFailed, server_data
from config.schema import RequestConfig
from models.change_request import ChangeRequest, ChangeRequestCreate, RequestStatus
from models.page import Page
from models.user import Capability
from workflow.draft import ChangeRequestDraft, validate_request_fields

logger = logging.getLogger(__name__)


class Action(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    CANCEL = "cancel"


class ChangeRequestWorkflow:
    """Anlegen, Genehmigen, Ablehnen und Zurückziehen von Änderungsanträgen."""

    def __init__(self, api: ApiClient, config: Optional[RequestConfig] = None,
                 days_per_week: int = 5):
        self.api = api
        self.session = api.session
        self.config = config or RequestConfig()
        self.days_per_week = days_per_week
        self._cache: dict[int, ChangeRequest] = {}

    # ─── Anlegen ─────────────────────────────────────────────────────────────

    def new_draft(self) -> ChangeRequestDraft:
        return ChangeRequestDraft(
            reason_min_length=self.config.reason_min_length,
            days_per_week=self.days_per_week,
        )

    def create_request(self, original_slot_id: int, new_day_of_week: int,
                       new_period_id: int, new_room_ids: list[int],
                       reason: str) -> ChangeRequest:
        """Legt einen Antrag im Status 'pending' an und gibt ihn zurück."""
        self.session.require(Capability.CREATE_REQUEST)
        errors = validate_request_fields(
            original_slot_id, new_day_of_week, new_period_id, new_room_ids, reason,
            reason_min_length=self.config.reason_min_length,
            days_per_week=self.days_per_week,
        )
        if errors:
            raise ValidationFailed(errors)
        payload = ChangeRequestCreate(
            original_schedule_id=original_slot_id,
            new_day_of_week=new_day_of_week,
            new_period_id=new_period_id,
            new_room_ids=list(new_room_ids),
            reason=reason.strip(),
        )
        return self._create(payload)

    def submit(self, draft: ChangeRequestDraft) -> ChangeRequest:
        """Übermittelt einen bestätigten Entwurf."""
        self.session.require(Capability.CREATE_REQUEST)
        request = self._create(draft.confirm())
        draft.mark_submitted(request.id)
        return request

    def _create(self, payload: ChangeRequestCreate) -> ChangeRequest:
        response = self.api.request("POST", "/requests", json_body=payload.to_api())
        data = self.api.unwrap(response)
        request_id = data.get("id") if isinstance(data, dict) else None
        if request_id is None:
            raise ApiError(response.status, "Server hat keine Antrags-ID geliefert.")
        logger.info(
            f"Antrag #{request_id} angelegt: Eintrag {payload.original_schedule_id} → "
            f"Tag {payload.new_day_of_week}, Stunde {payload.new_period_id}"
        )
        return self.refresh(request_id)

    # ─── Moderation ──────────────────────────────────────────────────────────

    def approve(self, request_id: int, comment: Optional[str] = None) -> ChangeRequest:
        """Genehmigt einen offenen Antrag (nur Admin)."""
        self.session.require(Capability.MODERATE_REQUESTS)
        body = {"comment": comment} if comment else {}
        self.api.post(f"/requests/{path_id(request_id)}/approve", body)
        logger.info(f"Antrag #{request_id} genehmigt durch {self.session.user_id}")
        return self.refresh(request_id)

    def reject(self, request_id: int, reject_reason: str) -> ChangeRequest:
        """Lehnt einen offenen Antrag ab (nur Admin, Begründung Pflicht)."""
        self.session.require(Capability.MODERATE_REQUESTS)
        if not reject_reason or not reject_reason.strip():
            raise ValidationFailed({"reject_reason": "Ablehnungsgrund ist erforderlich."})
        self.api.post(f"/requests/{path_id(request_id)}/reject",
                      {"reason": reject_reason.strip()})
        logger.info(f"Antrag #{request_id} abgelehnt durch {self.session.user_id}")
        return self.refresh(request_id)

    def cancel(self, request_id: int) -> ChangeRequest:
        """Zieht einen eigenen offenen Antrag zurück (Status 'cancelled')."""
        user = self.session.require(Capability.CANCEL_OWN_REQUEST)
        current = self._cache.get(request_id) or self.refresh(request_id)
        if current.requested_by != user.id:
            raise AuthorizationError(
                "Nur die antragstellende Person kann den Antrag zurückziehen.")
        self.api.post(f"/requests/{path_id(request_id)}/cancel")
        logger.info(f"Antrag #{request_id} zurückgezogen durch {user.id}")
        return self.refresh(request_id)

    def available_actions(self, request: ChangeRequest) -> set[Action]:
        """Aktionen, die für diesen Antrag angeboten werden."""
        if request.is_terminal or self.session.user is None:
            return set()
        actions: set[Action] = set()
        if self.session.can(Capability.MODERATE_REQUESTS):
            actions |= {Action.APPROVE, Action.REJECT}
        if (self.session.can(Capability.CANCEL_OWN_REQUEST)
                and request.requested_by == self.session.user_id):
            actions.add(Action.CANCEL)
        return actions

    # ─── Lesen ───────────────────────────────────────────────────────────────

    def refresh(self, request_id: int) -> ChangeRequest:
        """Lädt den Antrag vom Server und aktualisiert den Cache."""
        data = self.api.get(f"/requests/{path_id(request_id)}")
        with server_data("Antrag"):
            request = ChangeRequest.model_validate(data)
        self._cache[request.id] = request
        return request

    get = refresh

    def cached(self, request_id: int) -> Optional[ChangeRequest]:
        return self._cache.get(request_id)

    def list_requests(self, status: Optional[RequestStatus] = None, page: int = 1,
                      page_size: Optional[int] = None,
                      mine: bool = False) -> Page[ChangeRequest]:
        """Listet Anträge seitenweise.

        Ohne Moderationsrecht werden immer nur die eigenen Anträge geladen.
        """
        self.session.require(Capability.VIEW_REQUESTS)
        if not mine and not self.session.can(Capability.MODERATE_REQUESTS):
            mine = True
        size = page_size or self.config.page_size
        endpoint = "/requests/my" if mine else "/requests"
        params = {
            "status": status.value if status else None,
            "page": page,
            "pageSize": size,
        }
        data = self.api.get(endpoint, params=params)
        with server_data("Antragsliste"):
            result = Page[ChangeRequest].from_payload(
                ChangeRequest, data, page=page, page_size=size)
        for item in result.items:
            self._cache[item.id] = item
        return result
