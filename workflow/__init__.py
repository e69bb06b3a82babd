"""Workflow-Modul: Änderungsanträge (Entwurf + Moderation) und Navigation."""

from .change_requests import Action, ChangeRequestWorkflow
from .draft import ChangeRequestDraft, DraftStep, validate_request_fields
from .navigation import NAV_ITEMS, NavItem, navigation_for

__all__ = [
    "Action",
    "ChangeRequestWorkflow",
    "ChangeRequestDraft",
    "DraftStep",
    "validate_request_fields",
    "NAV_ITEMS",
    "NavItem",
    "navigation_for",
]
