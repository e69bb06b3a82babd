"""Client-Modul: HTTP-Zugang zum Backend, Sitzung und Fachdienste."""

from client.api import ApiClient
from client.auth import AuthService
from client.errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PortalError,
    TransportError,
    ValidationFailed,
)
from client.session import Session, SessionStore

__all__ = [
    "ApiClient",
    "AuthService",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "PortalError",
    "TransportError",
    "ValidationFailed",
    "Session",
    "SessionStore",
]
