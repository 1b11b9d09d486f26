"""Credential gate and session interfaces.

smartcal does not hash passwords or issue tokens.  It consumes two
collaborators:

- a :class:`CredentialGate` that registers and logs users in, and
- a :class:`SessionContext` consulted read-only for the current user id.

Both report failures with :class:`~smartcal.exceptions.CredentialError`.
"""

from __future__ import annotations

import logging
from typing import Protocol

from smartcal.exceptions import CredentialError
from smartcal.models.auth import LoginRequest, LoginResponse, RegistrationRequest

logger = logging.getLogger(__name__)


class CredentialGate(Protocol):
    """Registration and login, implemented outside smartcal."""

    def register(self, request: RegistrationRequest) -> str:
        """Create a user and return its id.

        Raises:
            CredentialError: If the email is already registered.
        """
        ...

    def login(self, request: LoginRequest) -> LoginResponse:
        """Exchange credentials for a bearer token.

        Raises:
            CredentialError: If the credentials are invalid.
        """
        ...


class SessionContext(Protocol):
    """Read-only view of who is logged in."""

    def current_user_id(self) -> str | None: ...


class StaticSession:
    """A session pinned to one user id (or to nobody)."""

    def __init__(self, user_id: str | None) -> None:
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id


def require_user(session: SessionContext) -> str:
    """Return the logged-in user's id.

    Raises:
        CredentialError: If nobody is logged in.
    """
    user_id = session.current_user_id()
    if not user_id:
        logger.warning("Rejected request without an authenticated user")
        raise CredentialError("Not logged in")
    return user_id
