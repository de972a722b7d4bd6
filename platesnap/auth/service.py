"""Dashboard session service: login, logout and passive session restore."""

from __future__ import annotations

import logging
import time
from typing import Callable

from pydantic import ValidationError

from platesnap.auth.models import AdminUser, LoginResult, SessionState, StoredSession
from platesnap.auth.repository import AdminRepository
from platesnap.auth.session_store import SessionStore
from platesnap.core.config import SessionConfig

LOGGER = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"
UNEXPECTED_ERROR_MESSAGE = "Something went wrong. Please try again."


class AuthService:
    """Two-state (anonymous/authenticated) admin session.

    Expiry is only checked by :meth:`restore`; a session that expires while the
    process is running stays authenticated until the next restore.
    """

    def __init__(
        self,
        repo: AdminRepository,
        session_store: SessionStore,
        config: SessionConfig,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize service dependencies."""
        self._repo = repo
        self._session_store = session_store
        self._config = config
        self._clock = clock
        self._user: AdminUser | None = None
        self._needs_setup = False

    @property
    def state(self) -> SessionState:
        if self._user is None:
            return SessionState.ANONYMOUS
        return SessionState.AUTHENTICATED

    @property
    def current_user(self) -> AdminUser | None:
        return self._user

    @property
    def needs_setup(self) -> bool:
        """Return whether no admin account existed at the last restore."""
        return self._needs_setup

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def restore(self) -> SessionState:
        """Restore a stored, unexpired session without contacting the admins store."""
        try:
            self._needs_setup = not self._repo.has_any_admin()

            payload = self._session_store.load()
            if payload is None:
                return self.state
            try:
                session = StoredSession.model_validate(payload)
            except ValidationError:
                session = None
            if session is not None and session.expires_at > self._now_ms():
                self._user = session.user
            else:
                self._session_store.clear()
        except Exception:
            LOGGER.exception("Session check failed")
        return self.state

    def login(self, username: str, password: str) -> LoginResult:
        """Authenticate and persist a session that expires after the configured TTL."""
        try:
            admin = self._repo.authenticate(username, password)
            if admin is None:
                LOGGER.info("Login rejected", extra={"username": username})
                return LoginResult(success=False, error=INVALID_CREDENTIALS_MESSAGE)

            session = StoredSession(
                user=admin,
                expires_at=self._now_ms() + self._config.ttl_seconds * 1000,
            )
            self._session_store.save(session.model_dump(mode="json", by_alias=True))
            self._user = admin
            LOGGER.info("Login succeeded", extra={"username": username})
            return LoginResult(success=True)
        except Exception:
            LOGGER.exception("Login error", extra={"username": username})
            return LoginResult(success=False, error=UNEXPECTED_ERROR_MESSAGE)

    def logout(self) -> None:
        self._user = None
        self._session_store.clear()
