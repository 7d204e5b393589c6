"""Login gate state machine.

States and transitions:

    UNAUTHENTICATED --submit()--> AUTHENTICATING
    AUTHENTICATING  --match-----> AUTHENTICATED      (session persisted)
    AUTHENTICATING  --mismatch--> UNAUTHENTICATED    (InvalidCredentials)
    AUTHENTICATED   --logout()--> UNAUTHENTICATED    (session removed)

At startup a valid persisted session admits the user directly, without
re-checking credentials; an unparsable one is deleted.

This is a demo gate, not a security boundary: credentials are checked on
the client and the stored session is trusted as-is.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum

from pydantic import ValidationError

from docvault.auth.storage import SessionStorage
from docvault.auth.verifier import CredentialVerifier
from docvault.models.session import Session
from docvault.store.errors import (
    AuthError,
    CorruptSession,
    InvalidCredentials,
    InvalidTransition,
)

logger = logging.getLogger(__name__)

SESSION_KEY = "documentVaultUser"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthState(str, Enum):
    """Login gate state."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthGate:
    """Guards the application behind a (mock) login."""

    def __init__(
        self,
        verifier: CredentialVerifier,
        storage: SessionStorage,
        *,
        email: str,
        session_key: str = SESSION_KEY,
        login_delay: float = 1.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.verifier = verifier
        self.storage = storage
        self.email = email
        self.session_key = session_key
        self.login_delay = login_delay
        self.clock = clock

        self.state = AuthState.UNAUTHENTICATED
        self.session: Session | None = None
        self.last_username = ""
        self.last_error: AuthError | None = None

        self._restore()

    @property
    def is_authenticated(self) -> bool:
        return self.state == AuthState.AUTHENTICATED

    def _restore(self) -> None:
        raw = self.storage.get_item(self.session_key)
        if raw is None:
            return

        try:
            session = Session.from_storage(raw)
        except ValidationError as e:
            logger.warning(f"Removing corrupt persisted session: {e.error_count()} error(s)")
            self.storage.remove_item(self.session_key)
            self.last_error = CorruptSession(str(e))
            return

        self.session = session
        self.state = AuthState.AUTHENTICATED
        logger.info(f"Restored session for {session.username}")

    async def submit(self, username: str, password: str) -> Session:
        """Check credentials and, on success, persist a new session.

        Raises:
            InvalidTransition: If not currently UNAUTHENTICATED
            InvalidCredentials: If the credentials do not match
        """
        if self.state != AuthState.UNAUTHENTICATED:
            raise InvalidTransition(f"cannot submit credentials while {self.state.value}")

        self.state = AuthState.AUTHENTICATING
        self.last_username = username
        self.last_error = None
        try:
            if self.login_delay > 0:
                await asyncio.sleep(self.login_delay)
            accepted = self.verifier.verify(username, password)
        except BaseException:
            self.state = AuthState.UNAUTHENTICATED
            raise

        if not accepted:
            self.state = AuthState.UNAUTHENTICATED
            error = InvalidCredentials()
            self.last_error = error
            logger.warning(f"Rejected login for {username!r}")
            raise error

        session = Session(username=username, email=self.email, login_time=self.clock())
        self.storage.set_item(self.session_key, session.to_storage())
        self.session = session
        self.state = AuthState.AUTHENTICATED
        logger.info(f"Signed in as {username}")
        return session

    def logout(self) -> None:
        """End the session and remove it from storage.

        Raises:
            InvalidTransition: If not currently AUTHENTICATED
        """
        if self.state != AuthState.AUTHENTICATED:
            raise InvalidTransition(f"cannot log out while {self.state.value}")

        self.storage.remove_item(self.session_key)
        username = self.session.username if self.session else ""
        self.session = None
        self.state = AuthState.UNAUTHENTICATED
        self.last_error = None
        logger.info(f"Signed out {username}")
