"""Credential verification for the login gate.

FixedCredentialVerifier is a demo stand-in: it compares against configured
constants on the client and is NOT a security boundary. A real verifier
only needs to implement ``verify``.
"""

import hmac
from typing import Protocol

from docvault.config import Settings


class CredentialVerifier(Protocol):
    """Protocol for credential checks."""

    def verify(self, username: str, password: str) -> bool:
        """Return True if the credentials are accepted."""
        ...


class FixedCredentialVerifier:
    """Accepts exactly one username/password pair."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    @classmethod
    def from_settings(cls, settings: Settings) -> "FixedCredentialVerifier":
        return cls(settings.admin_username, settings.admin_password.get_secret_value())

    def verify(self, username: str, password: str) -> bool:
        username_ok = hmac.compare_digest(username.encode(), self._username.encode())
        password_ok = hmac.compare_digest(password.encode(), self._password.encode())
        return username_ok and password_ok
