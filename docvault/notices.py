"""Transient banner messages shown above the views.

Success notices disappear on their own after a few seconds; error notices
stay until the user starts the next action.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from docvault.store.errors import DocumentVaultError


class NoticeKind(str, Enum):
    success = "success"
    error = "error"


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str
    expires_at: float | None = None  # monotonic seconds; None = until next action


class NoticeBoard:
    """Holds the current success and error notices."""

    def __init__(self, ttl_seconds: float = 3.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._notices: list[Notice] = []

    def success(self, message: str) -> None:
        self._notices = [n for n in self._notices if n.kind != NoticeKind.success]
        self._notices.append(
            Notice(NoticeKind.success, message, expires_at=self.clock() + self.ttl_seconds)
        )

    def error(self, message: str) -> None:
        self._notices = [n for n in self._notices if n.kind != NoticeKind.error]
        self._notices.append(Notice(NoticeKind.error, message))

    def report(self, exc: DocumentVaultError) -> None:
        """Post the banner message for a surfaced error."""
        self.error(exc.user_message)

    def begin_action(self) -> None:
        """Clear error notices when the user starts something new."""
        self._notices = [n for n in self._notices if n.kind != NoticeKind.error]

    def active(self) -> list[Notice]:
        """Notices still visible now; expired ones are dropped."""
        now = self.clock()
        self._notices = [n for n in self._notices if n.expires_at is None or n.expires_at > now]
        return list(self._notices)
