"""Unit tests for the login gate state machine."""

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from docvault.auth.gate import SESSION_KEY, AuthGate, AuthState
from docvault.auth.storage import JsonFileStorage, MemoryStorage, SessionStorage
from docvault.auth.verifier import FixedCredentialVerifier
from docvault.config import Settings
from docvault.models import Session
from docvault.store.errors import CorruptSession, InvalidCredentials, InvalidTransition

LOGIN_TIME = datetime(2025, 6, 1, 9, 0, tzinfo=UTC)


def make_gate(storage: SessionStorage | None = None) -> AuthGate:
    return AuthGate(
        FixedCredentialVerifier("admin", "admin123"),
        storage if storage is not None else MemoryStorage(),
        email="admin@documentvault.com",
        login_delay=0,
        clock=lambda: LOGIN_TIME,
    )


def test_gate_starts_unauthenticated_without_session() -> None:
    """Test the initial state with empty storage."""
    gate = make_gate()

    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.session is None
    assert gate.last_error is None


@pytest.mark.asyncio
async def test_submit_valid_credentials_persists_session() -> None:
    """Test the successful login transition."""
    storage = MemoryStorage()
    gate = make_gate(storage)

    session = await gate.submit("admin", "admin123")

    assert gate.state == AuthState.AUTHENTICATED
    assert gate.is_authenticated
    assert gate.session == session
    assert session.username == "admin"
    assert session.email == "admin@documentvault.com"
    assert session.login_time == LOGIN_TIME

    stored = json.loads(storage.get_item(SESSION_KEY) or "")
    assert stored["username"] == "admin"
    assert stored["email"] == "admin@documentvault.com"
    assert "loginTime" in stored


@pytest.mark.asyncio
async def test_submit_wrong_password_rejects_without_session() -> None:
    """Test the failed login transition."""
    storage = MemoryStorage()
    gate = make_gate(storage)

    with pytest.raises(InvalidCredentials) as exc_info:
        await gate.submit("admin", "wrong")

    assert exc_info.value.user_message == "Invalid username or password"
    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.session is None
    assert gate.last_username == "admin"
    assert isinstance(gate.last_error, InvalidCredentials)
    assert storage.get_item(SESSION_KEY) is None


@pytest.mark.asyncio
async def test_submit_is_authenticating_while_pending() -> None:
    """Test that the gate reports AUTHENTICATING during the login delay."""
    seen: list[AuthState] = []
    gate = make_gate()

    class RecordingVerifier:
        def verify(self, username: str, password: str) -> bool:
            seen.append(gate.state)
            return True

    gate.verifier = RecordingVerifier()
    await gate.submit("anyone", "anything")

    assert seen == [AuthState.AUTHENTICATING]
    assert gate.state == AuthState.AUTHENTICATED


@pytest.mark.asyncio
async def test_retry_after_failure_succeeds() -> None:
    """Test that a rejected login can be retried."""
    gate = make_gate()

    with pytest.raises(InvalidCredentials):
        await gate.submit("admin", "nope")
    await gate.submit("admin", "admin123")

    assert gate.is_authenticated
    assert gate.last_error is None


@pytest.mark.asyncio
async def test_submit_while_authenticated_is_rejected() -> None:
    """Test that submit is only valid from UNAUTHENTICATED."""
    gate = make_gate()
    await gate.submit("admin", "admin123")

    with pytest.raises(InvalidTransition):
        await gate.submit("admin", "admin123")

    assert gate.is_authenticated


@pytest.mark.asyncio
async def test_logout_clears_persisted_session() -> None:
    """Test the logout transition."""
    storage = MemoryStorage()
    gate = make_gate(storage)
    await gate.submit("admin", "admin123")

    gate.logout()

    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.session is None
    assert storage.get_item(SESSION_KEY) is None


def test_logout_when_signed_out_is_rejected() -> None:
    """Test that logout is only valid from AUTHENTICATED."""
    with pytest.raises(InvalidTransition):
        make_gate().logout()


def test_persisted_session_is_trusted_at_startup() -> None:
    """Test that a stored session admits the user without credentials."""
    session = Session(username="someone", email="x@example.com", login_time=LOGIN_TIME)
    storage = MemoryStorage({SESSION_KEY: session.to_storage()})

    gate = make_gate(storage)

    assert gate.state == AuthState.AUTHENTICATED
    assert gate.session == session


@pytest.mark.parametrize("raw", ["{broken", "null", '{"username": "admin"}', "[]"])
def test_corrupt_persisted_session_is_removed(raw: str) -> None:
    """Test self-healing of an unparsable stored session."""
    storage = MemoryStorage({SESSION_KEY: raw, "other": "kept"})

    gate = make_gate(storage)

    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.session is None
    assert isinstance(gate.last_error, CorruptSession)
    assert storage.get_item(SESSION_KEY) is None
    assert storage.get_item("other") == "kept"


def test_non_string_session_in_json_file_is_removed(tmp_path: Path) -> None:
    """Test that a session saved as a raw JSON object is treated as corrupt."""
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({SESSION_KEY: {"username": 1}, "other": "kept"}))

    gate = make_gate(JsonFileStorage(path))

    assert gate.state == AuthState.UNAUTHENTICATED
    assert gate.session is None
    assert isinstance(gate.last_error, CorruptSession)
    assert json.loads(path.read_text()) == {"other": "kept"}


def test_fixed_verifier_from_settings() -> None:
    """Test the demo verifier reads its constants from settings."""
    verifier = FixedCredentialVerifier.from_settings(
        Settings(admin_username="root", admin_password="s3cret")
    )

    assert verifier.verify("root", "s3cret")
    assert not verifier.verify("root", "S3cret")
    assert not verifier.verify("admin", "admin123")
