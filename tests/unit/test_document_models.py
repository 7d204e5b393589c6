"""Unit tests for document, draft and session models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from docvault.models import Document, DocumentList, Session, UploadDraft, UploadFile


def test_document_parses_api_payload() -> None:
    """Test camelCase API fields map onto the model."""
    doc = Document.model_validate(
        {
            "id": 42,
            "name": "Contract",
            "description": "Signed copy",
            "fileName": "contract.pdf",
            "fileType": "application/pdf",
            "fileSize": 2048,
            "filePath": "uuid_contract.pdf",
            "uploadDate": "2025-06-01T10:15:00",
        }
    )

    assert doc.id == "42"
    assert doc.file_name == "contract.pdf"
    assert doc.file_type == "application/pdf"
    assert doc.file_size == 2048
    assert doc.upload_date == datetime(2025, 6, 1, 10, 15, tzinfo=UTC)
    assert doc.type_label == "application/pdf"


def test_document_defaults_missing_fields() -> None:
    """Test defaulting rules for absent optional fields."""
    doc = Document.model_validate(
        {"id": "abc", "name": "Notes", "fileName": None, "fileType": "", "fileSize": None}
    )

    assert doc.file_name == ""
    assert doc.file_type is None
    assert doc.type_label == "Unknown"
    assert doc.file_size == 0
    assert doc.upload_date is None
    assert doc.description is None


@pytest.mark.parametrize(("raw", "expected"), [(-5, 0), ("-5", 0), ("12", 12)])
def test_document_file_size_is_never_negative(raw: object, expected: int) -> None:
    """Test that sizes are clamped after coercion, including numeric strings."""
    doc = Document.model_validate({"id": 1, "fileSize": raw})

    assert doc.file_size == expected


def test_document_list_adapter() -> None:
    """Test parsing a JSON array of documents."""
    docs = DocumentList.validate_python([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])

    assert [d.id for d in docs] == ["1", "2"]


def test_document_list_rejects_non_list() -> None:
    """Test that a malformed payload raises a validation error."""
    with pytest.raises(ValidationError):
        DocumentList.validate_python({"error": "nope"})


def test_upload_draft_missing_fields_and_clear() -> None:
    """Test draft validation helpers and reset."""
    draft = UploadDraft(name="  ", description="d")
    assert draft.missing_fields() == ["name", "file"]

    draft.name = "Report"
    draft.file = UploadFile(file_name="r.txt", content=b"hi", content_type="text/plain")
    assert draft.missing_fields() == []

    draft.clear()
    assert draft == UploadDraft()


def test_session_storage_round_trip_uses_camel_case() -> None:
    """Test that sessions serialize with the stored key names."""
    session = Session(
        username="admin",
        email="admin@documentvault.com",
        login_time=datetime(2025, 6, 1, 8, 0, tzinfo=UTC),
    )

    raw = session.to_storage()

    assert '"loginTime"' in raw
    assert Session.from_storage(raw) == session


def test_session_from_storage_rejects_garbage() -> None:
    """Test that corrupt stored entries raise ValidationError."""
    with pytest.raises(ValidationError):
        Session.from_storage("{not json")
    with pytest.raises(ValidationError):
        Session.from_storage('{"username": "admin"}')
