"""Helper functions for UI - formatting and view data for the Streamlit pages."""

from datetime import datetime
from typing import Any, Protocol

from docvault.models import Document, Statistics, UploadDraft, UploadFile
from docvault.notices import NoticeBoard
from docvault.store.document_store import DocumentStore
from docvault.store.errors import FetchFailed, UploadFailed

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]
SIZE_STEP = 1024
UPLOAD_SUCCESS = "Document uploaded successfully!"


class UploadedFileLike(Protocol):
    """What Streamlit's file_uploader hands back."""

    name: str
    type: str | None

    def getvalue(self) -> bytes: ...


def format_file_size(size: int | None) -> str:
    """Human-readable size, e.g. 1536 -> "1.5 KB".

    Args:
        size: Size in bytes (None and negatives render as 0)

    Returns:
        Size with at most two decimals and a unit up to GB
    """
    if not size or size <= 0:
        return "0 Bytes"

    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= SIZE_STEP ** (exponent + 1):
        exponent += 1
    value = round(size / SIZE_STEP**exponent, 2)
    # Drop trailing zeros: 1.50 -> 1.5, 2.00 -> 2
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[exponent]}"


def format_upload_date(uploaded: datetime | None) -> str:
    """Upload date for display."""
    if uploaded is None:
        return "Unknown"
    return uploaded.strftime("%Y-%m-%d")


def file_icon(file_type: str | None) -> str:
    """Icon for a document card: PDFs get a page, everything else a file."""
    if file_type and "pdf" in file_type:
        return "📄"
    return "📁"


def build_document_card(doc: Document) -> dict[str, Any]:
    """Build display fields for one document card.

    Args:
        doc: Document from the store snapshot

    Returns:
        Dict with icon, title, file, size, type, uploaded and description
    """
    return {
        "id": doc.id,
        "icon": file_icon(doc.file_type),
        "title": doc.name,
        "file": doc.file_name,
        "size": format_file_size(doc.file_size),
        "type": doc.type_label,
        "uploaded": format_upload_date(doc.upload_date),
        "description": doc.description or None,
    }


def build_stat_cards(stats: Statistics) -> list[dict[str, str]]:
    """Build the four dashboard metric cards."""
    return [
        {"icon": "📄", "label": "Total Documents", "value": str(stats.total_documents)},
        {"icon": "💾", "label": "Storage Used", "value": format_file_size(stats.total_size)},
        {"icon": "📈", "label": "Recent Uploads (7 days)", "value": str(stats.recent_uploads)},
        {"icon": "🗂️", "label": "File Types", "value": str(len(stats.file_types))},
    ]


def to_upload_file(uploaded: UploadedFileLike | None) -> UploadFile | None:
    """Convert a Streamlit upload into the store's UploadFile."""
    if uploaded is None:
        return None
    return UploadFile(
        file_name=uploaded.name,
        content=uploaded.getvalue(),
        content_type=uploaded.type or None,
    )


async def submit_upload(store: DocumentStore, draft: UploadDraft, notices: NoticeBoard) -> bool:
    """Upload the draft and post the resulting notices.

    Returns:
        True once the server has accepted the upload, even if the re-sync
        afterwards failed (that failure is posted as its own error notice)
    """
    notices.begin_action()
    try:
        await store.upload(draft)
    except UploadFailed as e:
        notices.report(e)
        return False
    except FetchFailed as e:
        notices.success(UPLOAD_SUCCESS)
        notices.report(e)
        return True
    notices.success(UPLOAD_SUCCESS)
    return True
