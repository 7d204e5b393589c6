"""Document Vault data models."""

from docvault.models.document import (
    UNKNOWN_FILE_TYPE,
    Document,
    DocumentList,
    DownloadedFile,
    UploadDraft,
    UploadFile,
    file_type_label,
)
from docvault.models.session import Session
from docvault.models.stats import FileTypeShare, Statistics

__all__ = [
    "UNKNOWN_FILE_TYPE",
    "Document",
    "DocumentList",
    "DownloadedFile",
    "FileTypeShare",
    "Session",
    "Statistics",
    "UploadDraft",
    "UploadFile",
    "file_type_label",
]
