"""Document models - API records, upload drafts and downloaded payloads."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

UNKNOWN_FILE_TYPE = "Unknown"


def file_type_label(file_type: str | None) -> str:
    """Short display label for a MIME type ("pdf" for "application/pdf")."""
    if not file_type:
        return UNKNOWN_FILE_TYPE
    _, _, subtype = file_type.partition("/")
    return subtype or file_type


class Document(BaseModel):
    """Stored document metadata as returned by the document API.

    The API omits fields freely, so defaults are applied here once and
    consumers never re-check for missing values.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str
    name: str = ""
    description: str | None = None
    file_name: str = Field(default="", alias="fileName")
    file_type: str | None = Field(default=None, alias="fileType")
    file_size: int = Field(default=0, alias="fileSize")
    upload_date: datetime | None = Field(default=None, alias="uploadDate")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Server ids are numeric; keep them opaque."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("file_name", mode="before")
    @classmethod
    def default_file_name(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("file_type", mode="before")
    @classmethod
    def normalize_file_type(cls, v: Any) -> Any:
        """Treat empty MIME strings as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("file_size", mode="before")
    @classmethod
    def default_file_size(cls, v: Any) -> Any:
        """Missing sizes count as 0 bytes."""
        return 0 if v is None else v

    @field_validator("file_size")
    @classmethod
    def clamp_file_size(cls, v: int) -> int:
        return max(v, 0)

    @field_validator("upload_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Naive server timestamps are read as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def type_label(self) -> str:
        """File type for display, "Unknown" when absent."""
        return self.file_type or UNKNOWN_FILE_TYPE


DocumentList = TypeAdapter(list[Document])


@dataclass(frozen=True)
class UploadFile:
    """File picked in the upload form."""

    file_name: str
    content: bytes
    content_type: str | None = None


@dataclass
class UploadDraft:
    """Upload form contents that have not been submitted yet."""

    name: str = ""
    description: str = ""
    file: UploadFile | None = None

    def missing_fields(self) -> list[str]:
        """Required fields that are still empty."""
        missing = []
        if not self.name.strip():
            missing.append("name")
        if self.file is None:
            missing.append("file")
        return missing

    def clear(self) -> None:
        """Reset the draft after a successful upload."""
        self.name = ""
        self.description = ""
        self.file = None


@dataclass(frozen=True)
class DownloadedFile:
    """Raw document content fetched for saving."""

    file_name: str
    content: bytes
    content_type: str | None = None
