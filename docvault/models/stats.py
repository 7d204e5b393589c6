"""Dashboard statistics models."""

from pydantic import BaseModel, Field

from docvault.models.document import file_type_label


class Statistics(BaseModel):
    """Summary metrics derived from one collection snapshot."""

    total_documents: int = 0
    total_size: int = 0
    recent_uploads: int = 0
    file_types: dict[str, int] = Field(default_factory=dict)  # raw MIME type -> count

    def labelled_file_types(self) -> dict[str, int]:
        """Counts keyed by display label ("pdf" for "application/pdf")."""
        labelled: dict[str, int] = {}
        for file_type, count in self.file_types.items():
            label = file_type_label(file_type)
            labelled[label] = labelled.get(label, 0) + count
        return labelled


class FileTypeShare(BaseModel):
    """One row of the file type distribution chart."""

    label: str
    file_type: str
    count: int
    percentage: float
