"""Statistics aggregation over a document collection snapshot.

Pure functions only: the same snapshot and ``now`` always produce the same
result, and every call recomputes from scratch so totals can never drift
away from the collection they describe.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from docvault.models.document import Document, file_type_label
from docvault.models.stats import FileTypeShare, Statistics

RECENT_WINDOW = timedelta(days=7)
RECENT_DOCUMENTS_LIMIT = 5


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def aggregate(
    collection: Sequence[Document],
    now: datetime | None = None,
    recent_window: timedelta = RECENT_WINDOW,
) -> Statistics:
    """Derive dashboard statistics from a collection snapshot.

    Args:
        collection: Documents currently held by the store
        now: Reference time for the recent-upload window (default: current UTC time)
        recent_window: How far back an upload still counts as recent

    Returns:
        Statistics whose total equals both len(collection) and the sum of file_types
    """
    cutoff = _as_utc(now or datetime.now(UTC)) - recent_window

    total_size = 0
    recent_uploads = 0
    file_types: dict[str, int] = {}
    for doc in collection:
        total_size += max(doc.file_size, 0)
        if doc.upload_date is not None and _as_utc(doc.upload_date) > cutoff:
            recent_uploads += 1
        file_types[doc.type_label] = file_types.get(doc.type_label, 0) + 1

    return Statistics(
        total_documents=len(collection),
        total_size=total_size,
        recent_uploads=recent_uploads,
        file_types=file_types,
    )


def file_type_distribution(stats: Statistics) -> list[FileTypeShare]:
    """Per-type counts with their share of all documents, in percent."""
    total = stats.total_documents
    return [
        FileTypeShare(
            label=file_type_label(file_type),
            file_type=file_type,
            count=count,
            percentage=round(count / total * 100, 1) if total > 0 else 0.0,
        )
        for file_type, count in stats.file_types.items()
    ]


def recent_documents(
    collection: Sequence[Document], limit: int = RECENT_DOCUMENTS_LIMIT
) -> list[Document]:
    """Newest documents first; undated documents sort last."""
    oldest = datetime.min.replace(tzinfo=UTC)
    ordered = sorted(
        collection,
        key=lambda doc: _as_utc(doc.upload_date) if doc.upload_date else oldest,
        reverse=True,
    )
    return ordered[:limit]


__all__ = [
    "RECENT_WINDOW",
    "aggregate",
    "file_type_distribution",
    "file_type_label",
    "recent_documents",
]
