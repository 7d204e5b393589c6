"""Client-side document store - the single source of truth views render from.

The store holds the last collection snapshot confirmed by the server.
Every mutation (upload, delete) is followed by a full re-fetch instead of a
local patch, and collection-replacing fetches are ticketed so a slow, older
response can never overwrite a newer one.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

import httpx

from docvault.api.client import DocumentApiClient
from docvault.models.document import Document, DownloadedFile, UploadDraft
from docvault.models.stats import FileTypeShare, Statistics
from docvault.stats.aggregator import (
    RECENT_DOCUMENTS_LIMIT,
    RECENT_WINDOW,
    aggregate,
    file_type_distribution,
    recent_documents,
)
from docvault.store.errors import (
    DeleteFailed,
    DownloadFailed,
    FetchFailed,
    SearchFailed,
    UploadFailed,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this document?"

# Payload problems surface as ValueError (bad JSON, pydantic ValidationError)
TRANSPORT_ERRORS = (httpx.HTTPError, ValueError)


class FileSaver(Protocol):
    """Hands downloaded content to the environment's save mechanism."""

    def __call__(self, downloaded: DownloadedFile) -> None: ...


Confirm = Callable[[str], bool]


class DocumentStore:
    """In-memory cache of the document collection for one session."""

    def __init__(
        self,
        api: DocumentApiClient,
        recent_window: timedelta = RECENT_WINDOW,
    ) -> None:
        self.api = api
        self.recent_window = recent_window
        self._documents: tuple[Document, ...] = ()
        self._query = ""
        self._issued = 0  # last ticket handed out
        self._applied = 0  # ticket of the snapshot currently held
        self._in_flight = 0
        self.version = 0

    @property
    def documents(self) -> tuple[Document, ...]:
        """Current collection snapshot (read-only)."""
        return self._documents

    @property
    def query(self) -> str:
        """Search query behind the current snapshot ("" for the full list)."""
        return self._query

    @property
    def loading(self) -> bool:
        """True while a collection-replacing fetch is outstanding."""
        return self._in_flight > 0

    # -- collection-replacing fetches ---------------------------------------

    def _next_ticket(self) -> int:
        self._issued += 1
        self._in_flight += 1
        return self._issued

    def _apply(self, ticket: int, documents: list[Document], query: str) -> bool:
        """Install a fetched snapshot unless a newer one is already in place."""
        if ticket < self._applied:
            logger.warning(
                f"Discarding stale document list response (ticket {ticket} < {self._applied})",
                extra={"structured": {"ticket": ticket, "applied": self._applied}},
            )
            return False

        unique: dict[str, Document] = {}
        for doc in documents:
            if doc.id in unique:
                logger.warning(
                    f"Dropping duplicate document id {doc.id} from list response",
                    extra={"structured": {"ticket": ticket, "document_id": doc.id}},
                )
                continue
            unique[doc.id] = doc

        self._applied = ticket
        self._documents = tuple(unique.values())
        self._query = query
        self.version += 1
        return True

    async def load_all(self) -> tuple[Document, ...]:
        """Replace the collection with every document on the server.

        Raises:
            FetchFailed: On transport or payload errors; the collection is unchanged
        """
        ticket = self._next_ticket()
        try:
            documents = await self.api.list_documents()
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Failed to fetch documents: {e}")
            raise FetchFailed(str(e)) from e
        finally:
            self._in_flight -= 1

        if self._apply(ticket, documents, query=""):
            logger.info(f"Loaded {len(documents)} documents")
        return self._documents

    async def search(self, query: str) -> tuple[Document, ...]:
        """Replace the collection with the documents matching query.

        A blank query is a full reload, identical to load_all().

        Raises:
            FetchFailed: If the blank-query reload fails
            SearchFailed: On transport or payload errors; the collection is unchanged
        """
        if not query.strip():
            return await self.load_all()

        ticket = self._next_ticket()
        try:
            documents = await self.api.search_documents(query)
        except TRANSPORT_ERRORS as e:
            logger.warning(f"Search failed for {query!r}: {e}")
            raise SearchFailed(str(e)) from e
        finally:
            self._in_flight -= 1

        if self._apply(ticket, documents, query=query):
            logger.info(f"Search {query!r} matched {len(documents)} documents")
        return self._documents

    # -- mutations ------------------------------------------------------------

    async def upload(self, draft: UploadDraft) -> tuple[Document, ...]:
        """Upload the draft, clear it, then re-sync the collection.

        Raises:
            ValidationFailed: If name or file is missing (no request is sent)
            UploadFailed: If the upload request fails; the draft is kept for retry
            FetchFailed: If the upload succeeded but the re-sync failed
        """
        missing = draft.missing_fields()
        if missing or draft.file is None:
            raise ValidationFailed(f"missing required fields: {', '.join(missing)}")

        try:
            await self.api.upload_document(
                name=draft.name, description=draft.description, file=draft.file
            )
        except httpx.HTTPError as e:
            logger.warning(f"Failed to upload {draft.file.file_name!r}: {e}")
            raise UploadFailed(str(e)) from e

        logger.info(
            f"Uploaded document {draft.name!r}",
            extra={"structured": {"file_name": draft.file.file_name}},
        )
        draft.clear()
        return await self.load_all()

    async def remove(self, document_id: str, confirm: Confirm) -> bool:
        """Delete a document after an explicit yes from confirm.

        Returns:
            False if the user declined (nothing was sent), True once deleted and re-synced

        Raises:
            DeleteFailed: If the delete request fails; the collection is unchanged
            FetchFailed: If the delete succeeded but the re-sync failed
        """
        if not confirm(DELETE_PROMPT):
            logger.info(f"Delete of document {document_id} cancelled")
            return False

        try:
            await self.api.delete_document(document_id)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to delete document {document_id}: {e}")
            raise DeleteFailed(str(e)) from e

        logger.info(f"Deleted document {document_id}")
        await self.load_all()
        return True

    async def download(self, document_id: str, file_name: str, save: FileSaver) -> None:
        """Fetch a document's content and pass it to save.

        Raises:
            DownloadFailed: On transport errors; nothing is saved
        """
        try:
            downloaded = await self.api.download_document(document_id, file_name)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to download document {document_id}: {e}")
            raise DownloadFailed(str(e)) from e

        save(downloaded)

    # -- derived views --------------------------------------------------------

    def statistics(self, now: datetime | None = None) -> Statistics:
        """Statistics recomputed from the current snapshot."""
        return aggregate(self._documents, now=now, recent_window=self.recent_window)

    def file_type_distribution(self, now: datetime | None = None) -> list[FileTypeShare]:
        return file_type_distribution(self.statistics(now))

    def recent_documents(self, limit: int = RECENT_DOCUMENTS_LIMIT) -> list[Document]:
        return recent_documents(self._documents, limit=limit)
