"""Async client for the external document API.

Endpoints (relative to the configured base URL):
    GET    /documents
    GET    /documents/search?query=...
    POST   /documents/upload            multipart: file, name, description
    GET    /documents/download/{id}
    DELETE /documents/{id}
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from docvault.config import get_settings
from docvault.models.document import Document, DocumentList, DownloadedFile, UploadFile

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class DocumentApiClient:
    """Thin HTTP wrapper; raises httpx errors and leaves recovery to callers."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: API root, e.g. http://localhost:8080/api
            timeout: Per-request timeout in seconds when a client is created here
            client: Optional shared httpx client (for testing with mocks)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls) -> "DocumentApiClient":
        settings = get_settings()
        return cls(settings.api_base_url, timeout=settings.request_timeout_seconds)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        # A client created per call is never reused across event loops
        if self._client is not None:
            yield self._client
            return

        client = httpx.AsyncClient(timeout=self.timeout)
        try:
            yield client
        finally:
            await client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def list_documents(self) -> list[Document]:
        """Fetch every stored document.

        Raises:
            httpx.HTTPError: On network or HTTP errors
            pydantic.ValidationError: If the payload is not a document list
        """
        async with self._session() as client:
            response = await client.get(self._url("/documents"))
            response.raise_for_status()
            return DocumentList.validate_python(response.json())

    async def search_documents(self, query: str) -> list[Document]:
        """Fetch documents whose name matches query (server-side filter)."""
        async with self._session() as client:
            response = await client.get(self._url("/documents/search"), params={"query": query})
            response.raise_for_status()
            return DocumentList.validate_python(response.json())

    async def upload_document(
        self, *, name: str, description: str, file: UploadFile
    ) -> httpx.Response:
        """Upload a file with its metadata.

        The created document in the response body is not relied upon;
        callers re-fetch the list instead.
        """
        files = {
            "file": (file.file_name, file.content, file.content_type or DEFAULT_CONTENT_TYPE)
        }
        data = {"name": name, "description": description}

        async with self._session() as client:
            response = await client.post(self._url("/documents/upload"), data=data, files=files)
            response.raise_for_status()
            return response

    async def download_document(self, document_id: str, file_name: str) -> DownloadedFile:
        """Fetch the raw file content of a document."""
        async with self._session() as client:
            response = await client.get(self._url(f"/documents/download/{document_id}"))
            response.raise_for_status()
            return DownloadedFile(
                file_name=file_name,
                content=response.content,
                content_type=response.headers.get("content-type"),
            )

    async def delete_document(self, document_id: str) -> None:
        """Delete a document; only success or failure matters."""
        async with self._session() as client:
            response = await client.delete(self._url(f"/documents/{document_id}"))
            response.raise_for_status()
