"""Fixtures wiring the document store to the fake document API."""

from collections.abc import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from fake_document_api import DocumentRepository, create_fake_api

from docvault.api.client import DocumentApiClient
from docvault.store.document_store import DocumentStore

BASE_URL = "http://testserver/api"


@pytest.fixture
def repo() -> DocumentRepository:
    return DocumentRepository()


@pytest_asyncio.fixture
async def http_client(repo: DocumentRepository) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=create_fake_api(repo))
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def store(http_client: httpx.AsyncClient) -> DocumentStore:
    return DocumentStore(DocumentApiClient(BASE_URL, client=http_client))
