"""
PyTest Configuration and Fixtures for Resource Search Tests

Provides:
- Async test client using httpx.AsyncClient (in-memory, no server required)
- Canned resource rows and embeddings
- Patched collaborators (embedding service, data store)
"""

import os
import sys
from typing import AsyncGenerator
from unittest.mock import AsyncMock, patch

import httpx
import pytest
import pytest_asyncio

# Make the service modules importable when running from the repo root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app  # noqa: E402


SAMPLE_EMBEDDING = [0.1, 0.2, 0.3]


@pytest.fixture
def resource_rows():
    """Rows as returned by the data store for a filter-only query"""
    return [
        {
            "id": "3f1c0a52-6b0e-4c9e-9d4e-2f6a1e7c8b11",
            "title": "Forces and motion revision",
            "description": "Summary notes for GCSE physics",
            "averagerating": 4.8,
            "subject": "Physics",
            "examboard": "AQA",
            "level": "GCSE",
            "type": "notes",
        },
        {
            "id": "9b7e4d30-1a2c-4f5e-8d6b-0c1e2f3a4b5c",
            "title": "Electricity past paper pack",
            "description": None,
            "averagerating": 4.1,
            "subject": "Physics",
            "examboard": "Edexcel",
            "level": "GCSE",
            "type": "past-paper",
        },
    ]


@pytest.fixture
def mock_fetch_rows(resource_rows):
    """Patch the data store call used by the search service"""
    with patch("services.search_service.fetch_rows", new=AsyncMock(return_value=resource_rows)) as mock:
        yield mock


@pytest.fixture
def mock_get_embedding():
    """Patch the embedding service call used by the search service"""
    with patch("services.search_service.get_embedding", new=AsyncMock(return_value=SAMPLE_EMBEDDING)) as mock:
        yield mock


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client that tests the FastAPI app in-memory."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
