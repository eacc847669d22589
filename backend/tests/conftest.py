"""
Shared test fixtures and configuration.
"""

import os

# Set test environment variables before importing app modules
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/foxie_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")

import pytest
from unittest.mock import AsyncMock

from foxie.core import ChatSessionService
from foxie.llm.base import LLMProvider, LLMResponse
from foxie.storage import LocalBlobStore, LocalDocumentStore, LocalStorage


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def document_store(storage):
    return LocalDocumentStore(storage)


@pytest.fixture
def blob_store(storage):
    return LocalBlobStore(storage)


@pytest.fixture
def llm_provider():
    """Provider whose n-th reply is "reply n to: <prompt>" padded with spaces."""
    provider = AsyncMock(spec=LLMProvider)
    calls = {"count": 0}

    async def reply(messages, temperature=None, max_tokens=None, **kwargs):
        calls["count"] += 1
        return LLMResponse(content=f"  reply {calls['count']} to: {messages[-1].content}\n", model="test")

    provider.chat_completion.side_effect = reply
    return provider


@pytest.fixture
def chat_service(document_store, llm_provider):
    return ChatSessionService(document_store, llm_provider)
