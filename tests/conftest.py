"""Shared pytest fixtures for rich-docs tests."""

import tempfile
from unittest.mock import MagicMock

import pytest

from auth.config import reload_docs_config
from gdocs.writing import DocsService


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_docs_service():
    """Create a mock Google Docs v1 resource."""
    service = MagicMock()
    service.documents.return_value.create.return_value.execute.return_value = {
        "documentId": "doc123",
        "title": "Test Doc",
    }
    service.documents.return_value.batchUpdate.return_value.execute.return_value = {
        "documentId": "doc123",
        "replies": [],
    }
    service.documents.return_value.get.return_value.execute.return_value = {
        "documentId": "doc123",
        "title": "Test Doc",
        "revisionId": "rev1",
        "body": {
            "content": [
                {"endIndex": 1, "sectionBreak": {}},
                {
                    "startIndex": 1,
                    "endIndex": 13,
                    "paragraph": {
                        "elements": [{"startIndex": 1, "endIndex": 13, "textRun": {"content": "Hello World\n"}}]
                    },
                },
            ]
        },
    }
    return service


@pytest.fixture
def docs_service(mock_docs_service):
    """DocsService backed by the mock resource."""
    return DocsService(mock_docs_service)


@pytest.fixture
def sent_requests(mock_docs_service):
    """Requests list passed to batchUpdate (last call by default)."""

    def _sent(call_index=-1):
        call = mock_docs_service.documents.return_value.batchUpdate.call_args_list[call_index]
        return call.kwargs["body"]["requests"]

    return _sent


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables and reload the config."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)
        return reload_docs_config()

    yield _override
    monkeypatch.undo()
    reload_docs_config()
