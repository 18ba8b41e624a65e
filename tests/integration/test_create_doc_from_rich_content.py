"""
Integration tests for creating documents from editor output.

The whole chain runs for real: credentials are read from a credential
directory, the service is built through the container, the Delta (or HTML
fallback) is compiled and the resulting batch is sent. Only the Google
discovery client is replaced by a mock resource.
"""

import json
from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from google.oauth2.credentials import Credentials

import gdocs.writing
from auth.credential_provider import StoredCredentialProvider
from auth.credential_store import LocalDirectoryCredentialStore
from auth.scopes import DOCS_SCOPES
from core.container import Container, get_container, reset_container, set_container
from core.errors import CredentialsNotFoundError, InvalidContentError, PermissionDeniedError

USER = "writer@example.com"


def _send_batch_requests(mock_docs_service):
    batch_update = mock_docs_service.documents.return_value.batchUpdate
    return [call.kwargs["body"]["requests"] for call in batch_update.call_args_list]


@pytest.fixture
def build_mock(monkeypatch, mock_docs_service):
    build = MagicMock(return_value=mock_docs_service)
    monkeypatch.setattr(gdocs.writing, "build", build)
    return build


@pytest.fixture
def container(temp_dir, env_override, build_mock):
    config = env_override(GOOGLE_DOCS_CREDENTIALS_DIR=temp_dir, USER_GOOGLE_EMAIL=USER)
    store = LocalDirectoryCredentialStore()
    store.store_credential(
        USER,
        Credentials(
            token="ya29.integration",
            refresh_token="1//refresh",
            scopes=list(DOCS_SCOPES),
            expiry=datetime.utcnow() + timedelta(hours=1),
        ),
    )

    reset_container()
    set_container(Container(credential_provider=StoredCredentialProvider(store, config=config)))
    yield get_container()
    reset_container()


class TestCreateFromDelta:
    def test_formatted_delta_end_to_end(self, container, mock_docs_service, build_mock):
        delta = json.dumps(
            {
                "ops": [
                    {"insert": "Report"},
                    {"insert": "\n", "attributes": {"header": 1, "align": "center"}},
                    {"insert": "Status: "},
                    {"insert": "green", "attributes": {"bold": True, "color": "rgb(0, 128, 0)"}},
                    {"insert": "\n"},
                    {"insert": "first"},
                    {"insert": "\n", "attributes": {"list": "bullet"}},
                ]
            }
        )

        created = container.docs_service().create_document_from_rich_content("Weekly", delta, "<p>unused</p>")

        assert created.document_id == "doc123"
        assert created.url == "https://docs.google.com/document/d/doc123/edit"
        credentials = build_mock.call_args.kwargs["credentials"]
        assert credentials.token == "ya29.integration"

        (requests,) = _send_batch_requests(mock_docs_service)
        assert requests == [
            {"insertText": {"location": {"index": 1}, "text": "Report\nStatus: green\nfirst\n"}},
            {
                "updateParagraphStyle": {
                    "range": {"startIndex": 1, "endIndex": 8},
                    "paragraphStyle": {"namedStyleType": "HEADING_1", "alignment": "CENTER"},
                    "fields": "namedStyleType,alignment",
                }
            },
            {
                "createParagraphBullets": {
                    "range": {"startIndex": 22, "endIndex": 28},
                    "bulletPreset": "BULLET_DISC_CIRCLE_SQUARE",
                }
            },
            {
                "updateTextStyle": {
                    "range": {"startIndex": 16, "endIndex": 21},
                    "textStyle": {
                        "bold": True,
                        "foregroundColor": {"color": {"rgbColor": {"red": 0.0, "green": 128 / 255, "blue": 0.0}}},
                    },
                    "fields": "bold,foregroundColor",
                }
            },
        ]

    def test_empty_delta_falls_back_to_html(self, container, mock_docs_service):
        delta = json.dumps({"ops": [{"insert": {"image": "data:image/png;base64,AAAA"}}]})

        container.docs_service().create_document_from_rich_content("Fallback", delta, "<h2>From HTML</h2>")

        (requests,) = _send_batch_requests(mock_docs_service)
        assert requests[0] == {"insertText": {"location": {"index": 1}, "text": "From HTML\n"}}
        assert requests[1]["updateParagraphStyle"]["paragraphStyle"] == {"namedStyleType": "HEADING_2"}

    def test_invalid_delta_raises_before_creating(self, container, mock_docs_service):
        with pytest.raises(InvalidContentError):
            container.docs_service().create_document_from_delta("Nothing", {"ops": []})

        mock_docs_service.documents.return_value.create.assert_not_called()

    def test_empty_everything_creates_blank_document(self, container, mock_docs_service):
        created = container.docs_service().create_document_from_rich_content("Blank", None, "<script>init()</script>")

        assert created.document_id == "doc123"
        mock_docs_service.documents.return_value.batchUpdate.assert_not_called()


class TestFailures:
    def test_missing_credentials(self, temp_dir, env_override, build_mock):
        config = env_override(GOOGLE_DOCS_CREDENTIALS_DIR=temp_dir, USER_GOOGLE_EMAIL=USER)
        container = Container(
            credential_provider=StoredCredentialProvider(LocalDirectoryCredentialStore(temp_dir), config=config)
        )

        with pytest.raises(CredentialsNotFoundError):
            container.docs_service()

        build_mock.assert_not_called()

    def test_sink_rejection_is_not_swallowed_by_fallback(self, container, mock_docs_service):
        from googleapiclient.errors import HttpError

        resp = MagicMock()
        resp.status = 403
        resp.reason = "Forbidden"
        mock_docs_service.documents.return_value.batchUpdate.return_value.execute.side_effect = HttpError(
            resp, b"Forbidden"
        )
        delta = json.dumps({"ops": [{"insert": "hello\n"}]})

        with pytest.raises(PermissionDeniedError):
            container.docs_service().create_document_from_rich_content("Denied", delta, "<p>hello</p>")
