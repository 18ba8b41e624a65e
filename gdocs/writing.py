"""
Google Docs Writing Service

This module provides `DocsService`, the adapter between compiled formatting
plans and the Google Docs API, plus the plain document operations (create,
read, insert, replace, format).

Every API call goes through `handle_http_errors`, which turns HttpError into
the SinkError family. Nothing here retries: a batch update is sent exactly
once and either fully applies or fails.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from googleapiclient.discovery import build

from auth.config import document_url
from auth.interfaces import BaseCredentialProvider
from core.errors import ContentError, ValidationError
from core.utils import handle_http_errors, validate_document_id, validate_index_range
from gdocs.attribute_mappers import normalize_color_to_hex
from gdocs.batch_compiler import to_operations
from gdocs.delta_compiler import compile_delta, parse_delta_json
from gdocs.docs_helpers import (
    create_delete_range_request,
    create_insert_text_request,
    create_text_style_request,
)
from gdocs.html_extractor import compile_from_html
from gdocs.models import DocumentFormattingPlan, TextStyle, TextStyleField
from gdocs.reading import DocumentInfo, body_end_index, document_info, extract_plain_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreatedDocument:
    """A freshly created document."""

    document_id: str
    title: str
    url: str


class DocsService:
    """
    Document sink backed by a Google Docs v1 API resource.

    Args:
        service: The resource returned by `googleapiclient.discovery.build("docs", "v1", ...)`.
    """

    def __init__(self, service: Any):
        self.service = service

    @classmethod
    def from_credentials_provider(cls, provider: BaseCredentialProvider) -> "DocsService":
        """Build the Docs client with credentials from `provider` (raises AuthenticationError)."""
        credentials = provider.get_credentials()
        return cls(build("docs", "v1", credentials=credentials, cache_discovery=False))

    # -------------------------------------------------------------------------
    # Plain document operations
    # -------------------------------------------------------------------------

    @handle_http_errors("create_document")
    def create_document(self, title: str) -> CreatedDocument:
        """Create an empty document."""
        logger.info(f"[create_document] Title='{title}'")
        doc = self.service.documents().create(body={"title": title}).execute()

        document_id = doc.get("documentId", "")
        created = CreatedDocument(document_id=document_id, title=doc.get("title", title), url=document_url(document_id))
        logger.info(f"Created Google Doc '{created.title}' (ID: {document_id}). Link: {created.url}")
        return created

    @handle_http_errors("get_document")
    def get_document(
        self,
        document_id: str,
        suggestions_view_mode: str | None = None,
        include_tabs_content: bool = False,
    ) -> dict[str, Any]:
        """Fetch the raw document resource."""
        document_id = validate_document_id(document_id)
        params: dict[str, Any] = {"documentId": document_id}
        if suggestions_view_mode:
            params["suggestionsViewMode"] = suggestions_view_mode
        if include_tabs_content:
            params["includeTabsContent"] = True

        logger.debug(f"[get_document] {params}")
        return self.service.documents().get(**params).execute()

    def get_document_info(self, document_id: str) -> DocumentInfo:
        """Fetch title, revision and link of a document."""
        return document_info(self.get_document(document_id))

    def get_document_content(self, document_id: str) -> str:
        """Fetch the plain text of a document body."""
        return extract_plain_text(self.get_document(document_id))

    @handle_http_errors("batch_update")
    def batch_update(self, document_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        """Send requests as one atomic batchUpdate."""
        document_id = validate_document_id(document_id)
        logger.info(f"[batch_update] Sending {len(requests)} requests to {document_id}")
        return self.service.documents().batchUpdate(documentId=document_id, body={"requests": requests}).execute()

    def add_text(self, document_id: str, text: str, index: int = 1) -> None:
        """Insert text at `index` (1 = start of the body)."""
        if not isinstance(index, int) or isinstance(index, bool) or index < 1:
            raise ValidationError("index must be an integer >= 1")
        self.batch_update(document_id, [create_insert_text_request(index, text)])

    def replace_document_content(self, document_id: str, new_content: str) -> None:
        """Replace the whole body text with `new_content` in one batch."""
        end_index = body_end_index(self.get_document(document_id))
        if end_index is None:
            raise ValidationError(f"Document {document_id} has no editable content.")

        requests = []
        # The final newline of the body can never be deleted
        if end_index - 1 > 1:
            requests.append(create_delete_range_request(1, end_index - 1))
        if new_content:
            requests.append(create_insert_text_request(1, new_content))

        if not requests:
            logger.debug(f"[replace_document_content] Nothing to do for {document_id}")
            return
        self.batch_update(document_id, requests)

    def format_text(
        self,
        document_id: str,
        start_index: int,
        end_index: int,
        bold: bool | None = None,
        italic: bool | None = None,
        font_size: float | None = None,
        foreground_color: str | None = None,
    ) -> None:
        """
        Apply inline formatting to [start_index, end_index).

        Only the arguments that are not None are sent; an explicit False
        clears that style.

        Raises:
            ValidationError: On a bad range, a bad value or when nothing was supplied.
        """
        validate_index_range(start_index, end_index)

        fields = TextStyleField.NONE
        if bold is not None:
            fields |= TextStyleField.BOLD
        if italic is not None:
            fields |= TextStyleField.ITALIC
        if font_size is not None:
            if isinstance(font_size, bool) or not isinstance(font_size, (int, float)) or font_size <= 0:
                raise ValidationError("font_size must be a positive number of points")
            fields |= TextStyleField.FONT_SIZE

        color_hex = None
        if foreground_color is not None:
            color_hex = normalize_color_to_hex(foreground_color)
            if color_hex is None:
                raise ValidationError(f"Unrecognized color '{foreground_color}'. Use #RRGGBB or rgb(r, g, b).")
            fields |= TextStyleField.FOREGROUND_COLOR

        style = TextStyle(bold=bold, italic=italic, font_size_pt=font_size, color_hex=color_hex, fields=fields)
        request = create_text_style_request(start_index, end_index, style)
        if request is None:
            raise ValidationError("At least one of bold, italic, font_size or foreground_color is required")

        self.batch_update(document_id, [request])

    # -------------------------------------------------------------------------
    # Rich content
    # -------------------------------------------------------------------------

    def write_plan(self, document_id: str, plan: DocumentFormattingPlan) -> int:
        """
        Send a compiled plan to a document as a single batch.

        Returns:
            Number of requests sent (0 for an empty plan, which sends nothing).
        """
        requests = to_operations(plan)
        if not requests:
            logger.info(f"Nothing to write to {document_id}: plan is empty")
            return 0

        self.batch_update(document_id, requests)
        return len(requests)

    def create_document_from_plan(self, title: str, plan: DocumentFormattingPlan) -> CreatedDocument:
        """Create a document and write an already compiled plan into it."""
        created = self.create_document(title)
        count = self.write_plan(created.document_id, plan)
        logger.info(f"Wrote {count} requests to '{title}' (ID: {created.document_id})")
        return created

    def create_document_from_delta(self, title: str, delta_json: str | bytes | Mapping[str, Any]) -> CreatedDocument:
        """
        Create a document from a Quill Delta.

        The Delta is compiled before anything is sent, so malformed or empty
        content raises ContentError without creating a document.
        """
        plan = compile_delta(parse_delta_json(delta_json))
        return self.create_document_from_plan(title, plan)

    def create_document_from_html(self, title: str, html: str) -> CreatedDocument:
        """Create a document from HTML (best-effort; empty markup gives an empty document)."""
        return self.create_document_from_plan(title, compile_from_html(html))

    def create_document_from_rich_content(
        self,
        title: str,
        delta_json: str | None,
        html_fallback: str,
    ) -> CreatedDocument:
        """
        Create a document from editor output, preferring the Delta.

        Falls back to `html_fallback` when the Delta is absent, is not a Delta
        object or holds no text. Sink and authentication errors are never
        absorbed by the fallback.
        """
        plan = None
        if isinstance(delta_json, str) and delta_json.strip():
            try:
                plan = compile_delta(parse_delta_json(delta_json))
            except ContentError as e:
                logger.info(f"Delta content unusable for '{title}', falling back to HTML: {e}")

        if plan is None:
            plan = compile_from_html(html_fallback)

        return self.create_document_from_plan(title, plan)
