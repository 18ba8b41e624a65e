"""
Google Docs Reading Helpers

Pure functions over a document resource as returned by `documents().get()`.
They never call the API, so they are shared by the service and by tests.
"""

import logging
from dataclasses import dataclass
from typing import Any

from auth.config import document_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentInfo:
    """Document metadata."""

    document_id: str
    title: str
    revision_id: str
    url: str


def body_content(document: dict[str, Any]) -> list[dict[str, Any]]:
    """Structural elements of the document body, in order."""
    return document.get("body", {}).get("content", []) or []


def extract_plain_text(document: dict[str, Any]) -> str:
    """
    Concatenate every paragraph text run of the body in order.

    Tables, section breaks and other non-paragraph elements are skipped.
    """
    parts = []
    for element in body_content(document):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        for paragraph_element in paragraph.get("elements", []) or []:
            text_run = paragraph_element.get("textRun")
            if text_run is not None:
                parts.append(text_run.get("content", ""))
    return "".join(parts)


def body_end_index(document: dict[str, Any]) -> int | None:
    """End index of the last body element, or None for an empty body."""
    content = body_content(document)
    if not content:
        return None
    return content[-1].get("endIndex")


def document_info(document: dict[str, Any]) -> DocumentInfo:
    """Build DocumentInfo from a document resource."""
    document_id = document.get("documentId", "")
    return DocumentInfo(
        document_id=document_id,
        title=document.get("title", ""),
        revision_id=document.get("revisionId", ""),
        url=document_url(document_id),
    )
