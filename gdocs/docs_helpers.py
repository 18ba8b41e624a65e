"""
Google Docs Helper Functions

This module provides builders for the batchUpdate request dictionaries used
when writing documents. Update requests always carry an explicit fields mask
naming only the members that were set, so unrelated formatting already in
the document is left alone.
"""

import logging
from typing import Any

from gdocs.attribute_mappers import hex_to_rgb_color
from gdocs.models import (
    BulletPreset,
    ParagraphStyle,
    ParagraphStyleField,
    TextStyle,
    TextStyleField,
    fields_mask,
)

logger = logging.getLogger(__name__)


def _range(start_index: int, end_index: int) -> dict[str, int]:
    return {"startIndex": start_index, "endIndex": end_index}


def build_text_style(style: TextStyle) -> dict[str, Any]:
    """
    Build the textStyle object for an updateTextStyle request.

    Only members named in `style.fields` are emitted.
    """
    text_style: dict[str, Any] = {}

    if TextStyleField.BOLD in style.fields:
        text_style["bold"] = style.bold
    if TextStyleField.ITALIC in style.fields:
        text_style["italic"] = style.italic
    if TextStyleField.UNDERLINE in style.fields:
        text_style["underline"] = style.underline
    if TextStyleField.FONT_SIZE in style.fields:
        text_style["fontSize"] = {"magnitude": style.font_size_pt, "unit": "PT"}
    if TextStyleField.FOREGROUND_COLOR in style.fields:
        text_style["foregroundColor"] = {"color": {"rgbColor": hex_to_rgb_color(style.color_hex)}}

    return text_style


def build_paragraph_style(style: ParagraphStyle) -> dict[str, Any]:
    """Build the paragraphStyle object for an updateParagraphStyle request."""
    paragraph_style: dict[str, Any] = {}

    if ParagraphStyleField.NAMED_STYLE_TYPE in style.fields:
        paragraph_style["namedStyleType"] = style.named_style_type.value
    if ParagraphStyleField.ALIGNMENT in style.fields:
        paragraph_style["alignment"] = style.alignment.value

    return paragraph_style


def create_insert_text_request(index: int, text: str) -> dict[str, Any]:
    """
    Create an insertText request for Google Docs API.

    Args:
        index: Position to insert text
        text: Text to insert

    Returns:
        Dictionary representing the insertText request
    """
    return {
        "insertText": {
            "location": {"index": index},
            "text": text,
        }
    }


def create_delete_range_request(start_index: int, end_index: int) -> dict[str, Any]:
    """
    Create a deleteContentRange request for Google Docs API.

    Args:
        start_index: Start position of content to delete
        end_index: End position of content to delete

    Returns:
        Dictionary representing the deleteContentRange request
    """
    return {"deleteContentRange": {"range": _range(start_index, end_index)}}


def create_text_style_request(start_index: int, end_index: int, style: TextStyle) -> dict[str, Any] | None:
    """
    Create an updateTextStyle request for Google Docs API.

    Returns:
        Dictionary representing the updateTextStyle request, or None if the
        style sets nothing
    """
    if style.is_empty:
        return None

    return {
        "updateTextStyle": {
            "range": _range(start_index, end_index),
            "textStyle": build_text_style(style),
            "fields": fields_mask(style.fields),
        }
    }


def create_paragraph_style_request(start_index: int, end_index: int, style: ParagraphStyle) -> dict[str, Any] | None:
    """Create an updateParagraphStyle request, or None if the style sets nothing."""
    if style.is_empty:
        return None

    return {
        "updateParagraphStyle": {
            "range": _range(start_index, end_index),
            "paragraphStyle": build_paragraph_style(style),
            "fields": fields_mask(style.fields),
        }
    }


def create_bullet_list_request(start_index: int, end_index: int, preset: BulletPreset) -> dict[str, Any]:
    """
    Create a createParagraphBullets request for Google Docs API.

    Args:
        start_index: Start of text range to convert to list
        end_index: End of text range to convert to list
        preset: Bullet preset to apply

    Returns:
        Dictionary representing the createParagraphBullets request
    """
    return {
        "createParagraphBullets": {
            "range": _range(start_index, end_index),
            "bulletPreset": preset.value,
        }
    }
