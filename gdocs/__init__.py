"""
Google Docs rich content package

Compiles Quill Delta (or HTML) editor output into Google Docs batchUpdate
requests and writes them through `DocsService`.
"""

from gdocs.batch_compiler import to_operations
from gdocs.delta_compiler import DeltaToDocsCompiler, compile_delta, parse_delta_json
from gdocs.html_extractor import HtmlToDocsExtractor, MarkupNode, compile_from_html, parse_html
from gdocs.models import (
    Alignment,
    BulletPreset,
    DocumentFormattingPlan,
    NamedStyleType,
    ParagraphStyle,
    RangedAttribute,
    TextStyle,
)
from gdocs.reading import DocumentInfo
from gdocs.writing import CreatedDocument, DocsService

__all__ = [
    "compile_delta",
    "parse_delta_json",
    "DeltaToDocsCompiler",
    "compile_from_html",
    "parse_html",
    "HtmlToDocsExtractor",
    "MarkupNode",
    "to_operations",
    "DocumentFormattingPlan",
    "RangedAttribute",
    "TextStyle",
    "ParagraphStyle",
    "NamedStyleType",
    "Alignment",
    "BulletPreset",
    "DocsService",
    "CreatedDocument",
    "DocumentInfo",
]
