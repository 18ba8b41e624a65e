"""
HTML fallback extractor.

When the Delta source is missing or unusable, the editor's HTML rendering is
parsed into a small markup tree and walked depth-first. Each element derives
an immutable inherited style from its parent; siblings never see each other's
overrides. Text nodes append styled text, block elements end a paragraph when
they close, and the result is the same DocumentFormattingPlan the Delta
compiler produces.

Parsing is best-effort: the stdlib HTMLParser never rejects markup, stray end
tags are ignored and unclosed elements are closed implicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from html.parser import HTMLParser

from gdocs.attribute_mappers import (
    align_to_alignment,
    list_to_bullet_preset,
    normalize_color_to_hex,
    paragraph_style_from_values,
    size_to_points,
)
from gdocs.models import (
    Alignment,
    BulletPreset,
    DocumentFormattingPlan,
    ParagraphStyle,
    ParagraphStyleField,
    TextStyle,
    TextStyleField,
)
from gdocs.plan_builder import LINE_TERMINATOR, FormattingPlanBuilder

logger = logging.getLogger(__name__)

TEXT_NODE = "#text"
DOCUMENT_NODE = "#document"

HEADING_LEVELS: dict[str, int] = {f"h{level}": level for level in range(1, 7)}
BLOCK_TAGS = frozenset({"p", "div", "li", *HEADING_LEVELS})
DROPPED_TAGS = frozenset({"script", "style", "head", "title"})
# Elements that never have content or an end tag
VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}
)

LIST_CONTAINER_PRESETS: dict[str, BulletPreset] = {
    "ul": BulletPreset.BULLET_DISC_CIRCLE_SQUARE,
    "ol": BulletPreset.NUMBERED_DECIMAL_ALPHA_ROMAN,
}

QUILL_ALIGN_CLASS_PREFIX = "ql-align-"
QUILL_SIZE_CLASS_PREFIX = "ql-size-"


@dataclass
class MarkupNode:
    """Element or text node of a parsed HTML fragment."""

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[MarkupNode] = field(default_factory=list)
    text: str = ""

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_NODE


class _MarkupTreeBuilder(HTMLParser):
    """Build a MarkupNode tree from HTML using stdlib."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.root = MarkupNode(DOCUMENT_NODE)
        self._stack: list[MarkupNode] = [self.root]

    def handle_starttag(self, tag, attrs):
        node = MarkupNode(tag.lower(), {name.lower(): value or "" for name, value in attrs})
        self._stack[-1].children.append(node)
        if node.tag not in VOID_TAGS:
            self._stack.append(node)

    def handle_startendtag(self, tag, attrs):
        node = MarkupNode(tag.lower(), {name.lower(): value or "" for name, value in attrs})
        self._stack[-1].children.append(node)

    def handle_endtag(self, tag):
        tag = tag.lower()
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                del self._stack[depth:]
                return
        logger.debug(f"Ignoring stray end tag </{tag}>")

    def handle_data(self, data):
        self._stack[-1].children.append(MarkupNode(TEXT_NODE, text=data))


def parse_html(html: str) -> MarkupNode:
    """Parse an HTML fragment or document into a MarkupNode tree."""
    builder = _MarkupTreeBuilder()
    builder.feed(html)
    builder.close()
    return builder.root


@dataclass(frozen=True)
class _InheritedStyle:
    """Style state passed down the tree; every element gets its own copy."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    font_size_pt: float | None = None
    color_hex: str | None = None
    paragraph: ParagraphStyle = field(default_factory=ParagraphStyle)
    list_preset: BulletPreset | None = None
    bullet: BulletPreset | None = None

    def text_style(self) -> TextStyle:
        fields = TextStyleField.NONE
        if self.bold:
            fields |= TextStyleField.BOLD
        if self.italic:
            fields |= TextStyleField.ITALIC
        if self.underline:
            fields |= TextStyleField.UNDERLINE
        if self.font_size_pt is not None:
            fields |= TextStyleField.FONT_SIZE
        if self.color_hex is not None:
            fields |= TextStyleField.FOREGROUND_COLOR
        return TextStyle(
            bold=self.bold or None,
            italic=self.italic or None,
            underline=self.underline or None,
            font_size_pt=self.font_size_pt,
            color_hex=self.color_hex,
            fields=fields,
        )


def _style_declarations(style_attr: str) -> dict[str, str]:
    """Split an inline `style` attribute into lowercase property -> value."""
    declarations = {}
    for declaration in style_attr.split(";"):
        name, sep, value = declaration.partition(":")
        if sep:
            declarations[name.strip().lower()] = value.strip()
    return declarations


def _class_keyword(classes: list[str], prefix: str) -> str | None:
    for class_name in classes:
        if class_name.startswith(prefix):
            return class_name[len(prefix) :]
    return None


def _element_alignment(declarations: dict[str, str], classes: list[str]) -> Alignment | None:
    alignment = align_to_alignment(_class_keyword(classes, QUILL_ALIGN_CLASS_PREFIX))
    if alignment is None:
        alignment = align_to_alignment(declarations.get("text-align"))
    return alignment


def _derive_style(node: MarkupNode, inherited: _InheritedStyle) -> _InheritedStyle:
    """Compute the style an element hands to its children."""
    tag = node.tag
    changes: dict = {}

    if tag in ("b", "strong"):
        changes["bold"] = True
    elif tag in ("i", "em"):
        changes["italic"] = True
    elif tag == "u":
        changes["underline"] = True
    elif tag in LIST_CONTAINER_PRESETS:
        changes["list_preset"] = LIST_CONTAINER_PRESETS[tag]
    elif tag == "li":
        changes["bullet"] = list_to_bullet_preset(node.attrs.get("data-list")) or inherited.list_preset

    declarations = _style_declarations(node.attrs.get("style", ""))
    classes = node.attrs.get("class", "").split()

    color_hex = normalize_color_to_hex(declarations.get("color"))
    if color_hex is not None:
        changes["color_hex"] = color_hex

    size_keyword = _class_keyword(classes, QUILL_SIZE_CLASS_PREFIX)
    font_size_pt = size_to_points(size_keyword) if size_keyword else size_to_points(declarations.get("font-size"))
    if font_size_pt is not None:
        changes["font_size_pt"] = font_size_pt

    if tag in BLOCK_TAGS:
        paragraph = inherited.paragraph
        if tag in HEADING_LEVELS:
            # A heading replaces the inherited paragraph style outright
            paragraph = paragraph_style_from_values(header=HEADING_LEVELS[tag])
        alignment = _element_alignment(declarations, classes)
        if alignment is not None:
            paragraph = ParagraphStyle(alignment=alignment, fields=ParagraphStyleField.ALIGNMENT).merge(paragraph)
        changes["paragraph"] = paragraph

    return replace(inherited, **changes) if changes else inherited


def _is_formatting_text(text: str) -> bool:
    """Whitespace-only text holding a line break is source formatting, not content."""
    return not text.strip() and "\n" in text


def _last_content_index(children: list[MarkupNode]) -> int:
    """Index of the last child that produces output, or -1."""
    for index in range(len(children) - 1, -1, -1):
        child = children[index]
        if child.is_text and _is_formatting_text(child.text):
            continue
        if child.tag in DROPPED_TAGS:
            continue
        return index
    return -1


class HtmlToDocsExtractor:
    """
    Walks a MarkupNode tree into a DocumentFormattingPlan.

    Like the Delta compiler, all state is reset by `extract()`.
    """

    def __init__(self, start_index: int = 1) -> None:
        self.start_index = start_index
        self._builder = FormattingPlanBuilder(start_index)
        self._last_emit_closed_block = False

    def extract(self, root: MarkupNode) -> DocumentFormattingPlan:
        self._builder = FormattingPlanBuilder(self.start_index)
        self._last_emit_closed_block = False

        self._walk(root, _InheritedStyle())

        plan = self._builder.build()
        logger.debug(
            f"Extracted HTML: {len(plan.full_text)} chars, {len(plan.text_style_runs)} text runs, "
            f"{len(plan.paragraph_style_runs)} paragraphs"
        )
        return plan

    def _walk(self, node: MarkupNode, inherited: _InheritedStyle, at_block_end: bool = False) -> None:
        last_content = _last_content_index(node.children)
        for index, child in enumerate(node.children):
            trailing = at_block_end and index == last_content
            if child.is_text:
                self._add_text(child.text, inherited)
            elif child.tag in DROPPED_TAGS:
                continue
            elif child.tag == "br":
                # A trailing <br> only keeps an empty block open (Quill's <p><br></p>)
                if trailing:
                    continue
                self._end_paragraph(inherited.paragraph, inherited.bullet)
            else:
                self._walk_element(child, inherited, trailing)

    def _walk_element(self, node: MarkupNode, inherited: _InheritedStyle, trailing: bool = False) -> None:
        style = _derive_style(node, inherited)
        start_cursor = self._builder.cursor
        self._walk(node, style, at_block_end=node.tag in BLOCK_TAGS or trailing)

        if node.tag not in BLOCK_TAGS:
            return
        # A block whose content already ended with a nested block's terminator adds nothing
        if self._builder.cursor > start_cursor and self._last_emit_closed_block:
            return
        self._end_paragraph(style.paragraph, style.bullet)
        self._last_emit_closed_block = True

    def _add_text(self, text: str, inherited: _InheritedStyle) -> None:
        if _is_formatting_text(text):
            return
        text = text.replace("\r\n", " ").replace("\r", " ").replace(LINE_TERMINATOR, " ")
        if not text:
            return
        self._builder.add_text(text, inherited.text_style())
        self._last_emit_closed_block = False

    def _end_paragraph(self, paragraph: ParagraphStyle, bullet: BulletPreset | None) -> None:
        self._builder.end_paragraph(paragraph, bullet)
        self._last_emit_closed_block = False


def compile_from_html(source: MarkupNode | str) -> DocumentFormattingPlan:
    """
    Compile HTML (a string or an already parsed tree) into a plan.

    Never raises on malformed markup; markup without text yields an empty plan.
    """
    root = parse_html(source) if isinstance(source, str) else source
    return HtmlToDocsExtractor().extract(root)
