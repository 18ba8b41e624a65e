"""
Quill Delta to Document Formatting Plan compiler

This module provides the `DeltaToDocsCompiler` class that walks the insert
operations of a Quill Delta and produces a `DocumentFormattingPlan`: the full
document text plus inline style, paragraph style and bullet ranges expressed
in Google Docs UTF-16 index space.

Each insert is split on line terminators, keeping the terminator as its own
segment. Text segments extend the current paragraph and record a text style
range when the insert carries inline attributes. A terminator closes the
paragraph with the block attributes (header, align, list) of the insert that
carries it; Quill puts block attributes on the "\\n" insert, but a block
attribute found on the paragraph's text inserts fills any field the
terminator leaves unset.

Example:
    >>> plan = compile_delta([{"insert": "Title", "attributes": {"header": 1}}, {"insert": "\\n"}])
    >>> plan.full_text
    'Title\\n'
    >>> plan.paragraph_style_runs[0].value.named_style_type
    <NamedStyleType.HEADING_1: 'HEADING_1'>

See Also:
    - `gdocs/batch_compiler.py` for turning the plan into batchUpdate requests
    - `gdocs/html_extractor.py` for the HTML fallback producing the same plan
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from core.errors import InvalidContentError, MalformedSourceError
from gdocs.attribute_mappers import (
    list_to_bullet_preset,
    paragraph_style_from_attributes,
    text_style_from_attributes,
)
from gdocs.models import BulletPreset, DocumentFormattingPlan, InsertOperation, ParagraphStyle, QuillDelta
from gdocs.plan_builder import LINE_TERMINATOR, FormattingPlanBuilder

logger = logging.getLogger(__name__)

_TERMINATOR_SPLIT = re.compile(f"({re.escape(LINE_TERMINATOR)})")


def parse_delta_json(source: str | bytes | Mapping[str, Any]) -> list[Any]:
    """
    Parse a Delta document and return its raw `ops` list.

    Args:
        source: JSON text, or an already-decoded mapping.

    Raises:
        MalformedSourceError: If the source is not an object with an `ops` list.
    """
    try:
        if isinstance(source, Mapping):
            delta = QuillDelta.model_validate(source)
        else:
            delta = QuillDelta.model_validate_json(source)
    except PydanticValidationError as e:
        raise MalformedSourceError("Delta content is not an object with an 'ops' list.", details=e.errors()) from e

    logger.debug(f"Parsed Delta with {len(delta.ops)} ops")
    return delta.ops


class DeltaToDocsCompiler:
    """
    Compiles Quill Delta insert operations into a DocumentFormattingPlan.

    The compiler keeps per-call state only; `compile()` resets it, so one
    instance can be reused across documents.

    Attributes:
        start_index: Index of the first inserted character (1 = document start).
    """

    def __init__(self, start_index: int = 1) -> None:
        self.start_index = start_index
        self._builder = FormattingPlanBuilder(start_index)
        # Block attributes seen on text inserts of the paragraph being built
        self._pending_paragraph_style: ParagraphStyle | None = None
        self._pending_bullet: BulletPreset | None = None

    def compile(self, ops: Iterable[Any]) -> DocumentFormattingPlan:
        """
        Compile insert operations into a plan.

        Args:
            ops: Raw Delta ops (mappings). Entries that are not inserts of a
                string, such as embeds, are skipped.

        Returns:
            The frozen plan, always ending with a line terminator.

        Raises:
            InvalidContentError: If no text was inserted at all.
        """
        self._builder = FormattingPlanBuilder(self.start_index)
        self._pending_paragraph_style = None
        self._pending_bullet = None

        for position, raw_op in enumerate(ops):
            op = self._coerce_op(position, raw_op)
            if op is not None:
                self._handle_insert(op)

        if not self._builder.has_text:
            raise InvalidContentError()

        plan = self._builder.build()
        logger.debug(
            f"Compiled Delta: {len(plan.full_text)} chars, {len(plan.text_style_runs)} text runs, "
            f"{len(plan.paragraph_style_runs)} paragraphs, {len(plan.list_runs)} list paragraphs"
        )
        return plan

    def _coerce_op(self, position: int, raw_op: Any) -> InsertOperation | None:
        """Validate one raw op; anything that is not a string insert yields None."""
        if not isinstance(raw_op, Mapping):
            logger.debug(f"Skipping op {position}: not an object")
            return None

        op = InsertOperation.model_validate(raw_op)
        if not isinstance(op.insert, str):
            logger.debug(f"Skipping op {position}: unsupported insert payload {type(op.insert).__name__}")
            return None
        return op

    def _handle_insert(self, op: InsertOperation) -> None:
        if not op.insert:
            return

        text_style = text_style_from_attributes(op.attributes)
        for segment in _TERMINATOR_SPLIT.split(op.insert):
            if segment == LINE_TERMINATOR:
                self._close_paragraph(op)
            elif segment:
                self._builder.add_text(segment, text_style)
                self._remember_block_attributes(op)

    def _remember_block_attributes(self, op: InsertOperation) -> None:
        style = paragraph_style_from_attributes(op.attributes)
        if not style.is_empty:
            self._pending_paragraph_style = style.merge(self._pending_paragraph_style)

        bullet = list_to_bullet_preset(op.attributes.list_type)
        if bullet is not None:
            self._pending_bullet = bullet

    def _close_paragraph(self, op: InsertOperation) -> None:
        style = paragraph_style_from_attributes(op.attributes).merge(self._pending_paragraph_style)
        bullet = list_to_bullet_preset(op.attributes.list_type) or self._pending_bullet

        self._builder.end_paragraph(style, bullet)
        self._pending_paragraph_style = None
        self._pending_bullet = None


def compile_delta(ops: Iterable[Any]) -> DocumentFormattingPlan:
    """Compile Delta ops with a fresh compiler. See `DeltaToDocsCompiler.compile`."""
    return DeltaToDocsCompiler().compile(ops)
