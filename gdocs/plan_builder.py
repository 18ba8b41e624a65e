"""
Shared accumulator for the Delta and HTML extractors.

Both extractors reduce their input to the same two events: "append this text
with this inline style" and "end the current paragraph with this paragraph
style and bullet preset". The builder turns those events into the buffered
text and the three range collections of a DocumentFormattingPlan.
"""

import logging

from gdocs.models import (
    BulletPreset,
    DocumentFormattingPlan,
    ParagraphStyle,
    RangedAttribute,
    TextStyle,
)
from gdocs.position import DOCUMENT_START_INDEX, PositionTracker

logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


class FormattingPlanBuilder:
    """
    Buffers document text and records style ranges against a position tracker.

    Text must be appended without line terminators; paragraphs are closed
    with `end_paragraph()`, which appends the terminator itself.
    """

    def __init__(self, start_index: int = DOCUMENT_START_INDEX) -> None:
        self._tracker = PositionTracker(start_index)
        self._parts: list[str] = []
        self._ends_with_terminator = False
        self._paragraph_start = start_index
        self._text_style_runs: list[RangedAttribute[TextStyle]] = []
        self._paragraph_style_runs: list[RangedAttribute[ParagraphStyle]] = []
        self._list_runs: list[RangedAttribute[BulletPreset]] = []

    @property
    def cursor(self) -> int:
        return self._tracker.index

    @property
    def has_text(self) -> bool:
        return bool(self._parts)

    def add_text(self, text: str, style: TextStyle | None = None) -> None:
        """Append a run of text; empty runs are skipped and produce no range."""
        span = self._tracker.advance(text)
        if span is None:
            return

        self._parts.append(text)
        self._ends_with_terminator = False
        if style is not None and not style.is_empty:
            self._text_style_runs.append(RangedAttribute(span[0], span[1], style))
            logger.debug(f"Text style run [{span[0]}, {span[1]}) fields={style.fields}")

    def end_paragraph(self, style: ParagraphStyle | None = None, bullet: BulletPreset | None = None) -> None:
        """Append a terminator and record the paragraph range it closes."""
        start = self._paragraph_start
        self._tracker.advance(LINE_TERMINATOR)
        self._parts.append(LINE_TERMINATOR)
        self._ends_with_terminator = True
        end = self._tracker.index

        self._paragraph_style_runs.append(RangedAttribute(start, end, style or ParagraphStyle()))
        if bullet is not None:
            self._list_runs.append(RangedAttribute(start, end, bullet))
        logger.debug(f"Paragraph [{start}, {end}) style={style} bullet={bullet}")

        self._paragraph_start = end

    def build(self) -> DocumentFormattingPlan:
        """
        Freeze the accumulated content into a plan.

        Non-empty content that does not end with a terminator gets a synthetic
        one, closing a trailing paragraph with no attributes.
        """
        if self._parts and not self._ends_with_terminator:
            logger.debug("Appending synthetic trailing terminator")
            self.end_paragraph()

        return DocumentFormattingPlan(
            full_text="".join(self._parts),
            text_style_runs=tuple(self._text_style_runs),
            paragraph_style_runs=tuple(self._paragraph_style_runs),
            list_runs=tuple(self._list_runs),
        )
