"""
Typed records for the rich content compiler.

The Quill Delta input arrives as untrusted JSON, so its shape is validated
with pydantic models that tolerate unknown keys and odd values (the mappers
decide what is recognizable). Everything downstream of the extractors is an
immutable dataclass expressed in Google Docs vocabulary.

Example:
    >>> delta = QuillDelta.model_validate({"ops": [{"insert": "Hi\\n"}]})
    >>> InsertOperation.model_validate(delta.ops[0]).insert
    'Hi\\n'
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

T = TypeVar("T")


# =============================================================================
# Delta input (validated at the JSON boundary)
# =============================================================================


class DeltaAttributes(BaseModel):
    """Attributes carried by a Delta insert. Values stay raw until mapped."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    bold: Any = None
    italic: Any = None
    underline: Any = None
    color: Any = None
    size: Any = None
    header: Any = None
    align: Any = None
    list_type: Any = Field(None, alias="list")


class InsertOperation(BaseModel):
    """One entry of the Delta `ops` array."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    insert: Any = None
    attributes: DeltaAttributes = Field(default_factory=DeltaAttributes)

    @field_validator("attributes", mode="before")
    @classmethod
    def _attributes_must_be_mapping(cls, value: Any) -> Any:
        # Quill omits attributes on plain runs; anything that isn't a mapping carries nothing
        if not isinstance(value, Mapping):
            return {}
        return value


class QuillDelta(BaseModel):
    """A Delta document: the container object holding the `ops` list."""

    model_config = ConfigDict(extra="ignore")

    ops: list[Any]


# =============================================================================
# Google Docs vocabulary
# =============================================================================


class NamedStyleType(str, Enum):
    NORMAL_TEXT = "NORMAL_TEXT"
    HEADING_1 = "HEADING_1"
    HEADING_2 = "HEADING_2"
    HEADING_3 = "HEADING_3"
    HEADING_4 = "HEADING_4"
    HEADING_5 = "HEADING_5"
    HEADING_6 = "HEADING_6"


class Alignment(str, Enum):
    START = "START"
    CENTER = "CENTER"
    END = "END"
    JUSTIFIED = "JUSTIFIED"


class BulletPreset(str, Enum):
    BULLET_DISC_CIRCLE_SQUARE = "BULLET_DISC_CIRCLE_SQUARE"
    NUMBERED_DECIMAL_ALPHA_ROMAN = "NUMBERED_DECIMAL_ALPHA_ROMAN"


class TextStyleField(Flag):
    """Fields mask for updateTextStyle, accumulated while the style is mapped."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    FONT_SIZE = auto()
    FOREGROUND_COLOR = auto()


class ParagraphStyleField(Flag):
    """Fields mask for updateParagraphStyle."""

    NONE = 0
    NAMED_STYLE_TYPE = auto()
    ALIGNMENT = auto()


_TEXT_FIELD_NAMES: dict[TextStyleField, str] = {
    TextStyleField.BOLD: "bold",
    TextStyleField.ITALIC: "italic",
    TextStyleField.UNDERLINE: "underline",
    TextStyleField.FONT_SIZE: "fontSize",
    TextStyleField.FOREGROUND_COLOR: "foregroundColor",
}

_PARAGRAPH_FIELD_NAMES: dict[ParagraphStyleField, str] = {
    ParagraphStyleField.NAMED_STYLE_TYPE: "namedStyleType",
    ParagraphStyleField.ALIGNMENT: "alignment",
}


def fields_mask(fields: TextStyleField | ParagraphStyleField) -> str:
    """Render a fields flag as the comma-joined mask the Docs API expects."""
    names = _TEXT_FIELD_NAMES if isinstance(fields, TextStyleField) else _PARAGRAPH_FIELD_NAMES
    return ",".join(name for flag, name in names.items() if flag in fields)


# =============================================================================
# Compiled styles and ranges
# =============================================================================


@dataclass(frozen=True)
class TextStyle:
    """Inline style of a run. `fields` names exactly the members that were set."""

    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    font_size_pt: float | None = None
    color_hex: str | None = None
    fields: TextStyleField = TextStyleField.NONE

    @property
    def is_empty(self) -> bool:
        return not self.fields


@dataclass(frozen=True)
class ParagraphStyle:
    """Paragraph-level style: a named style and an alignment, each optional."""

    named_style_type: NamedStyleType | None = None
    alignment: Alignment | None = None
    fields: ParagraphStyleField = ParagraphStyleField.NONE

    @property
    def is_empty(self) -> bool:
        return not self.fields

    def merge(self, fallback: ParagraphStyle | None) -> ParagraphStyle:
        """Return this style with any unset member taken from `fallback`."""
        if fallback is None or fallback.is_empty:
            return self

        named_style_type = self.named_style_type
        alignment = self.alignment
        fields = self.fields
        missing = fallback.fields & ~self.fields
        if ParagraphStyleField.NAMED_STYLE_TYPE in missing:
            named_style_type = fallback.named_style_type
        if ParagraphStyleField.ALIGNMENT in missing:
            alignment = fallback.alignment
        return ParagraphStyle(named_style_type=named_style_type, alignment=alignment, fields=fields | missing)


@dataclass(frozen=True)
class RangedAttribute(Generic[T]):
    """A value applied to the half-open range [start, end) of the document."""

    start: int
    end: int
    value: T

    def __post_init__(self) -> None:
        if self.start < 1 or self.end <= self.start:
            raise ValueError(f"Invalid range [{self.start}, {self.end})")


@dataclass(frozen=True)
class DocumentFormattingPlan:
    """
    Everything needed to write a document in one batch.

    Ranges are 1-based UTF-16 offsets into `full_text` as inserted at index 1.
    """

    full_text: str = ""
    text_style_runs: tuple[RangedAttribute[TextStyle], ...] = field(default_factory=tuple)
    paragraph_style_runs: tuple[RangedAttribute[ParagraphStyle], ...] = field(default_factory=tuple)
    list_runs: tuple[RangedAttribute[BulletPreset], ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.full_text
