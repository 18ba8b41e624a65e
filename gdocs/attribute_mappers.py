"""
Attribute mappers: Quill attribute values -> Google Docs formatting vocabulary.

Every mapper is total. A value it does not recognize maps to None ("no
mapping") and the caller simply leaves that field out of the update; nothing
here raises and nothing here logs above DEBUG, since odd values are routine
in editor output.
"""

import logging
import math
import re
from typing import Any

from gdocs.models import (
    Alignment,
    BulletPreset,
    DeltaAttributes,
    NamedStyleType,
    ParagraphStyle,
    ParagraphStyleField,
    TextStyle,
    TextStyleField,
)

logger = logging.getLogger(__name__)

# Quill alignment keywords (the editor has no explicit "left"; accept it anyway)
ALIGNMENT_MAP: dict[str, Alignment] = {
    "left": Alignment.START,
    "center": Alignment.CENTER,
    "right": Alignment.END,
    "justify": Alignment.JUSTIFIED,
}

LIST_PRESET_MAP: dict[str, BulletPreset] = {
    "bullet": BulletPreset.BULLET_DISC_CIRCLE_SQUARE,
    "ordered": BulletPreset.NUMBERED_DECIMAL_ALPHA_ROMAN,
}

# Quill size keywords, in points ("normal" is the absence of a size)
SIZE_KEYWORD_PT: dict[str, float] = {
    "small": 10.0,
    "large": 16.0,
    "huge": 22.0,
}

PX_TO_PT = 0.75
MAX_HEADING_LEVEL = 6

_PX_SIZE_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)px$")
_HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")
_RGB_COLOR_PATTERN = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)


def _as_number(value: Any) -> float | None:
    """Numeric value of an int, float or numeric string; bools are not numbers here."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        # Integers beyond the float range have no mapping
        return None
    return number if math.isfinite(number) else None


def header_to_named_style(header: Any) -> NamedStyleType | None:
    """Map a header level (1-6, numeric or numeric string) to HEADING_n."""
    number = _as_number(header)
    if number is None or not number.is_integer():
        return None

    level = int(number)
    if 1 <= level <= MAX_HEADING_LEVEL:
        return NamedStyleType(f"HEADING_{level}")
    return None


def align_to_alignment(align: Any) -> Alignment | None:
    """Map a Quill alignment keyword to a Docs alignment."""
    if not isinstance(align, str):
        return None
    return ALIGNMENT_MAP.get(align.strip().lower())


def list_to_bullet_preset(list_type: Any) -> BulletPreset | None:
    """Map a Quill list keyword (bullet / ordered) to a bullet preset."""
    if not isinstance(list_type, str):
        return None
    return LIST_PRESET_MAP.get(list_type.strip().lower())


def size_to_points(size: Any) -> float | None:
    """
    Map a Quill size to points.

    Numbers (and numeric strings) are already points, `small|large|huge` are
    fixed sizes and `<n>px` converts at 0.75pt per pixel. Non-positive sizes
    have no mapping since the Docs API rejects them.
    """
    if size is None or isinstance(size, bool):
        return None

    number = _as_number(size)
    if number is not None:
        return number if number > 0 else None

    if not isinstance(size, str):
        return None

    normalized = size.strip().lower()
    if normalized in SIZE_KEYWORD_PT:
        return SIZE_KEYWORD_PT[normalized]

    match = _PX_SIZE_PATTERN.match(normalized)
    if match:
        points = float(match.group(1)) * PX_TO_PT
        return points if 0 < points < math.inf else None

    logger.debug(f"No point size for {size!r}")
    return None


def normalize_color_to_hex(color: Any) -> str | None:
    """Normalize `#rrggbb` or `rgb(r, g, b)` to uppercase `#RRGGBB`."""
    if not isinstance(color, str):
        return None

    value = color.strip()
    if _HEX_COLOR_PATTERN.match(value):
        return value.upper()

    match = _RGB_COLOR_PATTERN.match(value)
    if match:
        red, green, blue = (max(0, min(255, int(channel))) for channel in match.groups())
        return f"#{red:02X}{green:02X}{blue:02X}"

    logger.debug(f"No color for {color!r}")
    return None


def hex_to_rgb_color(hex_color: str) -> dict[str, float]:
    """
    Convert a normalized `#RRGGBB` to the Docs rgbColor triple.

    Channels are exact divisions by 255, not rounded.
    """
    digits = hex_color.lstrip("#")
    return {
        "red": int(digits[0:2], 16) / 255,
        "green": int(digits[2:4], 16) / 255,
        "blue": int(digits[4:6], 16) / 255,
    }


def text_style_from_attributes(attributes: DeltaAttributes) -> TextStyle:
    """Build the inline style of a run, accumulating its fields mask as it goes."""
    fields = TextStyleField.NONE
    bold = italic = underline = None

    # Quill only emits true for these; a falsy value means the style is absent
    if attributes.bold:
        bold = True
        fields |= TextStyleField.BOLD
    if attributes.italic:
        italic = True
        fields |= TextStyleField.ITALIC
    if attributes.underline:
        underline = True
        fields |= TextStyleField.UNDERLINE

    font_size_pt = size_to_points(attributes.size)
    if font_size_pt is not None:
        fields |= TextStyleField.FONT_SIZE

    color_hex = normalize_color_to_hex(attributes.color)
    if color_hex is not None:
        fields |= TextStyleField.FOREGROUND_COLOR

    return TextStyle(
        bold=bold,
        italic=italic,
        underline=underline,
        font_size_pt=font_size_pt,
        color_hex=color_hex,
        fields=fields,
    )


def paragraph_style_from_values(header: Any = None, align: Any = None) -> ParagraphStyle:
    """Build a paragraph style from raw header / align values."""
    fields = ParagraphStyleField.NONE

    named_style_type = header_to_named_style(header)
    if named_style_type is not None:
        fields |= ParagraphStyleField.NAMED_STYLE_TYPE

    alignment = align_to_alignment(align)
    if alignment is not None:
        fields |= ParagraphStyleField.ALIGNMENT

    return ParagraphStyle(named_style_type=named_style_type, alignment=alignment, fields=fields)


def paragraph_style_from_attributes(attributes: DeltaAttributes) -> ParagraphStyle:
    """Build the paragraph style a Delta op carries (header and align only)."""
    return paragraph_style_from_values(attributes.header, attributes.align)
