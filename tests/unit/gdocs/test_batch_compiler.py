"""Unit tests for the batch operation compiler and request builders."""

from gdocs.batch_compiler import to_operations
from gdocs.docs_helpers import (
    build_text_style,
    create_bullet_list_request,
    create_delete_range_request,
    create_paragraph_style_request,
    create_text_style_request,
)
from gdocs.models import (
    Alignment,
    BulletPreset,
    DocumentFormattingPlan,
    NamedStyleType,
    ParagraphStyle,
    ParagraphStyleField,
    RangedAttribute,
    TextStyle,
    TextStyleField,
    fields_mask,
)

ALL_TEXT_FIELDS = (
    TextStyleField.BOLD
    | TextStyleField.ITALIC
    | TextStyleField.UNDERLINE
    | TextStyleField.FONT_SIZE
    | TextStyleField.FOREGROUND_COLOR
)

HEADING = ParagraphStyle(named_style_type=NamedStyleType.HEADING_1, fields=ParagraphStyleField.NAMED_STYLE_TYPE)
BOLD = TextStyle(bold=True, fields=TextStyleField.BOLD)


class TestFieldsMask:
    def test_text_fields_in_canonical_order(self):
        assert fields_mask(ALL_TEXT_FIELDS) == "bold,italic,underline,fontSize,foregroundColor"

    def test_mask_order_does_not_depend_on_accumulation_order(self):
        fields = TextStyleField.FOREGROUND_COLOR
        fields |= TextStyleField.BOLD
        assert fields_mask(fields) == "bold,foregroundColor"

    def test_paragraph_fields(self):
        assert fields_mask(ParagraphStyleField.ALIGNMENT) == "alignment"
        assert (
            fields_mask(ParagraphStyleField.NAMED_STYLE_TYPE | ParagraphStyleField.ALIGNMENT)
            == "namedStyleType,alignment"
        )

    def test_empty_mask(self):
        assert fields_mask(TextStyleField.NONE) == ""


class TestRequestBuilders:
    def test_text_style_only_names_set_fields(self):
        style = TextStyle(italic=True, font_size_pt=13.5, fields=TextStyleField.ITALIC | TextStyleField.FONT_SIZE)
        request = create_text_style_request(3, 9, style)

        assert request == {
            "updateTextStyle": {
                "range": {"startIndex": 3, "endIndex": 9},
                "textStyle": {"italic": True, "fontSize": {"magnitude": 13.5, "unit": "PT"}},
                "fields": "italic,fontSize",
            }
        }

    def test_explicit_false_is_sent(self):
        style = TextStyle(bold=False, fields=TextStyleField.BOLD)
        assert build_text_style(style) == {"bold": False}

    def test_color_wire_format(self):
        style = TextStyle(color_hex="#0080FF", fields=TextStyleField.FOREGROUND_COLOR)
        assert build_text_style(style) == {
            "foregroundColor": {"color": {"rgbColor": {"red": 0.0, "green": 128 / 255, "blue": 1.0}}}
        }

    def test_empty_styles_build_no_request(self):
        assert create_text_style_request(1, 2, TextStyle()) is None
        assert create_paragraph_style_request(1, 2, ParagraphStyle()) is None

    def test_paragraph_alignment_only(self):
        style = ParagraphStyle(alignment=Alignment.JUSTIFIED, fields=ParagraphStyleField.ALIGNMENT)
        assert create_paragraph_style_request(1, 5, style) == {
            "updateParagraphStyle": {
                "range": {"startIndex": 1, "endIndex": 5},
                "paragraphStyle": {"alignment": "JUSTIFIED"},
                "fields": "alignment",
            }
        }

    def test_bullets_and_delete(self):
        assert create_bullet_list_request(2, 8, BulletPreset.NUMBERED_DECIMAL_ALPHA_ROMAN) == {
            "createParagraphBullets": {
                "range": {"startIndex": 2, "endIndex": 8},
                "bulletPreset": "NUMBERED_DECIMAL_ALPHA_ROMAN",
            }
        }
        assert create_delete_range_request(1, 4) == {"deleteContentRange": {"range": {"startIndex": 1, "endIndex": 4}}}


class TestToOperations:
    def test_empty_plan_compiles_to_nothing(self):
        assert to_operations(DocumentFormattingPlan()) == []

    def test_category_order(self):
        plan = DocumentFormattingPlan(
            full_text="Title\nitem\n",
            text_style_runs=(RangedAttribute(1, 6, BOLD), RangedAttribute(7, 11, BOLD)),
            paragraph_style_runs=(RangedAttribute(1, 7, HEADING), RangedAttribute(7, 12, ParagraphStyle())),
            list_runs=(RangedAttribute(7, 12, BulletPreset.BULLET_DISC_CIRCLE_SQUARE),),
        )
        requests = to_operations(plan)

        assert [next(iter(r)) for r in requests] == [
            "insertText",
            "updateParagraphStyle",
            "createParagraphBullets",
            "updateTextStyle",
            "updateTextStyle",
        ]
        assert requests[0] == {"insertText": {"location": {"index": 1}, "text": "Title\nitem\n"}}

    def test_runs_without_mapped_attributes_are_dropped(self):
        plan = DocumentFormattingPlan(
            full_text="ab\n",
            text_style_runs=(RangedAttribute(1, 2, TextStyle()),),
            paragraph_style_runs=(RangedAttribute(1, 4, ParagraphStyle()),),
        )
        assert len(to_operations(plan)) == 1

    def test_one_request_per_run_without_merging(self):
        plan = DocumentFormattingPlan(
            full_text="abcd\n",
            text_style_runs=(RangedAttribute(1, 3, BOLD), RangedAttribute(3, 5, BOLD)),
        )
        ranges = [r["updateTextStyle"]["range"] for r in to_operations(plan)[1:]]
        assert ranges == [{"startIndex": 1, "endIndex": 3}, {"startIndex": 3, "endIndex": 5}]
