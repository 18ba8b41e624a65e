"""Unit tests for UTF-16 position tracking."""

import pytest

from gdocs.position import DOCUMENT_START_INDEX, PositionTracker, utf16_length


class TestUtf16Length:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("", 0),
            ("abc", 3),
            ("\n", 1),
            ("é", 1),
            ("中文", 2),
            ("😀", 2),
            ("a😀b", 4),
            ("👍🏽", 4),
        ],
    )
    def test_counts_code_units(self, text, expected):
        assert utf16_length(text) == expected


class TestPositionTracker:
    def test_starts_at_document_start(self):
        assert PositionTracker().index == DOCUMENT_START_INDEX == 1

    def test_advance_returns_half_open_span(self):
        tracker = PositionTracker()
        assert tracker.advance("Hello ") == (1, 7)
        assert tracker.advance("World") == (7, 12)
        assert tracker.index == 12

    def test_astral_characters_take_two_positions(self):
        tracker = PositionTracker()
        assert tracker.advance("😀") == (1, 3)
        assert tracker.advance("x") == (3, 4)

    def test_empty_chunk_is_skipped(self):
        tracker = PositionTracker(5)
        assert tracker.advance("") is None
        assert tracker.index == 5

    def test_cursor_is_monotonic(self):
        tracker = PositionTracker()
        seen = [tracker.index]
        for chunk in ["a", "", "bc", "\n", "😀"]:
            tracker.advance(chunk)
            seen.append(tracker.index)
        assert seen == sorted(seen)
