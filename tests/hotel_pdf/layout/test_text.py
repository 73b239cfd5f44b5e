"""
Tests for hotel_pdf.layout.text
"""

import pytest

from halo_toolkit.hotel_pdf.layout.text import (
    fit_font_size,
    split_highlights,
    text_width,
    truncate_text,
    wrap_text,
)


class TestSplitHighlights:
    """Tests for split_highlights."""

    def test_splits_on_semicolons_and_newlines_in_order(self):
        assert split_highlights("Pool; Free breakfast\n\n Spa ;") == ["Pool", "Free breakfast", "Spa"]

    @pytest.mark.parametrize("notes", [None, "", " ; \n ;"])
    def test_when_nothing_usable_then_empty(self, notes):
        assert split_highlights(notes) == []


class TestTruncateText:
    """Tests for truncate_text."""

    def test_text_at_limit_is_unchanged(self):
        text = "x" * 70
        assert truncate_text(text, 70) == text

    def test_text_over_limit_keeps_prefix_and_adds_ellipsis(self):
        text = "https://booking.test/" + "a" * 80

        result = truncate_text(text, 70)

        assert result == text[:70] + "..."
        assert len(result) == 73


class TestWrapText:
    """Tests for wrap_text."""

    def test_short_text_stays_on_one_line(self):
        assert wrap_text("Pool", "Helvetica", 10, 200) == ["Pool"]

    def test_long_text_wraps_within_width(self):
        # Arrange
        text = "Rooftop pool with panoramic views over the old town and the harbour"

        # Act
        lines = wrap_text(text, "Helvetica", 10, 120)

        # Assert
        assert len(lines) > 1
        assert " ".join(lines) == text
        assert all(text_width(line, "Helvetica", 10) <= 120 for line in lines)

    def test_empty_text_returns_one_line(self):
        assert wrap_text("", "Helvetica", 10, 100) == [""]


class TestFitFontSize:
    """Tests for fit_font_size."""

    def test_when_text_fits_then_size_unchanged(self):
        assert fit_font_size("short", "Helvetica", 11, 200) == 11

    def test_when_text_too_wide_then_size_shrinks_to_fit(self):
        text = "x" * 100

        size = fit_font_size(text, "Helvetica", 11, 200, min_size=1)

        assert size < 11
        assert text_width(text, "Helvetica", size) == pytest.approx(200)

    def test_size_never_below_minimum(self):
        assert fit_font_size("x" * 1000, "Helvetica", 11, 50, min_size=7) == 7
