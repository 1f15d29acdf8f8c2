"""Tests for text measurement and greedy word wrapping."""
from __future__ import annotations

import pytest

from pretty_mindmap.styles import DEFAULT_FONT, estimate_text_width
from pretty_mindmap.text import TextMeasurer, measure_text, wrap_text
from pretty_mindmap.types import FontSpec


def ten_px_per_char(text: str, font: FontSpec) -> float:
    return len(text) * 10


class TestEstimateTextWidth:
    def test_empty_text_has_zero_width(self):
        assert estimate_text_width("", DEFAULT_FONT) == 0

    def test_scales_with_font_size(self):
        small = FontSpec("Inter", 10, 14)
        large = FontSpec("Inter", 20, 28)
        assert estimate_text_width("Hello", large) == pytest.approx(
            2 * estimate_text_width("Hello", small)
        )

    def test_wide_glyphs_measure_wider_than_narrow_ones(self):
        assert estimate_text_width("WWW", DEFAULT_FONT) > estimate_text_width("iii", DEFAULT_FONT)

    def test_grows_with_length(self):
        assert estimate_text_width("a b c", DEFAULT_FONT) > estimate_text_width("a b", DEFAULT_FONT)


class TestMeasure:
    def test_uses_the_metrics_provider(self):
        measurer = TextMeasurer(DEFAULT_FONT, ten_px_per_char)
        assert measurer.measure("abcd") == 40

    def test_results_are_cached(self):
        calls: list[str] = []

        def counting(text: str, font: FontSpec) -> float:
            calls.append(text)
            return len(text)

        measurer = TextMeasurer(DEFAULT_FONT, counting)
        measurer.measure("Root")
        measurer.measure("Root")
        measurer.measure("Leaf")
        assert calls == ["Root", "Leaf"]

    def test_measure_text_helper_matches_default_estimate(self):
        assert measure_text("Frontend") == estimate_text_width("Frontend", DEFAULT_FONT)

    def test_max_line_width(self):
        measurer = TextMeasurer(DEFAULT_FONT, ten_px_per_char)
        assert measurer.max_line_width(("ab", "abcd", "a")) == 40
        assert measurer.max_line_width(()) == 0


class TestWrap:
    def test_wraps_between_two_and_three_words(self):
        measurer = TextMeasurer()
        max_width = (measurer.measure("a b") + measurer.measure("a b c")) / 2
        assert measurer.wrap("a b c", max_width) == ("a b", "c")

    def test_short_text_stays_on_one_line(self):
        assert wrap_text("Programming Languages", 260) == ("Programming Languages",)

    def test_empty_text_produces_one_empty_line(self):
        assert wrap_text("", 100) == ("",)
        assert wrap_text("   ", 100) == ("",)

    def test_overlong_word_is_never_split(self):
        lines = wrap_text("supercalifragilistic short", 10, metrics=ten_px_per_char)
        assert lines == ("supercalifragilistic", "short")

    def test_line_exactly_at_max_width_fits(self):
        assert wrap_text("aa bb cc", 50, metrics=ten_px_per_char) == ("aa bb", "cc")

    def test_whitespace_runs_collapse(self):
        assert wrap_text("a   b\tc", 1000, metrics=ten_px_per_char) == ("a b c",)

    def test_every_word_on_its_own_line_when_width_is_tiny(self):
        assert wrap_text("one two three", 1, metrics=ten_px_per_char) == ("one", "two", "three")

    def test_is_deterministic(self):
        text = "Tailwind CSS utility classes for rapid styling of components"
        assert wrap_text(text, 120) == wrap_text(text, 120)

    def test_respects_max_width_for_multi_word_lines(self):
        text = "the quick brown fox jumps over the lazy dog again and again"
        measurer = TextMeasurer()
        for line in measurer.wrap(text, 150):
            if " " in line:
                assert measurer.measure(line) <= 150
