from __future__ import annotations

from typing import Callable

from .styles import DEFAULT_FONT, estimate_text_width
from .types import FontSpec

# ============================================================================
# Text measurer — label widths and greedy word wrapping.
#
# Measurement goes through a pluggable metrics callable so layout can run
# without a real rendering surface. The same font must be used when the
# drawing layer renders the labels, otherwise boxes clip their text.
# ============================================================================

TextMetrics = Callable[[str, FontSpec], float]


class TextMeasurer:
    """Measures and wraps label text for one font."""

    def __init__(
        self,
        font: FontSpec = DEFAULT_FONT,
        metrics: TextMetrics = estimate_text_width,
    ) -> None:
        self.font = font
        self.metrics = metrics
        self._widths: dict[tuple[str, FontSpec], float] = {}

    def measure(self, text: str) -> float:
        key = (text, self.font)
        width = self._widths.get(key)
        if width is None:
            width = float(self.metrics(text, self.font))
            self._widths[key] = width
        return width

    def wrap(self, text: str, max_width: float) -> tuple[str, ...]:
        """Greedy word wrap.

        A word that alone exceeds ``max_width`` keeps its own line and is
        never split. Empty text produces a single empty line.
        """
        words = str(text).split()
        if not words:
            return ("",)

        lines: list[str] = []
        line = words[0]
        for word in words[1:]:
            candidate = f"{line} {word}"
            if self.measure(candidate) <= max_width:
                line = candidate
            else:
                lines.append(line)
                line = word
        lines.append(line)
        return tuple(lines)

    def max_line_width(self, lines: tuple[str, ...] | list[str]) -> float:
        return max((self.measure(line) for line in lines), default=0.0)


def wrap_text(
    text: str,
    max_width: float,
    font: FontSpec = DEFAULT_FONT,
    metrics: TextMetrics = estimate_text_width,
) -> tuple[str, ...]:
    """Convenience wrapper for one-off wrapping."""
    return TextMeasurer(font, metrics).wrap(text, max_width)


def measure_text(
    text: str,
    font: FontSpec = DEFAULT_FONT,
    metrics: TextMetrics = estimate_text_width,
) -> float:
    return TextMeasurer(font, metrics).measure(text)
