from __future__ import annotations

from functools import lru_cache

from .types import FontSpec

# ============================================================================
# Font metrics — character width estimates for proportional UI fonts.
# ============================================================================

# Average glyph width as a fraction of the font size
AVERAGE_CHAR_RATIO = 0.52

# Proportional fonts render wide glyphs noticeably wider than the average
WIDE_CHARS = frozenset("MWmw@%")
NARROW_CHARS = frozenset("iljtf.,:;'|!I ")


@lru_cache(maxsize=4096)
def estimate_text_width(text: str, font: FontSpec) -> float:
    """Estimated rendered width in px of a single line of text."""
    units = 0.0
    for ch in text:
        if ch in WIDE_CHARS:
            units += 1.5
        elif ch in NARROW_CHARS:
            units += 0.6
        else:
            units += 1.0
    return units * font.size * AVERAGE_CHAR_RATIO


DEFAULT_FONT = FontSpec(family="ui-sans-serif, system-ui", size=16, line_height=20)

# ============================================================================
# Spacing & sizing constants
# ============================================================================

BOX_PADDING = {
    "horizontal": 22,
    "vertical": 18,
}

CONNECTOR = {
    "radius": 9,
    # How far the label box slides back over the connector dot
    "overlap": 0,
}

# Upper bound on the horizontal pull of an edge's Bezier control points
CURVE_CAP = 200
CURVE_RATIO = 0.6
