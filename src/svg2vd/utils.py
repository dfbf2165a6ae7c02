"""Utility functions for converting SVG geometry and colors.

This module provides the low-level, side-effect free rules used by the
svg2vd converter. It includes functions for reading and writing numbers the
way SVG attributes carry them, building VectorDrawable path data for basic
shapes, and normalising CSS color tokens.

The module includes:
- Number parsing with a fallback default and compact number formatting
- Path data for rectangles and Bezier-approximated circles
- CSS color token normalisation to Android ARGB hex strings
"""

import logging
import re
from math import isfinite

logger = logging.getLogger(__name__)

# Control point factor for approximating a quarter circle with a cubic Bezier.
KAPPA = 0.5522847498

# Opaque black, used for any color token we cannot read.
FALLBACK_COLOR = "#FF000000"

number_re = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
rgb_re = re.compile(r"rgb\((\d+),\s*(\d+),\s*(\d+)\)")


def parse_number(text: str, default: float = 0.0) -> float:
    """Parse the leading decimal number of an attribute value.

    Leading whitespace is skipped and any trailing garbage (units, for
    instance) is ignored.

    Args:
        text: The raw attribute value.
        default: Value returned when no number can be read.

    Returns:
        The parsed number, or `default` for empty or non-numeric input.

    Examples:
        >>> parse_number("10px")
        10.0

        >>> parse_number("", default=3)
        3
    """
    match = number_re.match(text.lstrip())
    if not match:
        return default
    return float(match.group())


def format_number(value: float) -> str:
    """Format a number the compact way used in path data and dimensions.

    Integral values lose their fractional part, everything else uses the
    shortest digits that round-trip. Magnitudes from 1e-6 up to 1e21 are
    written in plain decimal notation, others with an unpadded exponent.

    Examples:
        >>> format_number(24.0)
        '24'

        >>> format_number(0.00001)
        '0.00001'

        >>> format_number(1.5e-7)
        '1.5e-7'
    """
    value = float(value)
    if isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exp_text = text.split("e")
    exp = int(exp_text)
    if -7 < exp < 21:
        sign = "-" if mantissa.startswith("-") else ""
        digits = mantissa.lstrip("-").replace(".", "")
        # repr only switches to exponents below 1e-4 in this range
        return f"{sign}0.{'0' * (-exp - 1)}{digits}"
    return f"{mantissa}e{'+' if exp > 0 else '-'}{abs(exp)}"


def rect_path_data(x: float, y: float, width: float, height: float) -> str:
    """Return clockwise path data for an axis-aligned rectangle.

    The path starts at the top-left corner and uses relative horizontal and
    vertical lines before closing.
    """
    fmt = format_number
    return f"M{fmt(x)},{fmt(y)} h{fmt(width)} v{fmt(height)} h{fmt(-width)} Z"


def circle_path_data(cx: float, cy: float, r: float) -> str:
    """Return path data approximating a circle with four cubic Bezier arcs.

    The path starts at the leftmost point and runs through the top, right
    and bottom points back to the start. Each arc uses control points offset
    by `KAPPA * r` along the tangent of its end points, which keeps the
    radial error below 0.03%.

    Args:
        cx: X coordinate of the center.
        cy: Y coordinate of the center.
        r: Radius, expected to be positive.

    Returns:
        A closed path data string.
    """
    kr = r * KAPPA

    def pt(x: float, y: float) -> str:
        return f"{format_number(x)},{format_number(y)}"

    segments = [
        f"M{pt(cx - r, cy)}",
        f"C{pt(cx - r, cy - kr)} {pt(cx - kr, cy - r)} {pt(cx, cy - r)}",
        f"C{pt(cx + kr, cy - r)} {pt(cx + r, cy - kr)} {pt(cx + r, cy)}",
        f"C{pt(cx + r, cy + kr)} {pt(cx + kr, cy + r)} {pt(cx, cy + r)}",
        f"C{pt(cx - kr, cy + r)} {pt(cx - r, cy + kr)} {pt(cx - r, cy)} Z",
    ]
    return " ".join(segments)


def normalise_color(text: str) -> str:
    """Convert a CSS color token into an Android `#AARRGGBB` string.

    Alpha is always fully opaque, any alpha in the source is ignored.

    Args:
        text: A CSS color token such as "#f00", "#112233" or "rgb(1, 2, 3)".

    Returns:
        The normalised color. Unsupported tokens (named colors, `rgba()`,
        `hsl()`, malformed hex) give opaque black.

    Examples:
        >>> normalise_color("#1A3")
        '#FF11AA33'

        >>> normalise_color("#112233")
        '#FF112233'

        >>> normalise_color("rgb(255,0,16)")
        '#FFff0010'

        >>> normalise_color("papayawhip")
        '#FF000000'

    Note:
        Hex digits are not validated and keep their case.
    """
    if text.startswith("#"):
        if len(text) == 4:
            r, g, b = text[1], text[2], text[3]
            return f"#FF{r}{r}{g}{g}{b}{b}"
        elif len(text) == 7:
            return f"#FF{text[1:]}"
    elif text.startswith("rgb"):
        match = rgb_re.search(text)
        if match:
            return "#FF" + "".join(f"{int(c):02x}" for c in match.groups())

    logger.warning("Can't handle color: %s", text)
    return FALLBACK_COLOR
