"""Deterministic colour helpers used by the style generator.

All functions take ``#rrggbb`` (or ``#rgb``) strings.  Input that does not
parse is never an error: each helper has a fixed fallback documented below.
"""

from __future__ import annotations

import math
import re

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex(value: str) -> tuple[int, int, int] | None:
    """Return ``(r, g, b)`` for a hex colour, or ``None`` if it does not parse."""
    match = _HEX_RE.match(value.strip()) if value else None
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def adjust_color(value: str, amount: int) -> str:
    """Add *amount* to each RGB channel, clamping to 0..255.

    Positive amounts lighten, negative amounts darken.  Unparseable input is
    returned unchanged.
    """
    rgb = parse_hex(value)
    if rgb is None:
        return value
    r, g, b = (min(255, max(0, channel + amount)) for channel in rgb)
    return to_hex(r, g, b)


def foreground_color(background: str) -> str:
    """Pick black or white text for *background* by YIQ luminance.

    Luminance is ``(0.299 r + 0.587 g + 0.114 b) / 255``; above 0.5 gives
    ``#000000``, otherwise ``#ffffff`` (also the fallback for bad input).
    """
    rgb = parse_hex(background)
    if rgb is None:
        return "#ffffff"
    r, g, b = rgb
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return "#000000" if luminance > 0.5 else "#ffffff"


def invert_color(value: str) -> str:
    """XOR the colour with ``#ffffff``.  Unparseable input is returned unchanged."""
    rgb = parse_hex(value)
    if rgb is None:
        return value
    r, g, b = (255 - channel for channel in rgb)
    return to_hex(r, g, b)


def hex_to_hsl(value: str) -> str:
    """Convert to the ``"H S% L%"`` triple used by CSS custom properties.

    Each component is rounded half-up to an integer.  Unparseable input
    yields ``"0 0% 0%"``.
    """
    rgb = parse_hex(value)
    if rgb is None:
        return "0 0% 0%"

    r, g, b = (channel / 255 for channel in rgb)
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2
    hue = saturation = 0.0

    if high != low:
        delta = high - low
        saturation = (
            delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        )
        if high == r:
            hue = ((g - b) / delta + (6 if g < b else 0)) / 6
        elif high == g:
            hue = ((b - r) / delta + 2) / 6
        else:
            hue = ((r - g) / delta + 4) / 6

    return (
        f"{_round_half_up(hue * 360)} "
        f"{_round_half_up(saturation * 100)}% "
        f"{_round_half_up(lightness * 100)}%"
    )
