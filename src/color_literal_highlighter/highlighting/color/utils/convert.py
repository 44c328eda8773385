"""
convert.py
==========

Does: Channel arithmetic shared by the decoders: HSL→RGB, percentage/integer
      channel parsing, alpha premultiplication, hex formatting, brightness.
Used By: Hex / functional decoders, the external color bridge, the CLI demo.
Returns: Integers in the 0-255 domain and lowercase 'rrggbb' strings.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from webcolors import hex_to_rgb as _wc_hex_to_rgb

from color_literal_highlighter.highlighting.color.constants import BRIGHTNESS_THRESHOLD

__all__ = [
    "RGB",
    "hue_to_rgb",
    "hsl_to_rgb",
    "percent_or_hex",
    "premultiply",
    "premultiply_byte",
    "rgb_to_hex",
    "hex_to_rgb",
    "expand_short_hex",
    "color_is_bright",
]
__docformat__ = "google"

# ── Types ─────────────────────────────────────────────────────────────────────
RGB = Tuple[int, int, int]


# =============================================================================
# 1) HSL
# =============================================================================

def hue_to_rgb(p: float, q: float, t: float) -> float:
    """Does: Piecewise hue channel (six 1/6 sectors), t wrapped into [0, 1]."""
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Optional[RGB]:
    """Does: Convert normalized h, s, l (each 0..1) to floored 0-255 channels, None if out of range."""
    if not (0 <= h <= 1 and 0 <= s <= 1 and 0 <= l <= 1):
        return None
    if s == 0:
        v = math.floor(l * 255)
        return v, v, v
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return (
        math.floor(255 * hue_to_rgb(p, q, h + 1 / 3)),
        math.floor(255 * hue_to_rgb(p, q, h)),
        math.floor(255 * hue_to_rgb(p, q, h - 1 / 3)),
    )


# =============================================================================
# 2) CHANNELS & ALPHA
# =============================================================================

def percent_or_hex(value: str) -> Optional[int]:
    """Does: Parse '128' or '50%' into a 0-255 channel (percent floored after scaling)."""
    try:
        if value.endswith("%"):
            channel = math.floor(float(value[:-1]) / 100 * 255)
        else:
            channel = int(value)
    except ValueError:
        return None
    if not 0 <= channel <= 255:
        return None
    return channel


def premultiply(rgb: RGB, alpha: float) -> RGB:
    """Does: Fold alpha (0..1) into each channel, flooring (no rounding)."""
    r, g, b = rgb
    return math.floor(r * alpha), math.floor(g * alpha), math.floor(b * alpha)


def premultiply_byte(rgb: RGB, alpha: int) -> RGB:
    """Does: Same as premultiply() for an alpha byte (0-255), in exact integer math."""
    r, g, b = rgb
    return r * alpha // 255, g * alpha // 255, b * alpha // 255


# =============================================================================
# 3) HEX
# =============================================================================

def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Does: Format channels as lowercase 'rrggbb'."""
    return f"{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(rgb_hex: str) -> RGB:
    """Does: Parse 'rrggbb' / '#rgb' / '#rrggbb' into an (r, g, b) tuple."""
    text = rgb_hex if rgb_hex.startswith("#") else f"#{rgb_hex}"
    return tuple(_wc_hex_to_rgb(text))  # type: ignore[return-value]


def expand_short_hex(rgb_hex: str) -> str:
    """Does: 'abc' → 'aabbcc'; longer values are only lowercased."""
    rgb_hex = rgb_hex.lower()
    if len(rgb_hex) == 3:
        return "".join(ch * 2 for ch in rgb_hex)
    return rgb_hex


def color_is_bright(r: int, g: int, b: int) -> bool:
    """Does: Perceived luminance test (human eye favors green); True → use black text."""
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance > BRIGHTNESS_THRESHOLD
