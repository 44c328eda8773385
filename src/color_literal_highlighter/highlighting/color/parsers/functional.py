"""
functional.py
=============

Does: Decode CSS functional notations rgb(), rgba(), hsl(), hsla() with either
      comma- or whitespace-separated arguments.
Returns: (consumed_length, 'rrggbb') or None (malformed or out-of-range input).
Used By: Matcher trie dispatch ('rgb', 'rgba', 'hsl', 'hsla' prefixes).
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Pattern, Tuple

from color_literal_highlighter.highlighting.color.constants import (
    CSS_HSL_FN_MINIMUM_LENGTH,
    CSS_HSLA_FN_MINIMUM_LENGTH,
    CSS_RGB_FN_MINIMUM_LENGTH,
    CSS_RGBA_FN_MINIMUM_LENGTH,
)
from color_literal_highlighter.highlighting.color.utils.convert import (
    hsl_to_rgb,
    percent_or_hex,
    premultiply,
    rgb_to_hex,
)

__all__ = [
    "rgb_function_parser",
    "rgba_function_parser",
    "hsl_function_parser",
    "hsla_function_parser",
]

logger = logging.getLogger(__name__)

ParseResult = Optional[Tuple[int, str]]

# Patterns are matched with Pattern.match(line, i): anchored at i, never before it.
_CH = r"(\d+%?)"
_PCT = r"(\d+)%"
_ALPHA = r"([.\d]+)"

_RGB_RES: Tuple[Pattern[str], ...] = (
    re.compile(rf"rgb\(\s*{_CH}\s*,\s*{_CH}\s*,\s*{_CH}\s*\)"),
    re.compile(rf"rgb\(\s*{_CH}\s+{_CH}\s+{_CH}\s*\)"),
)
_RGBA_RES: Tuple[Pattern[str], ...] = (
    re.compile(rf"rgba\(\s*{_CH}\s*,\s*{_CH}\s*,\s*{_CH}\s*,\s*{_ALPHA}\s*\)"),
    re.compile(rf"rgba\(\s*{_CH}\s+{_CH}\s+{_CH}\s+{_ALPHA}\s*\)"),
)
_HSL_RES: Tuple[Pattern[str], ...] = (
    re.compile(rf"hsl\(\s*(\d+)\s*,\s*{_PCT}\s*,\s*{_PCT}\s*\)"),
    re.compile(rf"hsl\(\s*(\d+)\s+{_PCT}\s+{_PCT}\s*\)"),
)
_HSLA_RES: Tuple[Pattern[str], ...] = (
    re.compile(rf"hsla\(\s*(\d+)\s*,\s*{_PCT}\s*,\s*{_PCT}\s*,\s*{_ALPHA}\s*\)"),
    re.compile(rf"hsla\(\s*(\d+)\s+{_PCT}\s+{_PCT}\s+{_ALPHA}\s*\)"),
)


def _match(patterns: Tuple[Pattern[str], ...], line: str, i: int) -> Optional[re.Match[str]]:
    for pat in patterns:
        m = pat.match(line, i)
        if m:
            return m
    return None


def _parse_alpha(value: str) -> Optional[float]:
    try:
        alpha = float(value)
    except ValueError:
        return None
    if not 0 <= alpha <= 1:
        return None
    return alpha


def _parse_channels(*values: str) -> Optional[Tuple[int, int, int]]:
    channels = []
    for v in values:
        c = percent_or_hex(v)
        if c is None:
            return None
        channels.append(c)
    return channels[0], channels[1], channels[2]


def _parse_hsl(h: str, s: str, l: str) -> Optional[Tuple[int, int, int]]:
    hue, sat, light = int(h), int(s), int(l)
    if hue > 360 or sat > 100 or light > 100:
        return None
    return hsl_to_rgb(hue / 360, sat / 100, light / 100)


# =============================================================================
# rgb() / rgba()
# =============================================================================

def rgb_function_parser(line: str, i: int) -> ParseResult:
    if len(line) - i < CSS_RGB_FN_MINIMUM_LENGTH:
        return None
    m = _match(_RGB_RES, line, i)
    if not m:
        return None
    rgb = _parse_channels(*m.groups())
    if rgb is None:
        return None
    return m.end() - i, rgb_to_hex(*rgb)


def rgba_function_parser(line: str, i: int) -> ParseResult:
    if len(line) - i < CSS_RGBA_FN_MINIMUM_LENGTH:
        return None
    m = _match(_RGBA_RES, line, i)
    if not m:
        return None
    r, g, b, a = m.groups()
    alpha = _parse_alpha(a)
    if alpha is None:
        return None
    rgb = _parse_channels(r, g, b)
    if rgb is None:
        return None
    return m.end() - i, rgb_to_hex(*premultiply(rgb, alpha))


# =============================================================================
# hsl() / hsla()
# =============================================================================

def hsl_function_parser(line: str, i: int) -> ParseResult:
    if len(line) - i < CSS_HSL_FN_MINIMUM_LENGTH:
        return None
    m = _match(_HSL_RES, line, i)
    if not m:
        return None
    rgb = _parse_hsl(*m.groups())
    if rgb is None:
        logger.debug("hsl() out of range at %d: %r", i, m.group(0))
        return None
    return m.end() - i, rgb_to_hex(*rgb)


def hsla_function_parser(line: str, i: int) -> ParseResult:
    if len(line) - i < CSS_HSLA_FN_MINIMUM_LENGTH:
        return None
    m = _match(_HSLA_RES, line, i)
    if not m:
        return None
    h, s, l, a = m.groups()
    alpha = _parse_alpha(a)
    if alpha is None:
        return None
    rgb = _parse_hsl(h, s, l)
    if rgb is None:
        return None
    return m.end() - i, rgb_to_hex(*premultiply(rgb, alpha))
