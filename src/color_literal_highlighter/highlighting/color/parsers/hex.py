"""
hex.py
======

Does: Decode '#rgb' / '#rrggbb' / '#rrggbbaa' and Android-style '0xAARRGGBB'
      literals straight from the byte classification table (no regex).
Returns: (consumed_length, 'rrggbb') or None.
Used By: Matcher (the '#' branch and the '0x' trie branch), Sass declaration values.
"""

from __future__ import annotations

from typing import FrozenSet, NamedTuple, Optional, Tuple

from color_literal_highlighter.highlighting.color.constants import ARGB_LENGTH, HEX_LENGTHS
from color_literal_highlighter.highlighting.color.utils.convert import (
    expand_short_hex,
    premultiply_byte,
    rgb_to_hex,
)
from color_literal_highlighter.highlighting.general.token.classify import (
    byte_is_alphanumeric,
    byte_is_hex,
    char_code,
    parse_hex,
)

__all__ = ["HexOptions", "rgba_hex_parser", "argb_hex_parser"]

ParseResult = Optional[Tuple[int, str]]


class HexOptions(NamedTuple):
    valid_lengths: FrozenSet[int]
    min_length: int
    max_length: int

    @classmethod
    def from_lengths(cls, lengths) -> Optional["HexOptions"]:
        valid = frozenset(n for n in lengths if n in HEX_LENGTHS)
        if not valid:
            return None
        return cls(valid, min(valid), max(valid))


def _hex_run_end(line: str, start: int, limit: int) -> int:
    end = start
    while end < limit and byte_is_hex(char_code(line, end)):
        end += 1
    return end


def _hex_value(line: str, start: int, end: int) -> int:
    value = 0
    for k in range(start, end):
        value = (value << 4) | parse_hex(ord(line[k]))
    return value


def _split_rgb(value: int) -> Tuple[int, int, int]:
    return (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF


def rgba_hex_parser(line: str, i: int, opts: HexOptions) -> ParseResult:
    """
    Does: Parse '#' + exactly an enabled number of hex digits at `i`.
          Rejected when glued to an alphanumeric byte on either side.
          8 digits: trailing alpha pair premultiplied (floored) into the channels.
    """
    j = i + 1
    if len(line) < j + opts.min_length:
        return None
    if i > 0 and byte_is_alphanumeric(char_code(line, i - 1)):
        return None

    # one digit past the longest form, so over-long runs are seen and rejected
    end = _hex_run_end(line, j, min(j + opts.max_length + 1, len(line)))
    if byte_is_alphanumeric(char_code(line, end)):
        return None

    digits = end - j
    if digits not in opts.valid_lengths:
        return None

    if digits == 8:
        value = _hex_value(line, j, end)
        r, g, b = premultiply_byte(_split_rgb(value >> 8), value & 0xFF)
        return digits + 1, rgb_to_hex(r, g, b)
    return digits + 1, expand_short_hex(line[j:end])


def argb_hex_parser(line: str, i: int) -> ParseResult:
    """Does: Parse '0x' + exactly 8 hex digits (alpha first, premultiplied)."""
    if len(line) - i < ARGB_LENGTH:
        return None
    j = i + 2
    end = _hex_run_end(line, j, min(j + 9, len(line)))
    if byte_is_alphanumeric(char_code(line, end)):
        return None
    if end - i != ARGB_LENGTH:
        return None

    value = _hex_value(line, j, end)
    r, g, b = premultiply_byte(_split_rgb(value & 0xFFFFFF), value >> 24)
    return ARGB_LENGTH, rgb_to_hex(r, g, b)
