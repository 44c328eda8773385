# src/color_literal_highlighter/highlighting/general/token/classify.py
"""
classify.

Does: Classify byte values (0-255) as digit / alpha / hex through a static table
      built once at import: the low bits hold the category, the high four bits
      hold the hex nibble value.
Returns: classify(), byte_is_alphanumeric(), byte_is_hex(), byte_is_identifier(),
         parse_hex(), char_code().
Used by: Hex decoders, named-color boundary checks, Sass variable scanning.
"""

from __future__ import annotations

from typing import NamedTuple

__all__ = [
    "ByteClass",
    "CATEGORY_DIGIT",
    "CATEGORY_ALPHA",
    "CATEGORY_HEX",
    "CATEGORY_ALPHANUM",
    "BYTE_CATEGORY",
    "classify",
    "char_code",
    "byte_is_alphanumeric",
    "byte_is_hex",
    "byte_is_identifier",
    "parse_hex",
]

CATEGORY_DIGIT = 1 << 0
CATEGORY_ALPHA = 1 << 1
CATEGORY_HEX = 1 << 2
CATEGORY_ALPHANUM = CATEGORY_ALPHA | CATEGORY_DIGIT

_DASH = ord("-")


class ByteClass(NamedTuple):
    is_alphanumeric: bool
    is_hex_digit: bool
    hex_value: int


def _build_table() -> tuple[int, ...]:
    table = []
    for i in range(256):
        v = 0
        lowercase = i | 0x20
        if ord("0") <= i <= ord("9"):
            v = CATEGORY_DIGIT | CATEGORY_HEX | ((i - ord("0")) << 4)
        elif ord("a") <= lowercase <= ord("z"):
            v = CATEGORY_ALPHA
            if lowercase <= ord("f"):
                v |= CATEGORY_HEX | ((lowercase - ord("a") + 10) << 4)
        table.append(v)
    return tuple(table)


BYTE_CATEGORY: tuple[int, ...] = _build_table()


def _category(code: int) -> int:
    return BYTE_CATEGORY[code] if 0 <= code < 256 else 0


def char_code(text: str, index: int) -> int:
    """Does: Return the code point at `index`, or 0 when the index is out of range."""
    if 0 <= index < len(text):
        return ord(text[index])
    return 0


def classify(code: int) -> ByteClass:
    """Does: Decode the table entry of `code` into a ByteClass."""
    category = _category(code)
    return ByteClass(
        is_alphanumeric=bool(category & CATEGORY_ALPHANUM),
        is_hex_digit=bool(category & CATEGORY_HEX),
        hex_value=category >> 4,
    )


def byte_is_alphanumeric(code: int) -> bool:
    return bool(_category(code) & CATEGORY_ALPHANUM)


def byte_is_hex(code: int) -> bool:
    return bool(_category(code) & CATEGORY_HEX)


def byte_is_identifier(code: int) -> bool:
    """Does: Alphanumeric or '-' (continuation of named / prefixed color tokens)."""
    return code == _DASH or byte_is_alphanumeric(code)


def parse_hex(code: int) -> int:
    """Does: Nibble value of a hex digit byte (0 for anything else)."""
    return _category(code) >> 4
