"""
names.py
========

Does: Decode identifier-like color references: named colors (CSS / Tailwind
      '<prefix>-<shade>' / host names) through the name trie, and Sass '$name'
      references through a resolved variable table.
Returns: (consumed_length, 'rrggbb') or None.
Used By: Matcher (last branch at each column).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Optional, Tuple

from color_literal_highlighter.highlighting.color.vocab import ColorNameTable
from color_literal_highlighter.highlighting.general.token.classify import (
    byte_is_identifier,
    char_code,
)

__all__ = ["color_name_parser", "sass_name_parser", "SASS_VARIABLE_RE"]

ParseResult = Optional[Tuple[int, str]]

SASS_VARIABLE_RE = re.compile(r"\$([\w-]+)")


def color_name_parser(line: str, i: int, table: ColorNameTable) -> ParseResult:
    """
    Does: Longest registered name at `i`, accepted only at identifier boundaries
          on both sides (takes the 'blue' out of 'blueberry': no match).
    """
    if not table.colors or len(line) - i < table.min_length:
        return None
    if i > 0 and byte_is_identifier(char_code(line, i - 1)):
        return None

    name = table.trie.longest_prefix(line, i)
    if name is None:
        return None
    if byte_is_identifier(char_code(line, i + len(name))):
        return None
    return len(name), table.colors[name]


def sass_name_parser(line: str, i: int, definitions: Mapping[str, str]) -> ParseResult:
    """Does: '$name' → its resolved value; unresolved names produce no match."""
    m = SASS_VARIABLE_RE.match(line, i)
    if not m:
        return None
    rgb_hex = definitions.get(m.group(1))
    if rgb_hex is None:
        return None
    return m.end() - i, rgb_hex
