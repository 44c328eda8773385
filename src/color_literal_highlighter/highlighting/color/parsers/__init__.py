"""
parsers package.
================

Does: One pure decoder per literal grammar. Contract for every parser:
      parser(line, i, ...) -> (consumed_length, 'rrggbb') | None, 0-based `i`.
Used by: The matcher compiler and the Sass declaration scanner.
"""

from __future__ import annotations

from .functional import (
    hsl_function_parser,
    hsla_function_parser,
    rgb_function_parser,
    rgba_function_parser,
)
from .hex import HexOptions, argb_hex_parser, rgba_hex_parser
from .names import SASS_VARIABLE_RE, color_name_parser, sass_name_parser

__all__ = [
    "HexOptions",
    "rgba_hex_parser",
    "argb_hex_parser",
    "rgb_function_parser",
    "rgba_function_parser",
    "hsl_function_parser",
    "hsla_function_parser",
    "color_name_parser",
    "sass_name_parser",
    "SASS_VARIABLE_RE",
]

__docformat__ = "google"
