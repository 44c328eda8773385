"""
color.
=====

Does: Aggregate the color-domain definitions (literal grammar constants, value
      types and named-color vocabularies) shared by the decoders, the matcher
      compiler and the variable / external color bridges.
Used By: Parsers, matcher, Sass variables, document color bridge, orchestrator.
Returns: Pure data structures and accessor functions; vocabularies load lazily.
"""

# ── Types ────────────────────────────────────────────────────────────────────
from .types import RGB, ColorMatch, ColorSource, DocumentColor

# ── Vocabulary ───────────────────────────────────────────────────────────────
from .vocab import (
    ColorNameTable,
    ColorValue,
    build_color_name_table,
    clear_color_name_cache,
    get_color_name_table,
    get_named_colors,
    get_tailwind_colors,
    get_tailwind_prefixes,
    get_xkcd_colors,
)

__all__ = [
    # types
    "RGB",
    "ColorMatch",
    "DocumentColor",
    "ColorSource",
    # vocab
    "ColorValue",
    "ColorNameTable",
    "build_color_name_table",
    "get_color_name_table",
    "clear_color_name_cache",
    "get_named_colors",
    "get_xkcd_colors",
    "get_tailwind_colors",
    "get_tailwind_prefixes",
]
