"""
vocab
=====

Does: Define the named-color vocabularies (CSS3 via webcolors, XKCD via matplotlib,
      Tailwind palette from data/) and build the cached name → 'rrggbb' table plus
      its lookup trie for the named-color parser.
Used By: color_name_parser, matcher compiler, ColorizerSession (host-supplied names).
Returns: Plain dicts, frozen name tables, and getter functions (lazy caching only).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import webcolors

from color_literal_highlighter.highlighting.general.token.trie import Trie
from color_literal_highlighter.highlighting.general.utils import load_config

log = logging.getLogger(__name__)

__all__ = [
    "ColorValue",
    "ColorNameTable",
    "get_named_colors",
    "get_xkcd_colors",
    "get_tailwind_colors",
    "get_tailwind_prefixes",
    "normalize_color_value",
    "build_color_name_table",
    "get_color_name_table",
    "clear_color_name_cache",
]

ColorValue = Union[int, str]

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})")
_TRAILING_DIGITS_RE = re.compile(r"\d+$")


# ── CSS names (host default) ─────────────────────────────────────────────────
@lru_cache(maxsize=1)
def _css3_colors() -> Dict[str, int]:
    return {
        name.lower(): int(webcolors.name_to_hex(name, spec=webcolors.CSS3)[1:], 16)
        for name in webcolors.names(webcolors.CSS3)
    }


def get_named_colors() -> Dict[str, int]:
    """Does: Default color name source: CSS3 names → 24-bit RGB integers."""
    return dict(_css3_colors())


# ── XKCD names (lazy to avoid heavy import at module load) ───────────────────
@lru_cache(maxsize=1)
def _load_xkcd_colors() -> Dict[str, int]:
    from matplotlib.colors import XKCD_COLORS  # lazy import

    return {k.replace("xkcd:", "").lower(): int(v[1:], 16) for k, v in XKCD_COLORS.items()}


def get_xkcd_colors() -> Dict[str, int]:
    """Does: Optional large name source (XKCD survey names, may contain spaces)."""
    return dict(_load_xkcd_colors())


# ── Tailwind palette (data/tailwind_colors.json) ─────────────────────────────
def _validate_tailwind(data: Dict[str, Any]) -> Dict[str, Any]:
    prefixes = data.get("prefixes")
    colors = data.get("colors")
    if not isinstance(prefixes, list) or not all(isinstance(p, str) for p in prefixes):
        raise ValueError("'prefixes' must be a list of strings")
    if not isinstance(colors, dict):
        raise ValueError("'colors' must be an object of name -> hex")
    for name, value in colors.items():
        if not isinstance(value, str) or not _HEX_RE.fullmatch(value):
            raise ValueError(f"bad hex for {name!r}: {value!r}")
    return data


@lru_cache(maxsize=1)
def _tailwind_data() -> Dict[str, Any]:
    return load_config("tailwind_colors", mode="validated_dict", validator=_validate_tailwind)


def get_tailwind_colors() -> Dict[str, str]:
    """Does: Tailwind shade names ('blue-500') → '#rrggbb'."""
    return dict(_tailwind_data()["colors"])


def get_tailwind_prefixes() -> Tuple[str, ...]:
    """Does: Utility prefixes combined with shades ('bg', 'text', 'ring-offset', ...)."""
    return tuple(_tailwind_data()["prefixes"])


# ── Name table ───────────────────────────────────────────────────────────────
def normalize_color_value(value: ColorValue) -> Optional[str]:
    """Does: 24-bit int or '#rgb'/'rrggbb' string → lowercase 'rrggbb' (None if invalid)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if not 0 <= value <= 0xFFFFFF:
            return None
        return f"{value:06x}"
    m = _HEX_RE.fullmatch(value.strip()) if isinstance(value, str) else None
    if not m:
        return None
    digits = m.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return digits


@dataclass(frozen=True)
class ColorNameTable:
    colors: Mapping[str, str]
    trie: Trie = field(compare=False)
    min_length: int
    max_length: int

    def lookup(self, name: str) -> Optional[str]:
        return self.colors.get(name)


def build_color_name_table(
    named: Mapping[str, ColorValue],
    *,
    tailwind: bool = False,
    lowercase: bool = True,
    strip_digits: bool = False,
) -> ColorNameTable:
    """
    Does: Merge host names (plus lowercase variants) and, optionally, every
          '<prefix>-<shade>' Tailwind name into one table and trie.
    Returns: ColorNameTable (empty table has min/max length 0).
    """
    colors: Dict[str, str] = {}
    for name, value in named.items():
        if not name or (strip_digits and _TRAILING_DIGITS_RE.search(name)):
            continue
        rgb_hex = normalize_color_value(value)
        if rgb_hex is None:
            log.debug("Skipping color name %r: invalid value %r", name, value)
            continue
        colors[name] = rgb_hex
        if lowercase:
            colors.setdefault(name.lower(), rgb_hex)

    if tailwind:
        prefixes = get_tailwind_prefixes()
        for shade, value in get_tailwind_colors().items():
            rgb_hex = normalize_color_value(value)
            if rgb_hex is None:
                continue
            for prefix in prefixes:
                colors[f"{prefix}-{shade}"] = rgb_hex

    trie = Trie(colors)
    lengths = [len(n) for n in colors]
    table = ColorNameTable(
        colors=colors,
        trie=trie,
        min_length=min(lengths, default=0),
        max_length=max(lengths, default=0),
    )
    log.debug("Built color name table: %d names (tailwind=%s)", len(colors), tailwind)
    return table


@lru_cache(maxsize=16)
def _cached_table(
    tailwind: bool, items: Optional[FrozenSet[Tuple[str, ColorValue]]]
) -> ColorNameTable:
    named: Mapping[str, ColorValue] = dict(items) if items is not None else _css3_colors()
    return build_color_name_table(named, tailwind=tailwind)


def get_color_name_table(
    tailwind: bool = False, named: Optional[Mapping[str, ColorValue]] = None
) -> ColorNameTable:
    """Does: Process-wide cached table for (tailwind flag, name source); CSS3 names by default."""
    items = frozenset(named.items()) if named is not None else None
    return _cached_table(bool(tailwind), items)


def clear_color_name_cache() -> None:
    """Does: Drop cached name tables (the only way they are invalidated)."""
    _cached_table.cache_clear()
    _tailwind_data.cache_clear()
