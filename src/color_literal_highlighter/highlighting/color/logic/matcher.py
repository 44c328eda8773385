# src/color_literal_highlighter/highlighting/color/logic/matcher.py
"""
matcher.py
==========

Does: Compile an enabled-format configuration into a single left-to-right line
      scanner: '#'-hex first, then trie-dispatched prefixes ('0x', 'rgb', 'rgba',
      'hsl', 'hsla'), then '$'-variables and named colors. Compiled matchers are
      cached by configuration *value*.
Returns: MatcherConfig, Matcher, make_matcher(), clear_matcher_cache(),
         load_default_options().
Used By: ColorizerSession, SassVariables (declaration values), CLI demo.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from color_literal_highlighter.highlighting.color.constants import (
    HEX_LENGTH_OPTIONS,
    HSL_FN_PREFIXES,
    PREFIX_ARGB,
    PREFIX_HSL,
    PREFIX_HSLA,
    PREFIX_RGB,
    PREFIX_RGBA,
    RGB_FN_PREFIXES,
    TAILWIND_EXTERNAL_MODES,
    TAILWIND_MODES,
    TAILWIND_NAME_MODES,
    TAILWIND_NONE,
    TAILWIND_NORMAL,
)
from color_literal_highlighter.highlighting.color.parsers import (
    HexOptions,
    argb_hex_parser,
    color_name_parser,
    hsl_function_parser,
    hsla_function_parser,
    rgb_function_parser,
    rgba_function_parser,
    rgba_hex_parser,
    sass_name_parser,
)
from color_literal_highlighter.highlighting.color.types import ColorMatch
from color_literal_highlighter.highlighting.color.vocab import (
    ColorNameTable,
    ColorValue,
    get_color_name_table,
)
from color_literal_highlighter.highlighting.general.token.trie import Trie
from color_literal_highlighter.highlighting.general.utils import debug, load_config

__all__ = [
    "MatcherConfig",
    "Matcher",
    "PREFIX_PARSERS",
    "make_matcher",
    "clear_matcher_cache",
    "load_default_options",
]

logger = logging.getLogger(__name__)

ParseResult = Optional[Tuple[int, str]]
PrefixParser = Callable[[str, int], ParseResult]

# Tagged dispatch: trie prefix (the tag) → decoder
PREFIX_PARSERS: Dict[str, PrefixParser] = {
    PREFIX_ARGB: argb_hex_parser,
    PREFIX_RGB: rgb_function_parser,
    PREFIX_RGBA: rgba_function_parser,
    PREFIX_HSL: hsl_function_parser,
    PREFIX_HSLA: hsla_function_parser,
}

_BOOL_OPTIONS = (
    "css",
    "css_fn",
    "names",
    "RGB",
    "RRGGBB",
    "RRGGBBAA",
    "AARRGGBB",
    "rgb_fn",
    "hsl_fn",
)
# rendering options belong to the host; accepted and ignored here
_HOST_OPTIONS = frozenset({"mode", "virtualtext"})


# =============================================================================
# 1) OPTIONS
# =============================================================================

def _tailwind_mode(value: Any) -> str:
    if value is None or value is False:
        return TAILWIND_NONE
    if value is True:
        return TAILWIND_NORMAL
    if isinstance(value, str) and value in TAILWIND_MODES:
        return value
    raise ValueError(f"Invalid tailwind option: {value!r} (expected bool or one of {sorted(TAILWIND_MODES)})")


def _sass_enabled(value: Any) -> bool:
    if isinstance(value, Mapping):
        return bool(value.get("enable", False))
    return bool(value)


def _validate_options(data: Dict[str, Any]) -> Dict[str, Any]:
    for key in _BOOL_OPTIONS:
        if key in data and not isinstance(data[key], bool):
            raise ValueError(f"option {key!r} must be a boolean, got {type(data[key]).__name__}")
    if "tailwind" in data:
        _tailwind_mode(data["tailwind"])
    if "sass" in data and not isinstance(data["sass"], (bool, Mapping)):
        raise ValueError("option 'sass' must be a boolean or an object with 'enable'")
    return data


@lru_cache(maxsize=1)
def _default_options() -> Tuple[Tuple[str, Any], ...]:
    data = load_config(
        "default_options", mode="validated_dict", validator=_validate_options, allow_comments=True
    )
    return tuple(data.items())


def load_default_options() -> Dict[str, Any]:
    """Does: Default option set from data/default_options.json (fresh dict per call)."""
    return dict(_default_options())


# =============================================================================
# 2) CONFIG (value type, cache key)
# =============================================================================

@dataclass(frozen=True)
class MatcherConfig:
    names: bool = True
    hex_lengths: FrozenSet[int] = frozenset({3, 6})
    argb: bool = False
    rgb_fn: bool = False
    hsl_fn: bool = False
    tailwind: str = TAILWIND_NONE
    sass: bool = False
    named_colors: Optional[FrozenSet[Tuple[str, ColorValue]]] = field(default=None, repr=False)

    @classmethod
    def from_options(
        cls,
        options: Optional[Mapping[str, Any]] = None,
        *,
        defaults: bool = True,
        named_colors: Optional[Mapping[str, ColorValue]] = None,
    ) -> "MatcherConfig":
        """
        Does: Resolve user-facing options ('css', 'css_fn', 'RGB', 'RRGGBB', 'RRGGBBAA',
              'AARRGGBB', 'rgb_fn', 'hsl_fn', 'names', 'tailwind', 'sass') into a config.
              'css' enables names, every hex length and both function families;
              'css_fn' enables both function families.
        Raises: ValueError on invalid option values.
        """
        merged: Dict[str, Any] = load_default_options() if defaults else {}
        merged.update(options or {})
        _validate_options(merged)
        unknown = set(merged) - set(_BOOL_OPTIONS) - {"tailwind", "sass"} - _HOST_OPTIONS
        if unknown:
            logger.warning("Ignoring unknown matcher options: %s", ", ".join(sorted(unknown)))

        css = merged.get("css", False)
        css_fn = css or merged.get("css_fn", False)
        lengths = frozenset(
            n for key, n in HEX_LENGTH_OPTIONS.items() if css or merged.get(key, False)
        )
        return cls(
            names=bool(css or merged.get("names", False)),
            hex_lengths=lengths,
            argb=bool(merged.get("AARRGGBB", False)),
            rgb_fn=bool(css_fn or merged.get("rgb_fn", False)),
            hsl_fn=bool(css_fn or merged.get("hsl_fn", False)),
            tailwind=_tailwind_mode(merged.get("tailwind")),
            sass=_sass_enabled(merged.get("sass")),
            named_colors=frozenset(named_colors.items()) if named_colors is not None else None,
        )

    @property
    def prefixes(self) -> Tuple[str, ...]:
        out: List[str] = []
        if self.argb:
            out.append(PREFIX_ARGB)
        if self.rgb_fn:
            out.extend(RGB_FN_PREFIXES)
        if self.hsl_fn:
            out.extend(HSL_FN_PREFIXES)
        return tuple(out)

    @property
    def tailwind_names(self) -> bool:
        return self.tailwind in TAILWIND_NAME_MODES

    @property
    def tailwind_external(self) -> bool:
        return self.tailwind in TAILWIND_EXTERNAL_MODES

    @property
    def enabled(self) -> bool:
        return bool(
            self.names or self.hex_lengths or self.prefixes or self.tailwind_names or self.sass
        )


# =============================================================================
# 3) COMPILED MATCHER
# =============================================================================

class Matcher:
    """Scanner compiled for one MatcherConfig; immutable after construction."""

    def __init__(self, config: MatcherConfig):
        self.config = config
        self.hex_options: Optional[HexOptions] = HexOptions.from_lengths(config.hex_lengths)
        self.dispatch: Dict[str, PrefixParser] = {p: PREFIX_PARSERS[p] for p in config.prefixes}
        self.prefixes = Trie(self.dispatch)
        self.name_table: Optional[ColorNameTable] = None
        if config.names or config.tailwind_names:
            named = dict(config.named_colors) if config.named_colors is not None else None
            if not config.names:
                named = {}
            self.name_table = get_color_name_table(tailwind=config.tailwind_names, named=named)

    def parse_at(
        self, line: str, i: int, variables: Optional[Mapping[str, str]] = None
    ) -> ParseResult:
        """Does: Try every enabled decoder at column `i`; (length, 'rrggbb') or None."""
        ch = line[i]
        if ch == "#" and self.hex_options is not None:
            return rgba_hex_parser(line, i, self.hex_options)

        if self.dispatch:
            prefix = self.prefixes.longest_prefix(line, i)
            if prefix is not None:
                return self.dispatch[prefix](line, i)

        if ch == "$" and variables is not None:
            return sass_name_parser(line, i, variables)

        if self.name_table is not None:
            return color_name_parser(line, i, self.name_table)
        return None

    def scan(self, line: str, variables: Optional[Mapping[str, str]] = None) -> List[ColorMatch]:
        """Does: Greedy left-to-right scan; matches never overlap, no backtracking."""
        out: List[ColorMatch] = []
        i, n = 0, len(line)
        while i < n:
            result = self.parse_at(line, i, variables)
            if result is None:
                i += 1
                continue
            length, rgb_hex = result
            out.append(ColorMatch(i, i + length, rgb_hex))
            i += length
        return out

    def scan_lines(
        self,
        lines: Iterable[str],
        line_start: int = 0,
        variables: Optional[Mapping[str, str]] = None,
    ) -> Iterator[Tuple[int, List[ColorMatch]]]:
        """Does: Yield (line_number, matches) for every line with at least one match."""
        for offset, line in enumerate(lines):
            matches = self.scan(line, variables)
            if matches:
                debug("line %d: %d match(es)", line_start + offset, len(matches), topic="scan")
                yield line_start + offset, matches

    def __repr__(self) -> str:
        return f"Matcher({self.config!r})"


@lru_cache(maxsize=32)
def make_matcher(config: MatcherConfig) -> Optional[Matcher]:
    """Does: Compile (once per distinct config value) or None if nothing is enabled."""
    if not config.enabled:
        return None
    logger.debug("Compiling matcher for %r", config)
    return Matcher(config)


def clear_matcher_cache() -> None:
    """Does: Forget every compiled matcher (configuration change)."""
    make_matcher.cache_clear()
