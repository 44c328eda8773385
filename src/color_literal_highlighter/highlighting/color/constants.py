# constants.py
# ============

"""
constants.
=========

Does: Define immutable constants of the color literal grammars: minimum literal
      lengths, trie prefixes and their parser tags, accepted hex lengths,
      Tailwind modes, and Sass directive keywords.
Used By: Decoders, matcher compiler, Sass variable scanner, option validation.
Returns: Pure data structures only (no side effects).
"""

# ── 1) Minimum literal lengths (shorter input cannot match) ──────────────────
CSS_RGB_FN_MINIMUM_LENGTH = len("rgb(0,0,0)")
CSS_RGBA_FN_MINIMUM_LENGTH = len("rgba(0,0,0,0)")
CSS_HSL_FN_MINIMUM_LENGTH = len("hsl(0,0%,0%)")
CSS_HSLA_FN_MINIMUM_LENGTH = len("hsla(0,0%,0%,0)")
ARGB_LENGTH = len("0xAARRGGBB")


# ── 2) Hex literal lengths ───────────────────────────────────────────────────
HEX_LENGTHS = frozenset({3, 6, 8})
HEX_LENGTH_OPTIONS = {"RGB": 3, "RRGGBB": 6, "RRGGBBAA": 8}


# ── 3) Trie prefixes → parser tags (the matcher's dispatch keys) ─────────────
PREFIX_ARGB = "0x"
PREFIX_RGB = "rgb"
PREFIX_RGBA = "rgba"
PREFIX_HSL = "hsl"
PREFIX_HSLA = "hsla"

RGB_FN_PREFIXES = (PREFIX_RGB, PREFIX_RGBA)
HSL_FN_PREFIXES = (PREFIX_HSL, PREFIX_HSLA)


# ── 4) Tailwind modes ────────────────────────────────────────────────────────
TAILWIND_NONE = "none"
TAILWIND_NORMAL = "normal"  # palette names only
TAILWIND_LSP = "lsp"  # external color source only
TAILWIND_BOTH = "both"
TAILWIND_MODES = frozenset({TAILWIND_NONE, TAILWIND_NORMAL, TAILWIND_LSP, TAILWIND_BOTH})
TAILWIND_NAME_MODES = frozenset({TAILWIND_NORMAL, TAILWIND_BOTH})
TAILWIND_EXTERNAL_MODES = frozenset({TAILWIND_LSP, TAILWIND_BOTH})


# ── 5) Sass ──────────────────────────────────────────────────────────────────
SASS_SIGIL = "$"
SASS_IMPORT_KEYWORDS = frozenset({"import", "use"})
SASS_EXTENSIONS = (".scss", ".sass")
SASS_PARTIAL_PREFIX = "_"


# ── 6) Luminance threshold (black vs white text on a swatch) ─────────────────
BRIGHTNESS_THRESHOLD = 0.5
