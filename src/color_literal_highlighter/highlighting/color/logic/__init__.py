"""
logic package.
==============

Does: Public interface of the matcher compiler (config → cached line scanner).
Used by: ColorizerSession, SassVariables, the CLI demo.
"""

from __future__ import annotations

from .matcher import (
    PREFIX_PARSERS,
    Matcher,
    MatcherConfig,
    clear_matcher_cache,
    load_default_options,
    make_matcher,
)

__all__ = [
    "MatcherConfig",
    "Matcher",
    "PREFIX_PARSERS",
    "make_matcher",
    "clear_matcher_cache",
    "load_default_options",
]

__docformat__ = "google"
