"""
variables package.
==================

Does: Resolve preprocessor variables ('$name') to colors across a buffer and
      the files it imports; currently Sass/SCSS.
"""

from .sass import Alias, Declaration, SassVariables, import_candidates, resolve_alias

__all__ = [
    "Alias",
    "Declaration",
    "SassVariables",
    "import_candidates",
    "resolve_alias",
]

__docformat__ = "google"
