# color_literal_highlighter/highlighting/__init__.py

"""
highlighting.
=============

Does: Namespace for the recognition engine: `general` (domain-agnostic building
      blocks), `color` (grammars, matcher, variables, external colors) and the
      session `orchestrator`.
Used by: `color_literal_highlighter.demo` and host integrations.
"""
from __future__ import annotations

__all__: list[str] = []
__docformat__ = "google"
