# color_literal_highlighter/highlighting/general/__init__.py
"""
general.
========

Does: Domain-agnostic building blocks: byte classification, prefix trie,
      viewport delta, filesystem collaborator, config/log utilities.
"""

__all__: list[str] = []
__docformat__ = "google"
