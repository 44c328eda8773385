# src/color_literal_highlighter/highlighting/general/token/__init__.py
"""
token package.
==============

Does: Low-level lexical helpers: byte classification table and the prefix trie.
Used by: Color decoders, the matcher compiler, and Sass variable scanning.
"""

from __future__ import annotations

from .classify import (
    ByteClass,
    byte_is_alphanumeric,
    byte_is_hex,
    byte_is_identifier,
    char_code,
    classify,
    parse_hex,
)
from .trie import Trie, TrieNode

__all__ = [
    "ByteClass",
    "classify",
    "char_code",
    "byte_is_alphanumeric",
    "byte_is_hex",
    "byte_is_identifier",
    "parse_hex",
    "Trie",
    "TrieNode",
]

__docformat__ = "google"
