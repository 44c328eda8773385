"""
lsp package.
============

Does: Bridge colors reported by an external source (typically a language
      server's documentColor answer) into the matcher's ColorMatch stream.
"""

from .document_colors import (
    DocumentColorRequest,
    document_color_to_match,
    document_colors_to_matches,
)

__all__ = [
    "DocumentColorRequest",
    "document_color_to_match",
    "document_colors_to_matches",
]

__docformat__ = "google"
