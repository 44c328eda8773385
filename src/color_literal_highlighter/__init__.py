"""
color_literal_highlighter
=========================

Does: Root package initializer for the inline color literal highlighter.
Returns: Exposes the `highlighting` subpackage and the CLI `demo` module.
Used by: All higher-level imports starting from `color_literal_highlighter.*`.
"""

__all__: list[str] = []
__docformat__ = "google"
