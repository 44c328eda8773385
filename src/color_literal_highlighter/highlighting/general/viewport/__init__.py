"""Viewport delta tracking (which visible lines to rescan)."""

from .delta import LineRange, ViewportTracker, next_range

__all__ = ["LineRange", "ViewportTracker", "next_range"]
