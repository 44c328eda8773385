# src/color_literal_highlighter/highlighting/general/viewport/delta.py
"""
delta.

Does: Decide which line range of a visible window needs rescanning between two renders.
      Ranges are (start, end), 0-based, end exclusive.
Returns: next_range() (pure) and ViewportTracker (remembers the previous window).
Used by: ColorizerSession.rehighlight().
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

__all__ = ["LineRange", "next_range", "ViewportTracker"]

logger = logging.getLogger(__name__)

LineRange = Tuple[int, int]


def next_range(previous: Optional[LineRange], new: LineRange) -> LineRange:
    """
    Does: Compute the range to rescan when the window moves from `previous` to `new`.
          - no previous window, or an unchanged edge (content edit) -> whole new window
          - scrolled down -> only the revealed tail (old end .. new end)
          - scrolled up   -> only the revealed head, sized by the scroll amount
          - anything wider than the window itself (long jump) -> whole new window
    """
    new_min, new_max = new
    if new_max < new_min:
        raise ValueError(f"Invalid line range: {new!r}")
    if previous is None:
        return new_min, new_max

    old_min, old_max = previous
    if old_max == new_max or old_min == new_min:
        start, end = new_min, new_max
    elif old_max < new_max:
        start, end = old_max, new_max
    else:
        start, end = new_min, new_min + (old_max - new_max)

    if end - start > new_max - new_min:
        start, end = new_min, new_max
    return start, end


class ViewportTracker:
    """Per-buffer memory of the last rendered window."""

    def __init__(self) -> None:
        self.previous: Optional[LineRange] = None

    def update(self, new: LineRange) -> LineRange:
        rng = next_range(self.previous, new)
        logger.debug("viewport %s -> %s: rescan %s", self.previous, new, rng)
        self.previous = (new[0], new[1])
        return rng

    def reset(self) -> None:
        self.previous = None
