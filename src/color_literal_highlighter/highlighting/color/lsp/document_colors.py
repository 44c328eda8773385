# src/color_literal_highlighter/highlighting/color/lsp/document_colors.py
"""
document_colors.py
==================

Does: Run one external color request (e.g. a language server documentColor
      call for Tailwind classes) on a background thread and convert what it
      returns into per-line ColorMatch lists.
Returns: DocumentColorRequest, document_color_to_match(), document_colors_to_matches().
Used By: ColorizerSession.request_external_colors().

Notes:
- Channels arrive as floats in 0..1 and are premultiplied by alpha, then
  floored: floor(c * a * 255).
- A request carries the version it was issued for; the session drops results
  whose version is no longer current. cancel() only prevents delivery.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Iterable
from typing import Dict, List, Optional, Tuple

from color_literal_highlighter.highlighting.color.types import ColorMatch, ColorSource, DocumentColor
from color_literal_highlighter.highlighting.color.utils.convert import rgb_to_hex

__all__ = [
    "DocumentColorRequest",
    "document_color_to_match",
    "document_colors_to_matches",
]

logger = logging.getLogger(__name__)

LineMatches = Dict[int, List[ColorMatch]]
DoneCallback = Callable[[int, LineMatches], None]


def _channel(value: float, alpha: float) -> int:
    return min(255, max(0, math.floor(value * alpha * 255)))


def document_color_to_match(color: DocumentColor) -> Tuple[int, ColorMatch]:
    """Does: One external color → (line, ColorMatch) with alpha folded into the channels."""
    rgb_hex = rgb_to_hex(
        _channel(color.red, color.alpha),
        _channel(color.green, color.alpha),
        _channel(color.blue, color.alpha),
    )
    return color.line, ColorMatch(color.col_start, color.col_end, rgb_hex)


def document_colors_to_matches(
    colors: Iterable[DocumentColor], line_range: Optional[Tuple[int, int]] = None
) -> LineMatches:
    """
    Does: Group converted colors by line, sorted by start column. Colors outside
          [line_range[0], line_range[1]) are dropped when a range is given.
    """
    out: LineMatches = {}
    for color in colors:
        if line_range is not None and not line_range[0] <= color.line < line_range[1]:
            continue
        line, match = document_color_to_match(color)
        out.setdefault(line, []).append(match)
    for matches in out.values():
        matches.sort(key=lambda m: m.start)
    return out


class DocumentColorRequest:
    """Background request to a ColorSource; `on_done(version, matches)` unless cancelled."""

    def __init__(
        self,
        source: ColorSource,
        line_range: Tuple[int, int],
        version: int,
        on_done: DoneCallback,
    ):
        self.source = source
        self.line_range = line_range
        self.version = version
        self._on_done = on_done
        self._cancelled = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=f"colorizer document colors v{version}", daemon=True
        )

    def start(self) -> "DocumentColorRequest":
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self._thread.ident is not None and not self._thread.is_alive()

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)

    def _run(self) -> None:
        try:
            colors = list(self.source.document_colors(self.line_range))
        except Exception:
            logger.exception("Document color request v%d failed", self.version)
            return
        if self.cancelled:
            logger.debug("Document color request v%d cancelled, dropping %d colors", self.version, len(colors))
            return
        matches = document_colors_to_matches(colors, self.line_range)
        self._on_done(self.version, matches)
