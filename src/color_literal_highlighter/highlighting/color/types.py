# color_literal_highlighter/highlighting/color/types.py
"""
types.py.

Does: Value types exchanged by the color layer: scan results (ColorMatch),
      externally supplied document colors (DocumentColor) and the Protocol an
      external color source (e.g. a language server bridge) implements.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable

from webcolors import hex_to_rgb

RGB = Tuple[int, int, int]

__all__ = ["RGB", "ColorMatch", "DocumentColor", "ColorSource"]


@dataclass(frozen=True)
class ColorMatch:
    """A recognized literal: columns [start, end) of one line and its lowercase rrggbb."""

    start: int
    end: int
    rgb_hex: str

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def rgb(self) -> RGB:
        return tuple(hex_to_rgb(f"#{self.rgb_hex}"))  # type: ignore[return-value]


@dataclass(frozen=True)
class DocumentColor:
    """One color reported by an external source; channels are floats in 0..1."""

    line: int
    col_start: int
    col_end: int
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    alpha: float = 0.0


@runtime_checkable
class ColorSource(Protocol):
    def document_colors(self, line_range: Tuple[int, int]) -> Iterable[DocumentColor]: ...
