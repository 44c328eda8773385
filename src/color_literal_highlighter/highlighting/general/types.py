# color_literal_highlighter/highlighting/general/types.py
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Hashable, Protocol, runtime_checkable

"""
types.py.

Does: Define the structural Protocols of the collaborators the core consumes:
      filesystem access, cancellable watches, and the highlight consumer.
"""


@runtime_checkable
class WatchHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class FileSystem(Protocol):
    def stat(self, path: str) -> float | None:
        """Last-modified time, or None when the path does not exist."""
        ...

    def read_lines(self, path: str) -> list[str]:
        """Lines without trailing newlines; raises OSError when unreadable."""
        ...

    def watch(self, path: str, on_change: Callable[[], None]) -> WatchHandle: ...


class HighlightConsumer(Protocol):
    def __call__(self, buffer_id: Hashable, line: int, matches: Sequence[Any]) -> None: ...


__all__ = ["WatchHandle", "FileSystem", "HighlightConsumer"]

__docformat__ = "google"
