# tests/conftest.py
"""Shared test doubles: an in-memory FileSystem with manually fired watches."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Set, Tuple

import pytest


class FakeWatch:
    def __init__(self, path: str, callback: Callable[[], None]):
        self.path = path
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


class FakeFileSystem:
    """Files are {path: (mtime, lines)}; write() bumps the mtime, fire() runs watches."""

    def __init__(self, files: Optional[Dict[str, List[str]]] = None):
        self.files: Dict[str, Tuple[float, List[str]]] = {}
        self.unreadable: Set[str] = set()
        self.watches: List[FakeWatch] = []
        self.reads: List[str] = []
        for path, lines in (files or {}).items():
            self.write(path, lines)

    def write(self, path: str, lines: List[str]) -> None:
        mtime = self.files[path][0] + 1 if path in self.files else 1.0
        self.files[path] = (mtime, list(lines))

    def delete(self, path: str) -> None:
        self.files.pop(path, None)

    # FileSystem protocol
    def stat(self, path: str) -> Optional[float]:
        entry = self.files.get(path)
        return entry[0] if entry else None

    def read_lines(self, path: str) -> List[str]:
        self.reads.append(path)
        if path in self.unreadable or path not in self.files:
            raise OSError(f"cannot read {path}")
        return list(self.files[path][1])

    def watch(self, path: str, on_change: Callable[[], None]) -> FakeWatch:
        w = FakeWatch(path, on_change)
        self.watches.append(w)
        return w

    # helpers
    def active_watches(self) -> Dict[str, FakeWatch]:
        return {w.path: w for w in self.watches if not w.cancelled}

    def fire(self, path: str) -> None:
        for w in list(self.watches):
            if w.path == path:
                w.fire()


@pytest.fixture
def fake_fs():
    return FakeFileSystem()
