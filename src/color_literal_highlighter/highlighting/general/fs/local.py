# src/color_literal_highlighter/highlighting/general/fs/local.py
"""
local.py
========

Does: Local-disk implementation of the FileSystem collaborator: mtime stat,
      line reads, and a polling watch running on a named daemon thread.
Returns: LocalFileSystem, PollingWatch.
Used by: SassVariables (import resolution + change watches) when the host
         does not supply its own filesystem.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable

__all__ = ["LocalFileSystem", "PollingWatch", "DEFAULT_POLL_INTERVAL"]

logger = logging.getLogger(__name__)

# ── Config (env-overridable) ─────────────────────────────────────────────────
DEFAULT_POLL_INTERVAL = float(os.getenv("COLORIZER_WATCH_INTERVAL", "0.5"))  # seconds


def _mtime(path: str) -> float | None:
    try:
        return os.stat(path).st_mtime
    except OSError:
        return None


class PollingWatch:
    """Calls `on_change` whenever the mtime of `path` changes (including deletion)."""

    def __init__(
        self,
        path: str,
        on_change: Callable[[], None],
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self.path = path
        self.interval = interval
        self._on_change = on_change
        self._stop = threading.Event()
        self._last = _mtime(path)
        self._thread = threading.Thread(
            target=self._loop, name=f"colorizer watch {os.path.basename(path)}", daemon=True
        )
        self._thread.start()

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            current = _mtime(self.path)
            if current == self._last:
                continue
            self._last = current
            logger.debug("watch fired: %s (mtime=%s)", self.path, current)
            try:
                self._on_change()
            except Exception:
                # keep watching: one failing refresh must not kill the thread
                logger.exception("watch callback failed for %s", self.path)

    def cancel(self) -> None:
        self._stop.set()

    def join(self, timeout: float | None = None) -> None:
        self._thread.join(timeout)


class LocalFileSystem:
    """FileSystem backed by os/pathlib calls."""

    def __init__(self, poll_interval: float = DEFAULT_POLL_INTERVAL, encoding: str = "utf-8"):
        self.poll_interval = poll_interval
        self.encoding = encoding

    def stat(self, path: str) -> float | None:
        return _mtime(path)

    def read_lines(self, path: str) -> list[str]:
        with open(path, "r", encoding=self.encoding, errors="replace") as f:
            return f.read().splitlines()

    def watch(self, path: str, on_change: Callable[[], None]) -> PollingWatch:
        return PollingWatch(path, on_change, interval=self.poll_interval)
