# orchestrator.py
from __future__ import annotations

"""
orchestrator.py
===============

Does: Own the per-buffer state of a highlighting session (viewport memory, Sass
      variable tables and watches, pending external color requests) and run
      scans, streaming (buffer_id, line, matches) to the host's consumer.
Returns:
  - ColorizerSession.highlight(buffer_id, lines, line_start) -> {line: [ColorMatch, ...]}
  - ColorizerSession.rehighlight(buffer_id, buffer_lines, visible_range) -> same, for
    the viewport delta only
  - ColorizerSession.request_external_colors(...) -> DocumentColorRequest | None
Used by: Editor integrations and the CLI demo.
"""

import logging
import threading
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Dict, List, Optional, Tuple

from color_literal_highlighter.highlighting.color.logic import (
    Matcher,
    MatcherConfig,
    clear_matcher_cache,
    make_matcher,
)
from color_literal_highlighter.highlighting.color.lsp import DocumentColorRequest
from color_literal_highlighter.highlighting.color.types import ColorMatch, ColorSource
from color_literal_highlighter.highlighting.color.variables import SassVariables
from color_literal_highlighter.highlighting.color.vocab import ColorValue
from color_literal_highlighter.highlighting.general.fs import LocalFileSystem
from color_literal_highlighter.highlighting.general.types import FileSystem, HighlightConsumer
from color_literal_highlighter.highlighting.general.utils import debug
from color_literal_highlighter.highlighting.general.viewport import LineRange, ViewportTracker

logger = logging.getLogger(__name__)

__all__ = [
    "BufferState",
    "ColorizerSession",
    "merge_matches",
]

LineMatches = Dict[int, List[ColorMatch]]


# =============================================================================
# Per-buffer state
# =============================================================================

@dataclass
class BufferState:
    buffer_id: Hashable
    path: Optional[str] = None
    viewport: ViewportTracker = field(default_factory=ViewportTracker)
    variables: Optional[SassVariables] = None
    lines: List[str] = field(default_factory=list)
    version: int = 0
    request: Optional[DocumentColorRequest] = None
    external: LineMatches = field(default_factory=dict)

    def release(self) -> None:
        """Cancel the pending request and every watch held for this buffer."""
        if self.request is not None:
            self.request.cancel()
            self.request = None
        if self.variables is not None:
            self.variables.close()
            self.variables = None


def merge_matches(local: Sequence[ColorMatch], external: Sequence[ColorMatch]) -> List[ColorMatch]:
    """
    Does: Join scanned and externally reported matches of one line.
          Scanned matches win; an external match overlapping any of them is dropped.
    """
    merged = list(local)
    for ext in external:
        if any(ext.start < m.end and m.start < ext.end for m in local):
            continue
        merged.append(ext)
    merged.sort(key=lambda m: m.start)
    return merged


# =============================================================================
# Session
# =============================================================================

class ColorizerSession:
    """Registry of attached buffers sharing one matcher configuration."""

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        filesystem: Optional[FileSystem] = None,
        named_colors: Optional[Mapping[str, ColorValue]] = None,
        consumer: Optional[HighlightConsumer] = None,
        color_source: Optional[ColorSource] = None,
    ):
        self.filesystem: FileSystem = filesystem if filesystem is not None else LocalFileSystem()
        self.consumer = consumer
        self.color_source = color_source
        self.named_colors = named_colors
        self._lock = threading.RLock()
        self._buffers: Dict[Hashable, BufferState] = {}
        self.config = MatcherConfig.from_options(options, named_colors=named_colors)
        self.matcher: Optional[Matcher] = make_matcher(self.config)

    # ── Buffers ──────────────────────────────────────────────────────────────
    @property
    def buffers(self) -> Tuple[Hashable, ...]:
        return tuple(self._buffers)

    def buffer_state(self, buffer_id: Hashable) -> Optional[BufferState]:
        return self._buffers.get(buffer_id)

    def attach_buffer(self, buffer_id: Hashable, path: Optional[str] = None) -> BufferState:
        """Does: Register a buffer (idempotent); Sass tracking starts when enabled."""
        with self._lock:
            state = self._buffers.get(buffer_id)
            if state is None:
                state = BufferState(buffer_id, path=path)
                self._buffers[buffer_id] = state
                logger.debug("Attached buffer %r (path=%s)", buffer_id, path)
            elif path is not None:
                state.path = path
            self._sync_variables(state)
            return state

    def detach_buffer(self, buffer_id: Hashable) -> None:
        """Does: Forget a buffer; cancels its watches and any pending external request."""
        with self._lock:
            state = self._buffers.pop(buffer_id, None)
        if state is None:
            return
        state.release()
        logger.debug("Detached buffer %r", buffer_id)

    def close(self) -> None:
        for buffer_id in list(self._buffers):
            self.detach_buffer(buffer_id)

    def __enter__(self) -> "ColorizerSession":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── Options ──────────────────────────────────────────────────────────────
    def set_options(self, options: Optional[Mapping[str, Any]]) -> None:
        """Does: Replace the configuration; compiled matchers are invalidated and every buffer rescans fully."""
        config = MatcherConfig.from_options(options, named_colors=self.named_colors)
        clear_matcher_cache()
        with self._lock:
            self.config = config
            self.matcher = make_matcher(config)
            for state in self._buffers.values():
                state.viewport.reset()
                if not config.tailwind_external and state.request is not None:
                    state.request.cancel()
                    state.request = None
                    state.external = {}
                self._sync_variables(state)
        logger.info("Options updated: %r", config)

    def _sync_variables(self, state: BufferState) -> None:
        if not self.config.sass:
            if state.variables is not None:
                state.variables.close()
                state.variables = None
            return
        if state.variables is None:
            state.variables = SassVariables(
                self.filesystem,
                self.matcher,
                on_change=partial(self._on_variables_changed, state.buffer_id),
            )
            if state.lines:
                state.variables.update(state.path, state.lines)
        else:
            state.variables.matcher = self.matcher

    # ── Scanning ─────────────────────────────────────────────────────────────
    def _state(self, buffer_id: Hashable) -> BufferState:
        state = self._buffers.get(buffer_id)
        return state if state is not None else self.attach_buffer(buffer_id)

    def highlight(self, buffer_id: Hashable, lines: Sequence[str], line_start: int = 0) -> LineMatches:
        """
        Does: Scan `lines` (numbered from `line_start`), merge external colors known
              for those lines, and hand every non-empty line to the consumer.
              A call from line 0 is taken as the whole buffer and remembered for
              later rescans (Sass enabled, imported variables changed).
        Returns: {line_number: [ColorMatch, ...]} for lines with matches.
        """
        state = self._state(buffer_id)
        if line_start == 0:
            state.lines = list(lines)
        return self._scan(state, lines, line_start)

    def _scan(self, state: BufferState, lines: Sequence[str], line_start: int) -> LineMatches:
        matcher = self.matcher
        if matcher is None:
            return {}

        variables = state.variables.definitions if state.variables is not None else None
        results: LineMatches = dict(matcher.scan_lines(lines, line_start, variables))

        line_end = line_start + len(lines)
        for ln, ext in state.external.items():
            if line_start <= ln < line_end:
                results[ln] = merge_matches(results.get(ln, []), ext)

        debug("buffer %r lines %d-%d: %d line(s) highlighted", state.buffer_id, line_start, line_end, len(results))
        for ln in sorted(results):
            self._emit(state.buffer_id, ln, results[ln])
        return results

    def rehighlight(
        self, buffer_id: Hashable, buffer_lines: Sequence[str], visible_range: LineRange
    ) -> LineMatches:
        """Does: Rescan only the part of the visible window the viewport delta says is new."""
        state = self._state(buffer_id)
        state.lines = list(buffer_lines)
        start, end = state.viewport.update(visible_range)
        end = min(end, len(buffer_lines))
        if start >= end:
            return {}
        return self._scan(state, buffer_lines[start:end], start)

    def update_variables(
        self,
        buffer_id: Hashable,
        lines: Sequence[str],
        line_start: int = 0,
        line_end: Optional[int] = None,
    ) -> Mapping[str, str]:
        """Does: Reparse the buffer's Sass declarations (no-op mapping when Sass is off)."""
        state = self._state(buffer_id)
        if line_start == 0 and line_end is None:
            state.lines = list(lines)
        if state.variables is None:
            return {}
        return state.variables.update(state.path, list(lines), line_start, line_end)

    def _on_variables_changed(self, buffer_id: Hashable) -> None:
        state = self._buffers.get(buffer_id)
        if state is None or not state.lines:
            return
        logger.debug("Imported variables changed for buffer %r, rescanning", buffer_id)
        self._scan(state, state.lines, 0)

    # ── External colors ──────────────────────────────────────────────────────
    def request_external_colors(
        self, buffer_id: Hashable, line_range: LineRange
    ) -> Optional[DocumentColorRequest]:
        """
        Does: Start a background request to the attached color source (Tailwind
              'lsp'/'both' modes only). A newer request supersedes older ones.
        Returns: The started request, or None when not applicable.
        """
        if self.color_source is None or not self.config.tailwind_external:
            return None
        with self._lock:
            state = self._state(buffer_id)
            if state.request is not None:
                state.request.cancel()
            state.version += 1
            request = DocumentColorRequest(
                self.color_source,
                line_range,
                state.version,
                partial(self._on_external_colors, buffer_id, line_range),
            )
            state.request = request
        return request.start()

    def _on_external_colors(
        self, buffer_id: Hashable, line_range: LineRange, version: int, matches: LineMatches
    ) -> None:
        start, end = line_range
        with self._lock:
            state = self._buffers.get(buffer_id)
            if state is None or version != state.version:
                debug("discarding stale external colors v%d for %r", version, buffer_id, topic="lsp")
                return
            state.request = None
            # only the requested lines are replaced; colors reported for other lines stay
            external = {ln: m for ln, m in state.external.items() if not start <= ln < end}
            external.update(matches)
            state.external = external
            lines = list(state.lines)
            variables = state.variables.definitions if state.variables is not None else None
        matcher = self.matcher
        for ln in sorted(matches):
            local = matcher.scan(lines[ln], variables) if matcher is not None and ln < len(lines) else []
            self._emit(buffer_id, ln, merge_matches(local, matches[ln]))

    def external_colors(self, buffer_id: Hashable) -> LineMatches:
        state = self._buffers.get(buffer_id)
        return dict(state.external) if state is not None else {}

    # ── Output ───────────────────────────────────────────────────────────────
    def _emit(self, buffer_id: Hashable, line: int, matches: List[ColorMatch]) -> None:
        if self.consumer is not None:
            self.consumer(buffer_id, line, matches)
