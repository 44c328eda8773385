# src/color_literal_highlighter/highlighting/color/variables/sass.py
"""
sass.py
=======

Does: Track Sass variable declarations of one buffer and of every file it
      imports ('@import' / '@use'), resolve '$a: $b' alias chains, watch
      imported files for changes and prune imports that are no longer reachable.
Returns: SassVariables (one per buffer), Alias, import_candidates(), resolve_alias().
Used By: ColorizerSession (variable decoder for the matcher's '$' branch).

Notes:
- Every write builds new per-file states and a new resolved table, then swaps
  them in under the lock. Readers only ever see a complete table.
- The import graph is pruned by mark-and-sweep from the buffer's own file, so
  mutually importing files cannot keep each other alive.
"""

from __future__ import annotations

import logging
import os
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Tuple, Union

from color_literal_highlighter.highlighting.color.constants import (
    SASS_EXTENSIONS,
    SASS_IMPORT_KEYWORDS,
    SASS_PARTIAL_PREFIX,
)
from color_literal_highlighter.highlighting.color.logic.matcher import Matcher
from color_literal_highlighter.highlighting.general.types import FileSystem, WatchHandle
from color_literal_highlighter.highlighting.general.utils import debug

__all__ = [
    "Alias",
    "Declaration",
    "SassVariables",
    "import_candidates",
    "resolve_alias",
]

logger = logging.getLogger(__name__)

BUFFER_KEY = "<buffer>"

# ── Lexical patterns ─────────────────────────────────────────────────────────
_DECLARATION_RE = re.compile(r"\$([\w-]+)\s*:\s*([^;]+)")
_ALIAS_RE = re.compile(r"\$([\w-]+)")
_FLAGS_RE = re.compile(r"(\s*!(?:default|global))+\s*$")
_LINE_COMMENT_RE = re.compile(r"(?:^|(?<=\s))//.*$")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/")
_DIRECTIVE_RE = re.compile(r"@(\w+)\s*(.*)")
_QUOTED_RE = re.compile(r"""['"]([^'"]+)['"]""")


@dataclass(frozen=True)
class Alias:
    target: str


Declaration = Union[str, Alias]


@dataclass(frozen=True)
class _FileState:
    """Parsed view of one file. Replaced wholesale, never mutated."""

    path: str
    declarations: Mapping[int, Mapping[str, Declaration]] = field(default_factory=dict)
    import_targets: Mapping[int, Tuple[str, ...]] = field(default_factory=dict)
    edges: Tuple[str, ...] = ()

    def targets(self) -> Iterable[str]:
        for ln in sorted(self.import_targets):
            yield from self.import_targets[ln]


# =============================================================================
# 1) PURE HELPERS
# =============================================================================

def import_candidates(importer: str, target: str) -> List[str]:
    """
    Does: Candidate files for an import target, relative to the importing file:
          'dir/name' → dir/name.scss, dir/_name.scss, dir/name.sass, dir/_name.sass.
          A target with an explicit extension tries 'name' and '_name' only.
    """
    folder, name = os.path.split(target)
    if not name:
        return []
    base = os.path.join(os.path.dirname(importer), folder)
    if name.endswith(SASS_EXTENSIONS):
        names = [name, SASS_PARTIAL_PREFIX + name]
    else:
        names = []
        for ext in SASS_EXTENSIONS:
            names.extend([name + ext, SASS_PARTIAL_PREFIX + name + ext])
    return [os.path.normpath(os.path.join(base, n)) for n in names]


def resolve_alias(name: str, merged: Mapping[str, Declaration], limit: int) -> Optional[str]:
    """Does: Follow an alias chain for at most `limit` hops; a missing link or a cycle gives None."""
    decl = merged.get(name)
    hops = 0
    while isinstance(decl, Alias):
        hops += 1
        if hops > limit:
            logger.debug("Alias chain for $%s exceeds %d hops, giving up", name, limit)
            return None
        decl = merged.get(decl.target)
    return decl


def _strip_comments(line: str) -> str:
    line = _BLOCK_COMMENT_RE.sub("", line)
    return _LINE_COMMENT_RE.sub("", line)


def _scan_imports(line: str, pending: bool) -> Tuple[Tuple[str, ...], bool]:
    """Does: Quoted import targets on this line; second item tells whether ';' is still awaited."""
    if pending:
        body = line
    else:
        m = _DIRECTIVE_RE.search(line)
        if not m or m.group(1) not in SASS_IMPORT_KEYWORDS:
            return (), False
        body = m.group(2)
    semi = body.find(";")
    if semi >= 0:
        body = body[:semi]
    return tuple(_QUOTED_RE.findall(body)), semi < 0


# =============================================================================
# 2) PER-BUFFER STATE
# =============================================================================

class SassVariables:
    """Sass declaration tables, import graph and watches of one buffer."""

    def __init__(
        self,
        filesystem: FileSystem,
        matcher: Optional[Matcher] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.filesystem = filesystem
        self.matcher = matcher
        self.on_change = on_change
        self.root: Optional[str] = None
        self._lock = threading.RLock()
        self._files: Dict[str, _FileState] = {}
        self._mtimes: Dict[str, float] = {}
        self._watches: Dict[str, WatchHandle] = {}
        self._definitions: Mapping[str, str] = MappingProxyType({})

    # ── Read side ────────────────────────────────────────────────────────────
    @property
    def definitions(self) -> Mapping[str, str]:
        """Current resolved table (read-only; replaced, never mutated)."""
        return self._definitions

    def resolve(self, name: str) -> Optional[str]:
        return self._definitions.get(name.lstrip("$"))

    @property
    def watched_paths(self) -> FrozenSet[str]:
        return frozenset(self._watches)

    @property
    def files(self) -> FrozenSet[str]:
        return frozenset(self._files)

    def imports_of(self, path: str) -> Dict[str, float]:
        """Does: Import graph edges of `path` → {imported real path: last-modified}."""
        state = self._files.get(self._key(path))
        if state is None:
            return {}
        return {p: self._mtimes[p] for p in state.edges if p in self._mtimes}

    def declarations_of(self, path: str) -> Dict[str, Declaration]:
        state = self._files.get(self._key(path))
        if state is None:
            return {}
        return self._flatten(state)

    # ── Write side ───────────────────────────────────────────────────────────
    def update(
        self,
        path: Optional[str],
        lines: List[str],
        line_start: int = 0,
        line_end: Optional[int] = None,
    ) -> Mapping[str, str]:
        """
        Does: Reparse lines [line_start, line_end) of the buffer's own file
              (line_end=None: everything from line_start to the end of the buffer),
              load new/changed imports, prune unreachable ones, re-resolve.
        Returns: The new resolved table.
        """
        with self._lock:
            key = self._key(path)
            files = dict(self._files)
            if self.root is not None and self.root != key:
                # buffer renamed: the old root is swept with whatever only it imported
                files.pop(self.root, None)
            self.root = key

            def _kept(ln: int) -> bool:
                return ln < line_start or (line_end is not None and ln >= line_end)

            old = files.get(key) or _FileState(key)
            decls = {ln: d for ln, d in old.declarations.items() if _kept(ln)}
            targets = {ln: s for ln, s in old.import_targets.items() if _kept(ln)}
            new_decls, new_targets = self._parse_lines(lines, line_start)
            decls.update(new_decls)
            targets.update(new_targets)

            files[key] = _FileState(key, decls, targets)
            self._load_imports(files, key, frozenset({key}))
            self._commit(files)
            return self._definitions

    def close(self) -> None:
        """Does: Cancel every watch and forget all tables (buffer closed)."""
        with self._lock:
            for path in list(self._watches):
                self._cancel_watch(path)
            self._files = {}
            self._mtimes = {}
            self.root = None
            self._definitions = MappingProxyType({})

    # ── Internals ────────────────────────────────────────────────────────────
    @staticmethod
    def _key(path: Optional[str]) -> str:
        return os.path.realpath(path) if path else BUFFER_KEY

    def _parse_value(self, value: str) -> Optional[Declaration]:
        value = _FLAGS_RE.sub("", value.strip())
        if not value:
            return None
        alias = _ALIAS_RE.fullmatch(value)
        if alias:
            return Alias(alias.group(1))
        if self.matcher is None:
            return None
        result = self.matcher.parse_at(value, 0)
        return result[1] if result else None

    def _parse_lines(
        self, lines: List[str], line_start: int
    ) -> Tuple[Dict[int, Dict[str, Declaration]], Dict[int, Tuple[str, ...]]]:
        decls: Dict[int, Dict[str, Declaration]] = {}
        targets: Dict[int, Tuple[str, ...]] = {}
        pending_import = False
        for offset, raw in enumerate(lines):
            ln = line_start + offset
            line = _strip_comments(raw)

            found: Dict[str, Declaration] = {}
            for m in _DECLARATION_RE.finditer(line):
                decl = self._parse_value(m.group(2))
                if decl is not None:
                    found[m.group(1)] = decl
            if found:
                decls[ln] = found

            imported, pending_import = _scan_imports(line, pending_import)
            if imported:
                targets[ln] = imported
        return decls, targets

    def _load_imports(self, files: Dict[str, _FileState], importer: str, visiting: FrozenSet[str]) -> None:
        """Does: Resolve `importer`'s import targets to files; parse new/changed ones recursively."""
        edges: List[str] = []
        for target in files[importer].targets():
            for cand in import_candidates(importer, target):
                real = os.path.realpath(cand)
                if real == self.root:
                    # the buffer's own file: its lines come from the buffer, never from disk
                    if real not in edges:
                        edges.append(real)
                    continue
                mtime = self.filesystem.stat(cand)
                if mtime is None:
                    self._drop(files, real)
                    continue
                if real not in edges:
                    edges.append(real)
                if real in visiting:
                    continue
                if real in files and self._mtimes.get(real) == mtime:
                    continue
                self._parse_file(files, real, mtime, visiting | {real})

        state = files[importer]
        files[importer] = _FileState(state.path, state.declarations, state.import_targets, tuple(edges))

    def _parse_file(
        self, files: Dict[str, _FileState], path: str, mtime: float, visiting: FrozenSet[str]
    ) -> None:
        try:
            lines = self.filesystem.read_lines(path)
        except OSError as e:
            logger.debug("Import %s unreadable (%s); treating as missing", path, e)
            self._drop(files, path)
            return

        decls, targets = self._parse_lines(lines, 0)
        files[path] = _FileState(path, decls, targets)
        self._mtimes[path] = mtime
        if path not in self._watches:
            self._watches[path] = self.filesystem.watch(path, partial(self._on_file_changed, path))
            debug("watching %s", path, topic="sass")
        self._load_imports(files, path, visiting)

    def _drop(self, files: Dict[str, _FileState], path: str) -> None:
        if files.pop(path, None) is not None:
            debug("dropped import %s", path, topic="sass")
        self._mtimes.pop(path, None)
        self._cancel_watch(path)

    def _cancel_watch(self, path: str) -> None:
        handle = self._watches.pop(path, None)
        if handle is not None:
            handle.cancel()

    def _mark(self, files: Mapping[str, _FileState]) -> List[str]:
        """Does: Files reachable from the root, imports before importers (post-order)."""
        order: List[str] = []
        seen: Set[str] = set()

        def _visit(path: str) -> None:
            if path in seen or path not in files:
                return
            seen.add(path)
            for nxt in files[path].edges:
                _visit(nxt)
            order.append(path)

        if self.root is not None:
            _visit(self.root)
        return order

    @staticmethod
    def _flatten(state: _FileState) -> Dict[str, Declaration]:
        out: Dict[str, Declaration] = {}
        for ln in sorted(state.declarations):
            out.update(state.declarations[ln])
        return out

    def _commit(self, files: Dict[str, _FileState]) -> None:
        """Does: Sweep unreachable files, resolve aliases, swap the new tables in."""
        order = self._mark(files)
        reachable = set(order)
        for path in [p for p in files if p not in reachable]:
            logger.debug("Pruning unreachable import %s", path)
            self._drop(files, path)

        merged: Dict[str, Declaration] = {}
        for path in order:
            merged.update(self._flatten(files[path]))

        limit = len(merged)
        resolved: Dict[str, str] = {}
        for name in merged:
            value = resolve_alias(name, merged, limit)
            if value is not None:
                resolved[name] = value

        self._files = files
        self._definitions = MappingProxyType(resolved)
        debug("resolved %d of %d sass variables", len(resolved), len(merged), topic="sass")

    def _on_file_changed(self, path: str) -> None:
        """Does: Watch callback: reparse only `path`, re-resolve, then notify the consumer."""
        with self._lock:
            if path not in self._watches:
                return
            files = dict(self._files)
            mtime = self.filesystem.stat(path)
            if mtime is None:
                self._drop(files, path)
            else:
                self._parse_file(files, path, mtime, frozenset({path}))
            self._commit(files)
        if self.on_change is not None:
            self.on_change()
