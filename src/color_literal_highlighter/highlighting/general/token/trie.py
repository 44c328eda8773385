# src/color_literal_highlighter/highlighting/general/token/trie.py
"""
trie.

Does: Prefix trie over characters. Answers "which registered word is the longest
      prefix of `text` starting at `offset`" in O(length of that word).
Returns: Trie with insert(), longest_prefix(), membership, len() and iteration.
Used by: Matcher compiler (functional-notation prefixes, `0x`) and the named-color parser.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

__all__ = ["TrieNode", "Trie"]


class TrieNode:
    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: dict[str, TrieNode] = {}
        self.terminal = False


class Trie:
    """Longest-prefix matcher. Disambiguation is by match length only, never insertion order."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self.root = TrieNode()
        self._size = 0
        for word in words:
            self.insert(word)

    def insert(self, word: str) -> None:
        if not word:
            return
        node = self.root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = TrieNode()
            node = nxt
        if not node.terminal:
            node.terminal = True
            self._size += 1

    def longest_prefix(self, text: str, offset: int = 0) -> str | None:
        """Does: Walk from `offset`; return the longest registered word found, or None."""
        node = self.root
        last_end = -1
        i = offset
        n = len(text)
        while i < n:
            node = node.children.get(text[i])
            if node is None:
                break
            i += 1
            if node.terminal:
                last_end = i
        if last_end < 0:
            return None
        return text[offset:last_end]

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str) or not word:
            return False
        node = self.root
        for ch in word:
            node = node.children.get(ch)
            if node is None:
                return False
        return node.terminal

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        stack: list[tuple[TrieNode, str]] = [(self.root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.terminal:
                yield prefix
            for ch in sorted(node.children, reverse=True):
                stack.append((node.children[ch], prefix + ch))

    def __repr__(self) -> str:
        return f"Trie(size={self._size})"
