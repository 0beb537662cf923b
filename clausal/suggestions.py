"""
"Did you mean" support for unknown command tokens.

SuggestionIndex keeps every registered command name in a character trie.
Two deterministic rules nominate candidates for an unknown token:

- prefix: the token is walked down the trie as far as its characters match;
  when at least PREFIX characters matched, every name below the deepest node
  reached is a candidate ("inztolll" → "install", "info");
- similarity: names whose difflib ratio against the token reaches CUTOFF are
  candidates too, which catches typos past the first character.

Candidates are returned once each, in registration order. A token sharing no
prefix and no similarity with any name yields an empty list.
"""
import difflib

CUTOFF = 0.6
"""Minimum difflib.SequenceMatcher ratio for a similarity match (difflib's own default)."""

PREFIX = 2
"""Matched characters needed before the prefix rule nominates names (a lone "-" or letter is too weak)."""


class _Node:
    __slots__ = ("children", "terminal")

    def __init__(self):
        self.children = {}
        self.terminal = False


class SuggestionIndex:
    """Incremental index over command names answering suggest(token)."""

    def __init__(self, names=(), /):
        self._root = _Node()
        self._order = {}
        for name in names:
            self.add(name)

    def add(self, name, /):
        """Register a name; registering it again keeps its first position."""
        if not isinstance(name, str) or not name:
            raise TypeError("add() argument must be a non-empty string")
        if name in self._order:
            return
        self._order[name] = len(self._order)
        node = self._root
        for char in name:
            node = node.children.setdefault(char, _Node())
        node.terminal = True

    def clear(self):
        self._root = _Node()
        self._order.clear()

    def _walk(self, token):
        """Return (node, depth) for the deepest trie node matching a prefix of token."""
        node, depth = self._root, 0
        for char in token:
            try:
                node = node.children[char]
            except KeyError:
                break
            depth += 1
        return node, depth

    def _collect(self, node, prefix):
        stack = [(node, prefix)]
        while stack:
            node, prefix = stack.pop()
            if node.terminal:
                yield prefix
            for char, child in node.children.items():
                stack.append((child, prefix + char))

    def suggest(self, token, /):
        """Return the registered names the user most likely meant by token."""
        if not isinstance(token, str):
            raise TypeError("suggest() argument must be a string")
        candidates = set()

        node, depth = self._walk(token)
        if depth >= PREFIX:
            candidates.update(self._collect(node, token[:depth]))

        candidates.update(difflib.get_close_matches(token, self._order.keys(), n=len(self._order) or 1, cutoff=CUTOFF))

        return sorted(candidates, key=self._order.__getitem__)

    def __contains__(self, name):
        return name in self._order

    def __iter__(self):
        return iter(self._order)

    def __len__(self):
        return len(self._order)

    def __repr__(self):
        return f"suggestion-index({list(self._order)!r})"


__all__ = (
    "SuggestionIndex",
    "CUTOFF",
    "PREFIX",
)
