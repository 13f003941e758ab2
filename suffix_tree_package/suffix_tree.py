'''Read-only view of a finished suffix tree.

`SuffixTree` wraps the arena produced by a completed build and hands out lightweight
`Node` handles. Nothing in this module mutates the arena, so a finished tree can be
shared by any number of readers.

Children are always reported in a fixed order: alphabet order first, then the
terminator (if the tree has one).
'''
import numpy as np

from .alphabet import Alphabet
from .python_backend.node_arena import NodeArena, NO_TERMINUS, ROOT


class Node:
    """Handle to one node of a `SuffixTree`.

    A node also stands for the edge leading into it, labelled `tree.text[start:stop]`.
    Handles compare equal when they refer to the same node of the same tree.
    """
    __slots__ = ('_tree', 'index')

    def __init__(self, tree: 'SuffixTree', index: int):
        self._tree = tree
        self.index = index

    @property
    def start(self) -> int:
        return self._tree._arena.start(self.index)

    @property
    def stop(self) -> int:
        return self._tree._arena.stop(self.index)

    @property
    def length(self) -> int:
        return self._tree._arena.length(self.index)

    @property
    def terminus(self) -> int | None:
        """int | None: Start index of the suffix this leaf ends, None for internal nodes."""
        terminus = self._tree._arena.terminus(self.index)
        return None if terminus == NO_TERMINUS else terminus

    @property
    def label(self) -> str:
        return self._tree.text[self.start:self.stop]

    @property
    def is_root(self) -> bool:
        return self.index == ROOT

    @property
    def is_leaf(self) -> bool:
        return not self._tree._arena.children[self.index]

    def child_at(self, symbol: str) -> 'Node | None':
        child = self._tree._arena.child(self.index, symbol)
        return None if child is None else Node(self._tree, child)

    def children(self) -> list['Node']:
        """Returns the children of this node in traversal order."""
        edges = self._tree._arena.children[self.index]
        return [Node(self._tree, edges[symbol]) for symbol in sorted(edges, key=self._tree.symbol_order)]

    def suffix_link(self) -> 'Node | None':
        target = self._tree._arena.suffix_link(self.index)
        return None if target is None else Node(self._tree, target)

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and other._tree is self._tree and other.index == self.index

    def __hash__(self) -> int:
        return hash((id(self._tree), self.index))

    def __repr__(self) -> str:
        return f"Node(index={self.index}, start={self.start}, stop={self.stop}, terminus={self.terminus})"

    def __str__(self) -> str:
        return f"node#{self.index}"


class SuffixTree:
    """A finalized suffix tree over `text`.

    Instances are produced by `SuffixTreeBuilder.build()`; they are not meant to be
    constructed directly.

    Attributes:
        string (str): The input string the tree was built for.
        text (str): The indexed text: `string` followed by the terminator, if any.
                    Every edge span indexes into this text.
        alphabet (Alphabet): The alphabet the input was validated against.
        terminator (str | None): The terminator appended to the input, if any.
    """
    def __init__(self, string: str, text: str, alphabet: Alphabet, terminator: str | None, arena: NodeArena):
        self.string = string
        self.text = text
        self.alphabet = alphabet
        self.terminator = terminator
        self._arena = arena

    def root(self) -> Node:
        return Node(self, ROOT)

    def node(self, index: int) -> Node:
        if not 0 <= index < len(self._arena):
            raise IndexError(f"No node with index {index} (tree has {len(self._arena)} nodes).")
        return Node(self, index)

    def symbol_order(self, symbol: str) -> int:
        """Sort key placing alphabet symbols in alphabet order and the terminator last."""
        if symbol in self.alphabet:
            return self.alphabet.rank(symbol)
        return self.alphabet.size

    @property
    def is_explicit(self) -> bool:
        """bool: True if every suffix of `string` ends at its own leaf."""
        return self.terminator is not None

    @property
    def node_count(self) -> int:
        return len(self._arena)

    @property
    def leaf_count(self) -> int:
        return int(np.count_nonzero(self._arena.termini[:len(self._arena)] != NO_TERMINUS))

    def leaves(self) -> list[Node]:
        return [Node(self, int(index)) for index in np.flatnonzero(self._arena.termini[:len(self._arena)] != NO_TERMINUS)]

    def leaf_termini(self) -> np.ndarray:
        """Returns the termini of all leaves, sorted ascending."""
        termini = self._arena.termini[:len(self._arena)]
        return np.sort(termini[termini != NO_TERMINUS])

    def _locate(self, pattern: str) -> tuple[int, int] | None:
        """Follows `pattern` down from the root.

        Returns:
            (node, matched) where `node` is the node whose incoming edge the pattern ends
            on and `matched` the number of symbols of that edge consumed, or None if the
            pattern does not occur.
        """
        arena = self._arena
        node = ROOT
        matched = 0
        position = 0
        while position < len(pattern):
            child = arena.child(node, pattern[position])
            if child is None:
                return None
            start = arena.start(child)
            edge_length = arena.length(child)
            matched = 0
            while matched < edge_length and position < len(pattern):
                if self.text[start + matched] != pattern[position]:
                    return None
                matched += 1
                position += 1
            node = child
        return node, matched

    def find(self, pattern: str) -> bool:
        """Checks if `pattern` occurs as a substring of the input string.

        The empty pattern is always found.
        """
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        if self.terminator is not None and self.terminator in pattern:
            return False
        return self._locate(pattern) is not None

    def occurrences(self, pattern: str) -> np.ndarray:
        """Returns every start index at which `pattern` occurs in the input string.

        Only available on explicit trees (built with a terminator), where every suffix
        ends at a leaf.

        Returns:
            Sorted array of start indices. Empty if the pattern does not occur.
        """
        if not isinstance(pattern, str):
            raise TypeError("Pattern must be a string.")
        if not self.is_explicit:
            raise ValueError("Occurrence lookup needs a tree built with a terminator.")
        if self.terminator in pattern:
            return np.empty(0, dtype=np.int64)
        located = self._locate(pattern)
        if located is None:
            return np.empty(0, dtype=np.int64)

        arena = self._arena
        termini = []
        stack = [located[0]]
        while stack:
            node = stack.pop()
            terminus = arena.terminus(node)
            if terminus != NO_TERMINUS:
                termini.append(terminus)
            stack.extend(arena.children[node].values())
        return np.sort(np.array(termini, dtype=np.int64))

    def __len__(self) -> int:
        return len(self.string)

    def __repr__(self) -> str:
        return f"SuffixTree(string={self.string!r}, nodes={self.node_count}, leaves={self.leaf_count})"
