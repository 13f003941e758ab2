'''Pure Python implementation of Ukkonen's online suffix tree construction.

This module provides `UkkonenEngine`, which builds a suffix tree into a `NodeArena`
one symbol at a time and then resolves every open edge in a finalization pass.

The engine carries the usual Ukkonen state across phases:
- the active point (`active_node`, `active_edge`, `active_length`), where `active_edge`
  is an index into the text whose symbol selects the outgoing edge of `active_node`
  and `active_length` is how far along that edge the point sits;
- `remaining`, the number of suffixes of the processed prefix that are still only
  implicitly present in the tree.

At the start of every extension in phase `i` the engine checks the invariant
`active_edge + active_length == i` and canonicalizes the active point so that
`active_length` is strictly shorter than the edge it designates, walking down as many
edges as necessary.

Leaves are open (`stop == OPEN`) while the build is running and always carry the start
index of the suffix they end as their terminus. Internal nodes are created only by
splitting an edge; the node below the split keeps its identity, its children and its
terminus, only its `start` moves down.
'''
import logging

from .node_arena import NodeArena, OPEN, ROOT
from ..exceptions import InternalInvariantError

log = logging.getLogger(__name__)


class UkkonenEngine:
    """Builds the suffix tree of `text` into an arena using Ukkonen's algorithm.

    The engine is driven either phase by phase through `extend()` followed by
    `finalize()`, or all at once through `run()`. It does not validate its input:
    callers are expected to have done so (see `SuffixTreeBuilder`).

    Attributes:
        text (str): The full text the tree is built over.
        arena (NodeArena): Node storage. The root is allocated on construction.
        suffix_count (int): Suffixes starting at or after this index get no leaf. Used to
                            keep a trailing terminator from producing a leaf of its own.
        root (int): Index of the root node.
        active_node (int): (Ukkonen) Node from which the active point is measured.
        active_edge (int): (Ukkonen) Text index whose symbol selects the active edge.
        active_length (int): (Ukkonen) Offset of the active point along the active edge.
        remaining (int): (Ukkonen) Suffixes not yet explicitly inserted.
        position (int): Index of the last processed symbol, -1 before the first phase.
        finalized (bool): True once every open edge has been closed.
    """
    def __init__(self, text: str, arena: NodeArena, suffix_count: int | None = None,
                 logger: logging.Logger | None = None):
        self.text = text
        self.arena = arena
        self.suffix_count = len(text) if suffix_count is None else suffix_count
        self.logger = logger or log

        if len(arena) != 0:
            raise InternalInvariantError("The engine needs an empty arena to build into.")
        self.root = arena.new_node(0, 0)
        if self.root != ROOT:
            raise InternalInvariantError(f"Root was allocated at index {self.root} instead of {ROOT}.")

        self.active_node = self.root
        self.active_edge = 0
        self.active_length = 0
        self.remaining = 0
        self.position = -1
        self.finalized = False

    def run(self) -> NodeArena:
        """Processes every symbol of the text and finalizes the tree.

        Returns:
            The arena holding the finished tree.
        """
        for index in range(len(self.text)):
            self.extend(index)
        self.finalize()
        return self.arena

    def extend(self, index: int) -> None:
        """Runs one phase of Ukkonen's algorithm for the symbol at `index`.

        Args:
            index: Position of the symbol to add. Phases must run in order.
        """
        if self.finalized:
            raise InternalInvariantError("Cannot extend a finalized tree.")
        if index != self.position + 1:
            raise InternalInvariantError(f"Phase {index} out of order, expected phase {self.position + 1}.")

        arena = self.arena
        text = self.text
        symbol = text[index]
        current_end = index + 1
        tracing = self.logger.isEnabledFor(logging.DEBUG)

        self.position = index
        self.remaining += 1
        last_split: int | None = None  # Split node from earlier in this phase still waiting for its suffix link

        while self.remaining > 0:
            if self.active_length == 0:
                self.active_edge = index
            else:
                self._canonicalize(current_end)

            if self.active_edge + self.active_length != index:
                raise InternalInvariantError(
                    f"Active point ({self.active_node}, {self.active_edge}, {self.active_length}) "
                    f"does not end at phase {index}.")
            if tracing:
                self._trace(index)

            edge_symbol = text[self.active_edge]
            suffix_start = index - self.remaining + 1
            child = arena.child(self.active_node, edge_symbol)

            if child is None:
                # Rule 2 at a node: the suffix continues nowhere, hang a new leaf here.
                if suffix_start < self.suffix_count:
                    leaf = arena.new_node(index, OPEN, suffix_start)
                    arena.set_child(self.active_node, edge_symbol, leaf)
                if last_split is not None:
                    self._link(last_split, self.active_node)
                    last_split = None
            elif text[arena.start(child) + self.active_length] == symbol:
                # Rule 3: the suffix is already in the tree, and so are all shorter ones.
                if last_split is not None:
                    self._link(last_split, self.active_node)
                self.active_length += 1
                self._canonicalize(current_end)
                break
            else:
                # Rule 2 along an edge: split it and hang a new leaf off the split point.
                split = self._split(child, edge_symbol, index, suffix_start)
                if last_split is not None:
                    self._link(last_split, split)
                last_split = split

            self.remaining -= 1

            # Move the active point to the next shorter suffix.
            if self.active_node == self.root:
                if self.active_length > 0:
                    self.active_length -= 1
                    self.active_edge = index - self.remaining + 1
            else:
                target = arena.suffix_link(self.active_node)
                self.active_node = self.root if target is None else target

    def _split(self, child: int, edge_symbol: str, index: int, suffix_start: int) -> int:
        """Splits the edge into `child` at the active point.

        Returns:
            The new internal node sitting at the split point.
        """
        arena = self.arena
        edge_start = arena.start(child)
        split_at = edge_start + self.active_length

        split = arena.new_node(edge_start, split_at)
        arena.set_child(self.active_node, edge_symbol, split)

        arena.set_start(child, split_at)
        arena.set_child(split, self.text[split_at], child)

        leaf = arena.new_node(index, OPEN, suffix_start)
        arena.set_child(split, self.text[index], leaf)
        return split

    def _canonicalize(self, current_end: int) -> None:
        """Walks the active point down until its offset lies strictly inside an edge.

        A single step can cross several edge boundaries after a suffix link has been
        followed, so this keeps descending for as long as the offset reaches the end of
        the designated edge.

        Raises:
            InternalInvariantError: If the active point designates an edge that does not exist.
        """
        arena = self.arena
        while self.active_length > 0:
            child = arena.child(self.active_node, self.text[self.active_edge])
            if child is None:
                raise InternalInvariantError(
                    f"Active point ({self.active_node}, {self.active_edge}, {self.active_length}) "
                    f"designates a missing edge {self.text[self.active_edge]!r}.")
            edge_length = arena.length(child, current_end)
            if self.active_length < edge_length:
                return
            self.active_node = child
            self.active_edge += edge_length
            self.active_length -= edge_length

    def _link(self, node: int, target: int) -> None:
        self.arena.set_suffix_link(node, target)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("%s -> %s", _node_name(node), _node_name(target))

    def _trace(self, index: int) -> None:
        edge = self.text[self.active_edge] if self.active_length > 0 else '-'
        self.logger.debug("%d (%s, %s, %d) %d", index, _node_name(self.active_node), edge,
                          self.active_length, self.remaining)

    def finalize(self) -> int:
        """Closes every open edge at the end of the text.

        This is a single sweep over the arena rather than a walk down the tree, so
        long inputs cannot run into recursion limits.

        Returns:
            The number of edges that were closed.

        Raises:
            InternalInvariantError: If not every symbol has been processed, or if the
                                    tree was already finalized.
        """
        if self.finalized:
            raise InternalInvariantError("The tree has already been finalized.")
        if self.position != len(self.text) - 1:
            raise InternalInvariantError(
                f"Cannot finalize after {self.position + 1} of {len(self.text)} symbols.")
        if self.suffix_count < len(self.text) and self.remaining != 0:
            raise InternalInvariantError(
                f"{self.remaining} suffixes are still implicit after the terminator was processed.")

        closed = self.arena.close_open_edges(len(self.text))
        self.finalized = True
        return closed


def _node_name(node: int) -> str:
    return f"node#{node}"
