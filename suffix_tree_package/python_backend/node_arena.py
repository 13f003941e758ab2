'''Arena storage for suffix tree nodes.

Every node of a suffix tree lives in a single `NodeArena` and is referred to by its
integer index. A node also describes the edge that leads into it from its parent:
the edge label is `text[start:stop]`.

Scalar fields are kept column-wise in numpy arrays that grow by doubling. Children
are kept in one dictionary per node, keyed by symbol, so child lookup is O(1) for
any alphabet size.

Both relations between nodes are plain indices:
- parent -> child (owning): `children[parent][symbol] == child`
- node -> suffix link (non-owning): `suffix_links[node] == target`, or `NO_LINK`

Constants:
    OPEN: `stop` value for an edge that still extends to the current end of the input.
    NO_TERMINUS: `terminus` value for internal nodes and the root.
    NO_LINK: `suffix_links` value for a node without a suffix link.
'''
import numpy as np

from ..exceptions import AllocationError, InternalInvariantError

OPEN = -1
NO_TERMINUS = -1
NO_LINK = -1

ROOT = 0


class NodeArena:
    """Column-oriented storage for the nodes of one suffix tree.

    Attributes:
        starts (np.ndarray): Start index (inclusive) of each node's incoming edge label.
        stops (np.ndarray): Stop index (exclusive) of each incoming edge label, or `OPEN`.
        termini (np.ndarray): Suffix start index for leaves, `NO_TERMINUS` otherwise.
        suffix_links (np.ndarray): Suffix link target of each node, or `NO_LINK`.
        lengths (np.ndarray): Cached edge length, only meaningful once `stop` is closed.
        children (list[dict[str, int]]): Outgoing edges of each node, keyed by first symbol.
        size (int): Number of nodes allocated so far.
        max_nodes (int | None): Hard cap on `size`, or None for no cap.
    """
    __slots__ = ('starts', 'stops', 'termini', 'suffix_links', 'lengths', 'children', 'size', 'max_nodes')

    def __init__(self, capacity: int = 16, max_nodes: int | None = None):
        if capacity < 1:
            raise ValueError("capacity must be a positive integer.")
        if max_nodes is not None and max_nodes < 1:
            raise ValueError("max_nodes must be a positive integer or None.")
        if max_nodes is not None:
            capacity = min(capacity, max_nodes)

        self.starts = np.zeros(capacity, dtype=np.int64)
        self.stops = np.zeros(capacity, dtype=np.int64)
        self.termini = np.full(capacity, NO_TERMINUS, dtype=np.int64)
        self.suffix_links = np.full(capacity, NO_LINK, dtype=np.int64)
        self.lengths = np.zeros(capacity, dtype=np.int64)
        self.children: list[dict[str, int]] = []
        self.size = 0
        self.max_nodes = max_nodes

    @property
    def capacity(self) -> int:
        return len(self.starts)

    def new_node(self, start: int, stop: int, terminus: int = NO_TERMINUS) -> int:
        """Allocates a node for the edge label `text[start:stop]`.

        Args:
            start: Start index of the incoming edge label.
            stop: Stop index of the incoming edge label, or `OPEN`.
            terminus: Suffix start index for a leaf, `NO_TERMINUS` for anything else.

        Returns:
            The index of the new node.

        Raises:
            AllocationError: If `max_nodes` is reached or the arrays cannot grow.
        """
        if self.max_nodes is not None and self.size >= self.max_nodes:
            raise AllocationError(f"Node arena is full ({self.max_nodes} nodes).")
        if self.size == self.capacity:
            self._grow()

        node = self.size
        self.starts[node] = start
        self.stops[node] = stop
        self.termini[node] = terminus
        self.suffix_links[node] = NO_LINK
        self.lengths[node] = 0 if stop == OPEN else stop - start
        self.children.append({})
        self.size += 1
        return node

    def _grow(self) -> None:
        new_capacity = 2 * self.capacity
        if self.max_nodes is not None:
            new_capacity = min(new_capacity, self.max_nodes)
        try:
            self.starts = _extend(self.starts, new_capacity, 0)
            self.stops = _extend(self.stops, new_capacity, 0)
            self.termini = _extend(self.termini, new_capacity, NO_TERMINUS)
            self.suffix_links = _extend(self.suffix_links, new_capacity, NO_LINK)
            self.lengths = _extend(self.lengths, new_capacity, 0)
        except MemoryError as e:
            raise AllocationError(f"Could not grow node arena to {new_capacity} nodes.") from e

    # --- Children ---

    def child(self, node: int, symbol: str) -> int | None:
        return self.children[node].get(symbol)

    def set_child(self, node: int, symbol: str, child: int) -> None:
        self.children[node][symbol] = child

    # --- Suffix links ---

    def suffix_link(self, node: int) -> int | None:
        target = int(self.suffix_links[node])
        return None if target == NO_LINK else target

    def set_suffix_link(self, node: int, target: int) -> None:
        self.suffix_links[node] = target

    # --- Edge span ---

    def start(self, node: int) -> int:
        return int(self.starts[node])

    def set_start(self, node: int, start: int) -> None:
        self.starts[node] = start
        if self.stops[node] != OPEN:
            self.lengths[node] = self.stops[node] - start

    def stop(self, node: int) -> int:
        return int(self.stops[node])

    def set_stop(self, node: int, stop: int) -> None:
        """Sets the stop index of a node's edge and refreshes its cached length."""
        self.stops[node] = stop
        self.lengths[node] = 0 if stop == OPEN else stop - self.starts[node]

    def is_open(self, node: int) -> bool:
        return bool(self.stops[node] == OPEN)

    def terminus(self, node: int) -> int:
        return int(self.termini[node])

    def length(self, node: int, current_end: int | None = None) -> int:
        """Returns the length of the edge leading into `node`.

        An open edge has no fixed length yet: it reaches up to `current_end`, the
        number of input symbols processed so far (current index + 1).

        Raises:
            InternalInvariantError: If the edge is open and no `current_end` was given.
        """
        if self.stops[node] == OPEN:
            if current_end is None:
                raise InternalInvariantError(f"Length of open edge into node {node} read without a current index.")
            return current_end - int(self.starts[node])
        return int(self.lengths[node])

    def close_open_edges(self, end: int) -> int:
        """Replaces every `OPEN` stop with `end`.

        Returns:
            The number of edges that were closed.
        """
        stops = self.stops[:self.size]
        open_mask = stops == OPEN
        stops[open_mask] = end
        self.lengths[:self.size] = stops - self.starts[:self.size]
        return int(np.count_nonzero(open_mask))

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"NodeArena(size={self.size}, capacity={self.capacity})"


def _extend(array: np.ndarray, new_capacity: int, fill: int) -> np.ndarray:
    extended = np.full(new_capacity, fill, dtype=array.dtype)
    extended[:len(array)] = array
    return extended
