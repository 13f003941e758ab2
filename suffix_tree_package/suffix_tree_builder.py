'''One-shot builder turning a string into a finished `SuffixTree`.

`SuffixTreeBuilder` is the public entry point for construction. It validates the input
against its alphabet before anything is allocated, runs the pure Python
`UkkonenEngine` over the string (plus an optional terminator), and hands back a
read-only `SuffixTree`.

A builder performs exactly one build. Any second call to `build()` raises
`BuilderStateError`, including after a failed build: a failed build leaves no usable
tree, and the caller should start over with a fresh builder and corrected input.

Typical usage:

    tree = SuffixTreeBuilder().build("banana")
    tree.find("nan")           # True
    tree.occurrences("ana")    # array([1, 3])
'''
import logging

from .alphabet import Alphabet, LOWERCASE
from .exceptions import BuilderStateError
from .python_backend.node_arena import NodeArena
from .python_backend.ukkonen import UkkonenEngine
from .suffix_tree import SuffixTree

log = logging.getLogger(__name__)

DEFAULT_TERMINATOR = "$"


class SuffixTreeBuilder:
    '''Builds a single suffix tree with Ukkonen's algorithm.

    Attributes:
        alphabet (Alphabet): Symbols accepted in the input string.
        terminator (str | None): Symbol appended after the input so that every suffix
                                 ends at a leaf. None builds the implicit tree instead.
        logger (logging.Logger): Receives the construction trace at DEBUG level.
        max_nodes (int | None): Upper bound on the number of nodes, or None.
        arena (NodeArena | None): Node storage, None until validation has passed.
    '''
    def __init__(self, alphabet: Alphabet = LOWERCASE, terminator: str | None = DEFAULT_TERMINATOR,
                 logger: logging.Logger | None = None, max_nodes: int | None = None):
        """Initializes the builder.

        Args:
            alphabet: Symbols accepted in the input. Defaults to lowercase ASCII letters.
            terminator: A single character outside `alphabet`, or None. Defaults to "$".
            logger: Logger for the construction trace. Defaults to this module's logger.
            max_nodes: Optional cap on the number of nodes the tree may hold.

        Raises:
            ValueError: If the terminator is not a single character or is part of the alphabet,
                        or if `max_nodes` is not positive.
        """
        if not isinstance(alphabet, Alphabet):
            raise TypeError(f"alphabet must be an Alphabet, got {type(alphabet).__name__}.")
        if terminator is not None:
            if not isinstance(terminator, str) or len(terminator) != 1:
                raise ValueError("Terminator must be a single character string.")
            if terminator in alphabet:
                raise ValueError(f"Terminator {terminator!r} must not be part of the alphabet.")
        if max_nodes is not None and max_nodes < 1:
            raise ValueError("max_nodes must be a positive integer or None.")

        self.alphabet = alphabet
        self.terminator = terminator
        self.logger = logger or log
        self.max_nodes = max_nodes
        self.arena: NodeArena | None = None
        self._used = False

    @property
    def node_count(self) -> int:
        """int: Nodes allocated so far (0 before construction has started)."""
        return 0 if self.arena is None else len(self.arena)

    def build(self, string: str) -> SuffixTree:
        """Builds the suffix tree of `string`.

        Args:
            string: Non-empty string over the builder's alphabet.

        Returns:
            The finalized suffix tree.

        Raises:
            BuilderStateError: If this builder has already been used.
            TypeError: If `string` is not a string.
            InputError: If `string` is empty or holds a symbol outside the alphabet.
            InternalInvariantError: If construction reaches an impossible state.
            AllocationError: If node storage runs out.
        """
        if self._used:
            raise BuilderStateError("A SuffixTreeBuilder can only build one tree. Create a new builder.")
        self._used = True

        self.alphabet.validate(string)

        text = string if self.terminator is None else string + self.terminator
        self.arena = NodeArena(capacity=2 * len(text) + 1, max_nodes=self.max_nodes)
        engine = UkkonenEngine(text, self.arena, suffix_count=len(string), logger=self.logger)

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("INDEX (NODE, EDGE, LENGTH) REMAINING")
        engine.run()

        tree = SuffixTree(string, text, self.alphabet, self.terminator, self.arena)
        self.logger.debug("Built suffix tree for %d symbols: %d nodes, %d leaves",
                          len(string), tree.node_count, tree.leaf_count)
        return tree


def build_suffix_tree(string: str, **builder_kwargs) -> SuffixTree:
    """Builds the suffix tree of `string` with a fresh `SuffixTreeBuilder`.

    Args:
        string: The input string.
        **builder_kwargs: Passed on to `SuffixTreeBuilder`.
    """
    return SuffixTreeBuilder(**builder_kwargs).build(string)


# Example usage:
if __name__ == '__main__':
    from .traversal import print_tree

    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    print("SuffixTreeBuilder Example")
    for example in ["banana", "aaaa", "mississippi"]:
        tree = build_suffix_tree(example)
        print(f"\n{tree}")
        print_tree(tree)
        for pattern in ["ana", "ssi", "aa", "xyz"]:
            print(f"Pattern '{pattern}': {tree.occurrences(pattern).tolist()}")
