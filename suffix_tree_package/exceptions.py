'''Exception types raised while validating input for, building, or querying a suffix tree.

All errors derive from `SuffixTreeError` so callers can catch the whole family at once.
Each concrete error also derives from the closest built-in exception, so code that only
expects a `ValueError` or `MemoryError` keeps working.
'''


class SuffixTreeError(Exception):
    """Base class for every error raised by this package."""
    pass


class InputError(SuffixTreeError, ValueError):
    """Raised when the input string cannot be built into a tree.

    This covers an empty string and any symbol outside the configured alphabet.
    It is always raised before a single node is allocated.

    Attributes:
        index (int | None): Position of the offending symbol, or None for an empty string.
        symbol (str | None): The offending symbol, or None for an empty string.
    """
    def __init__(self, message: str, index: int | None = None, symbol: str | None = None):
        super().__init__(message)
        self.index = index
        self.symbol = symbol


class InternalInvariantError(SuffixTreeError, RuntimeError):
    """Raised when the construction engine reaches a state that should be impossible.

    This is a defect, not a recoverable condition. The partially built tree is discarded.
    """
    pass


class AllocationError(SuffixTreeError, MemoryError):
    """Raised when node storage cannot grow any further."""
    pass


class BuilderStateError(SuffixTreeError, RuntimeError):
    """Raised when a one-shot builder is asked to build a second tree."""
    pass
