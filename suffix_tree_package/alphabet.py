'''Ordered symbol sets used to validate input strings and to order children.'''
import string as _string

from .exceptions import InputError


class Alphabet:
    """A fixed, ordered set of single-character symbols.

    The order of `symbols` is the order in which children are visited during traversal.
    Lookups go through a dictionary, so the alphabet may be as large as needed.

    Attributes:
        symbols (str): The symbols, in traversal order.
    """
    __slots__ = ('symbols', '_ranks')

    def __init__(self, symbols: str = _string.ascii_lowercase):
        if not isinstance(symbols, str) or not symbols:
            raise ValueError("An alphabet needs at least one symbol.")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Alphabet symbols must be unique, got '{symbols}'.")
        self.symbols = symbols
        self._ranks = {symbol: rank for rank, symbol in enumerate(symbols)}

    @property
    def size(self) -> int:
        return len(self.symbols)

    def rank(self, symbol: str) -> int:
        """Returns the position of `symbol` in the alphabet.

        Raises:
            KeyError: If `symbol` is not part of the alphabet.
        """
        return self._ranks[symbol]

    def validate(self, text: str) -> None:
        """Checks that `text` is non-empty and made only of alphabet symbols.

        Raises:
            TypeError: If `text` is not a string.
            InputError: If `text` is empty or contains a foreign symbol. The error
                        reports the first offending index.
        """
        if not isinstance(text, str):
            raise TypeError(f"Input must be a string, got {type(text).__name__}.")
        if not text:
            raise InputError("Cannot build a suffix tree for an empty string.")
        for index, symbol in enumerate(text):
            if symbol not in self._ranks:
                raise InputError(f"Symbol {symbol!r} at index {index} is not in the alphabet '{self.symbols}'.",
                                 index=index, symbol=symbol)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._ranks

    def __len__(self) -> int:
        return len(self.symbols)

    def __eq__(self, other) -> bool:
        return isinstance(other, Alphabet) and other.symbols == self.symbols

    def __hash__(self) -> int:
        return hash(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self.symbols!r})"


LOWERCASE = Alphabet()
