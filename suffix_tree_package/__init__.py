'''Initialize the suffix_tree_package, exposing the builder, the read-only tree and its helpers.'''

from .alphabet import Alphabet, LOWERCASE
from .exceptions import (
    SuffixTreeError, InputError, InternalInvariantError,
    AllocationError, BuilderStateError
)
from .suffix_tree import Node, SuffixTree
from .suffix_tree_builder import SuffixTreeBuilder, build_suffix_tree
from .traversal import iter_preorder, traverse, format_tree, print_tree

__all__ = [
    'Alphabet', 'LOWERCASE',
    'SuffixTreeError', 'InputError', 'InternalInvariantError',
    'AllocationError', 'BuilderStateError',
    'Node', 'SuffixTree',
    'SuffixTreeBuilder', 'build_suffix_tree',
    'iter_preorder', 'traverse', 'format_tree', 'print_tree'
]
