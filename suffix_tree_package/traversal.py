'''Depth-first traversal and text dumps of a finished suffix tree.

These helpers only use the public `SuffixTree`/`Node` interface, so renderers and
debugging tools can walk a tree without touching construction internals.

Functions:
    iter_preorder: Generator over (node, depth) pairs in pre-order.
    traverse: Calls a visitor for every node in pre-order.
    format_tree: Multi-line debug dump of a tree.
    print_tree: Writes `format_tree` output to a stream.
'''
import sys
from typing import Callable, Iterator, TextIO

from .suffix_tree import Node, SuffixTree

DUMP_HEADER = "TERMINUS (START, STOP) SUFFIX"


def iter_preorder(tree: SuffixTree) -> Iterator[tuple[Node, int]]:
    """Yields every node of `tree` with its depth, parents before children.

    Children are visited in the tree's fixed symbol order. An explicit stack is used,
    so arbitrarily deep trees can be walked.
    """
    stack = [(tree.root(), 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        # Reversed so the first child is popped first.
        for child in reversed(node.children()):
            stack.append((child, depth + 1))


def traverse(tree: SuffixTree, visitor: Callable[[Node, int], None]) -> None:
    """Calls `visitor(node, depth)` for every node of `tree` in pre-order."""
    for node, depth in iter_preorder(tree):
        visitor(node, depth)


def format_node(tree: SuffixTree, node: Node, depth: int) -> str:
    """Formats one dump line: `terminus (start stop) substring`, indented by depth.

    Internal nodes and the root show -1 as their terminus. A trailing
    `| node -> linked` is added when the node has a suffix link.
    """
    terminus = -1 if node.terminus is None else node.terminus
    line = f"{'| ' * depth}{terminus} ({node.start} {node.stop})"
    label = node.label
    if label:
        line += f" {label}"
    link = node.suffix_link()
    if link is not None:
        line += f" | {node} -> {link}"
    return line


def format_tree(tree: SuffixTree) -> str:
    lines = [DUMP_HEADER]
    for node, depth in iter_preorder(tree):
        lines.append(format_node(tree, node, depth))
    return "\n".join(lines)


def print_tree(tree: SuffixTree, file: TextIO | None = None) -> None:
    print(format_tree(tree), file=file if file is not None else sys.stdout)
