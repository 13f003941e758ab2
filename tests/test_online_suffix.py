import random
import sys
import os
import time

import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from suffix_tree_package import Alphabet, SuffixTreeBuilder, InternalInvariantError, iter_preorder
from suffix_tree_package.python_backend.node_arena import NodeArena, OPEN
from suffix_tree_package.python_backend.ukkonen import UkkonenEngine


def generate_random_string(symbols="ab", min_len=1, max_len=60):
    length = random.randint(min_len, max_len)
    return "".join(random.choices(symbols, k=length))


def build(string, symbols="abcdefghijklmnopqrstuvwxyz", terminator="$"):
    return SuffixTreeBuilder(alphabet=Alphabet(symbols), terminator=terminator).build(string)


def walk_suffix(tree, suffix):
    """Follows `suffix` from the root. Returns (node, offset into its edge) or None on a mismatch."""
    node = tree.root()
    position = 0
    offset = 0
    while position < len(suffix):
        node = node.child_at(suffix[position])
        if node is None:
            return None
        label = node.label
        offset = 0
        while offset < len(label) and position < len(suffix):
            if label[offset] != suffix[position]:
                return None
            offset += 1
            position += 1
    return node, offset


def check_tree(tree):
    """Asserts every structural property a finished tree must have."""
    string, text = tree.string, tree.text
    seen = set()
    path_labels = {}
    for node, depth in iter_preorder(tree):
        assert node.index not in seen, "tree must not contain cycles"
        seen.add(node.index)
        for child in node.children():
            path_labels[child.index] = path_labels.get(node.index, "") + child.label

        # Sentinel closure and span well-formedness
        assert node.stop != OPEN
        assert node.stop <= len(text)
        if node.is_root:
            assert (node.start, node.stop) == (0, 0)
            assert depth == 0
        else:
            assert 0 <= node.start < node.stop <= len(text)

        # Children keyed by the first symbol of their edge
        for child in node.children():
            assert node.child_at(child.label[0]) == child

        if node.is_leaf:
            assert node.terminus is not None
        else:
            assert node.terminus is None

    assert len(seen) == tree.node_count

    # A suffix link leads from the path "xA" to the path "A"
    for node, _ in iter_preorder(tree):
        link = node.suffix_link()
        if link is not None:
            assert not node.is_leaf and not node.is_root
            assert path_labels.get(link.index, "") == path_labels[node.index][1:]

    # Suffix coverage and leaf-terminus correspondence
    for i in range(len(string)):
        located = walk_suffix(tree, text[i:])
        assert located is not None, f"suffix {i} of {string!r} missing"
        node, offset = located
        if tree.is_explicit:
            assert node.is_leaf and offset == node.length
            assert node.terminus == i

    if tree.is_explicit:
        assert tree.leaf_termini().tolist() == list(range(len(string)))


def tree_signature(tree):
    return [(node.start, node.stop, node.terminus,
             None if node.suffix_link() is None else node.suffix_link().index)
            for node, _ in iter_preorder(tree)]


def test_banana():
    tree = build("banana")
    check_tree(tree)

    assert tree.leaf_count == 6
    assert tree.node_count == 10
    assert tree.leaf_termini().tolist() == [0, 1, 2, 3, 4, 5]

    root = tree.root()
    a = root.child_at('a')
    assert a.label == "a" and not a.is_leaf
    ana = a.child_at('n')
    assert ana.label == "na" and not ana.is_leaf
    na = root.child_at('n')
    assert na.label == "na" and not na.is_leaf
    assert root.child_at('b').label == "banana$"
    assert root.child_at('$') is None

    # "ana" -> "na" -> "a" -> root
    assert ana.suffix_link() == na
    assert na.suffix_link() == a
    assert a.suffix_link() == root


def test_aaaa():
    tree = build("aaaa")
    check_tree(tree)

    assert tree.leaf_termini().tolist() == [0, 1, 2, 3]

    # Chain of internal nodes for "a", "aa", "aaa"
    chain = []
    node = tree.root().child_at('a')
    while not node.is_leaf:
        chain.append(node)
        assert node.label == "a"
        assert node.child_at('$').terminus == len("aaaa") - len(chain)
        node = node.child_at('a')
    assert len(chain) == 3
    assert node.terminus == 0 and node.label == "a$"

    assert chain[2].suffix_link() == chain[1]
    assert chain[1].suffix_link() == chain[0]
    assert chain[0].suffix_link() == tree.root()


def test_implicit_tree_without_terminator():
    tree = build("banana", terminator=None)
    check_tree(tree)

    assert tree.text == "banana"
    assert sorted(child.label for child in tree.root().children()) == ["anana", "banana", "nana"]
    assert tree.leaf_termini().tolist() == [0, 1, 2]


@pytest.mark.parametrize("string", [
    "a", "ab", "abcabxabcd", "mississippi", "abcdefabxybcdmnabcdex",
    "xabxac", "abababab", "aabaacaad", "dedododeeodo", "cdddcdc",
])
def test_known_strings(string):
    check_tree(build(string))
    check_tree(build(string, terminator=None))


def test_random_binary_strings():
    rng_state = random.getstate()
    random.seed(1234)
    try:
        for _ in range(300):
            string = generate_random_string("ab", 1, 60)
            check_tree(build(string, symbols="ab"))
            check_tree(build(string, symbols="ab", terminator=None))
    finally:
        random.setstate(rng_state)


def test_random_small_alphabet_strings():
    rng_state = random.getstate()
    random.seed(99)
    try:
        for _ in range(200):
            string = generate_random_string("abc", 1, 80)
            check_tree(build(string, symbols="abc"))
    finally:
        random.setstate(rng_state)


def test_active_point_never_overruns_its_edge():
    text = "abcabxabcdabcabxabcdabcd$"
    arena = NodeArena()
    engine = UkkonenEngine(text, arena, suffix_count=len(text) - 1)
    for index in range(len(text)):
        engine.extend(index)
        if engine.active_length > 0:
            child = arena.child(engine.active_node, text[engine.active_edge])
            assert child is not None
            assert engine.active_length < arena.length(child, current_end=index + 1)
    engine.finalize()
    assert engine.remaining == 0


def test_determinism():
    assert tree_signature(build("mississippi")) == tree_signature(build("mississippi"))
    assert tree_signature(build("abab", terminator=None)) == tree_signature(build("abab", terminator=None))


def test_long_input_builds_without_recursion():
    string = "a" * 3000
    tree = build(string)
    assert tree.leaf_count == 3000
    assert tree.node_count == 1 + 3000 + 2999
    assert sum(1 for _ in iter_preorder(tree)) == tree.node_count


def test_engine_phases_must_run_in_order():
    engine = UkkonenEngine("abc", NodeArena())
    engine.extend(0)
    with pytest.raises(InternalInvariantError):
        engine.extend(2)


def test_engine_finalize_preconditions():
    engine = UkkonenEngine("abc", NodeArena())
    engine.extend(0)
    with pytest.raises(InternalInvariantError):
        engine.finalize()

    engine.extend(1)
    engine.extend(2)
    assert engine.finalize() == 3
    with pytest.raises(InternalInvariantError):
        engine.finalize()
    with pytest.raises(InternalInvariantError):
        engine.extend(3)


def test_engine_surfaces_broken_active_point():
    arena = NodeArena()
    engine = UkkonenEngine("aab", arena)
    engine.extend(0)
    engine.extend(1)
    assert engine.active_length == 1

    # Drop the edge the active point sits on
    arena.children[engine.root].clear()
    with pytest.raises(InternalInvariantError):
        engine.extend(2)


def test_engine_needs_empty_arena():
    arena = NodeArena()
    arena.new_node(0, 0)
    with pytest.raises(InternalInvariantError):
        UkkonenEngine("ab", arena)


def run_tests(num_strings=10_000, min_str_len=30, max_str_len=100):
    print(f"Starting tests with {num_strings} strings (length {min_str_len}-{max_str_len})...")
    success_count = 0
    fail_count = 0
    total_time = 0

    for i in range(num_strings):
        test_string = generate_random_string("ab", min_str_len, max_str_len)

        start_time = time.perf_counter()
        try:
            tree = build(test_string, symbols="ab")
        except Exception as e:
            print(f"String {i+1}/{num_strings} FAILED during build for string '{test_string}'. Error: {e}")
            fail_count += 1
            continue
        total_time += (time.perf_counter() - start_time)

        try:
            check_tree(tree)
            success_count += 1
        except AssertionError as e:
            print(f"String {i+1}/{num_strings} FAILED check for string '{test_string}'. Error: {e}")
            fail_count += 1

        if (i + 1) % (num_strings // 100 if num_strings >= 100 else 1) == 0:
            progress = ((i + 1) / num_strings) * 100
            print(f"Progress: {progress:.2f}% ({i+1}/{num_strings}). Success: {success_count}, Fail: {fail_count}")

    print(f"\nTest Summary:")
    print(f"Total strings tested: {num_strings}")
    print(f"Successes: {success_count}")
    print(f"Failures: {fail_count}")
    print(f"Average build time: {total_time/num_strings:.6f}s" if num_strings > 0 else "N/A")

    if fail_count:
        sys.exit(1)


if __name__ == "__main__":
    num_test_strings = 10_000
    min_len = 30
    max_len = 100

    # Allow overriding from command line for quick tests
    if len(sys.argv) > 1:
        try:
            num_test_strings = int(sys.argv[1])
            if len(sys.argv) > 2: min_len = int(sys.argv[2])
            if len(sys.argv) > 3: max_len = int(sys.argv[3])
        except ValueError:
            print("Usage: python test_online_suffix.py [num_strings] [min_len] [max_len]")
            sys.exit(1)

    run_tests(num_strings=num_test_strings, min_str_len=min_len, max_str_len=max_len)
