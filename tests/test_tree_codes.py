from __future__ import annotations

import random

import pytest

from hfcode.core.codes import (
    build_code_table,
    find_prefix_violation,
    invert_code_table,
    is_prefix_free,
)
from hfcode.core.freq import count_frequencies
from hfcode.core.tree import HuffmanNode, build_huffman_tree, iter_leaves
from hfcode.errors import InvariantError


def _assert_strict_binary(node: HuffmanNode) -> None:
    if node.is_leaf:
        return
    assert node.left is not None and node.right is not None
    assert node.symbol is None
    assert node.weight == node.left.weight + node.right.weight
    _assert_strict_binary(node.left)
    _assert_strict_binary(node.right)


def _all_zero_leaf(root: HuffmanNode) -> HuffmanNode:
    node = root
    while not node.is_leaf:
        assert node.left is not None
        node = node.left
    return node


def test_count_frequencies() -> None:
    assert count_frequencies(b"") == {}
    assert count_frequencies(b"abracadabra") == {97: 5, 98: 2, 114: 2, 99: 1, 100: 1}
    assert count_frequencies(bytes(range(256))) == {b: 1 for b in range(256)}


def test_count_frequencies_rejects_str() -> None:
    with pytest.raises(TypeError):
        count_frequencies("abc")  # type: ignore[arg-type]


def test_empty_input_tree_is_lone_placeholder() -> None:
    root = build_huffman_tree({})
    assert root.is_placeholder
    assert root.weight == 0
    assert build_code_table(root) == {}


def test_single_symbol_gets_one_bit_code() -> None:
    freq = count_frequencies(b"a" * 1000)
    root = build_huffman_tree(freq)
    _assert_strict_binary(root)
    assert root.weight == 1000
    leaves = list(iter_leaves(root))
    assert len(leaves) == 2
    assert sum(1 for leaf in leaves if leaf.is_placeholder) == 1

    codes = build_code_table(root)
    assert codes == {ord("a"): "1"}


def test_placeholder_never_in_code_table() -> None:
    root = build_huffman_tree(count_frequencies(b"hello world"))
    codes = build_code_table(root)
    assert None not in codes
    assert set(codes) == set(b"hello world")


def test_tree_weights_and_shape() -> None:
    data = b"abracadabra alakazam"
    root = build_huffman_tree(count_frequencies(data))
    _assert_strict_binary(root)
    assert root.weight == len(data)
    real = [leaf for leaf in iter_leaves(root) if not leaf.is_placeholder]
    assert sorted(leaf.symbol for leaf in real) == sorted(set(data))


def test_tree_is_deterministic() -> None:
    freq = {3: 7, 1: 7, 2: 7, 200: 1, 9: 40}
    a = build_code_table(build_huffman_tree(freq))
    b = build_code_table(build_huffman_tree(dict(reversed(list(freq.items())))))
    assert a == b


def test_known_codes_abracadabra() -> None:
    # a:5 b:2 r:2 c:1 d:1 + placeholder:0, equal weights broken by age.
    codes = build_code_table(build_huffman_tree(count_frequencies(b"abracadabra")))
    lengths = {chr(s): len(c) for s, c in codes.items()}
    assert lengths["a"] == 1
    assert sum(len(codes[b]) for b in b"abracadabra") == 24


@pytest.mark.parametrize(
    "freq",
    [
        {1: 1, 2: 2, 3: 2},
        {1: 1, 2: 1, 3: 1, 4: 1},
        {10: 3, 11: 3, 12: 3, 13: 1, 14: 8},
        {b: b + 1 for b in range(256)},
    ],
)
def test_all_zero_path_ends_at_placeholder(freq: dict[int, int]) -> None:
    root = build_huffman_tree(freq)
    assert _all_zero_leaf(root).is_placeholder
    codes = build_code_table(root)
    assert all("1" in c for c in codes.values())


def test_codes_are_prefix_free_on_random_inputs() -> None:
    rng = random.Random(1234)
    for _ in range(50):
        n = rng.randint(1, 2000)
        alphabet = rng.randint(1, 256)
        data = bytes(rng.randrange(alphabet) for _ in range(n))
        codes = build_code_table(build_huffman_tree(count_frequencies(data)))
        assert set(codes) == set(data)
        assert is_prefix_free(list(codes.values()))
        assert all(c and set(c) <= {"0", "1"} for c in codes.values())


def test_cost_against_textbook_example() -> None:
    # Classic weights 45/13/12/16/9/5 cost 224 bits; the zero-weight
    # placeholder merges with f first and adds f's weight once: 229.
    freq = {ord("a"): 45, ord("b"): 13, ord("c"): 12, ord("d"): 16, ord("e"): 9, ord("f"): 5}
    codes = build_code_table(build_huffman_tree(freq))
    assert sum(len(codes[s]) * w for s, w in freq.items()) == 229


def test_build_rejects_bad_frequencies() -> None:
    with pytest.raises(ValueError):
        build_huffman_tree({300: 1})
    with pytest.raises(ValueError):
        build_huffman_tree({65: 0})


def test_code_table_rejects_symbol_root() -> None:
    with pytest.raises(InvariantError):
        build_code_table(HuffmanNode(weight=3, symbol=65))


def test_code_table_rejects_half_node() -> None:
    bad = HuffmanNode(weight=1, left=HuffmanNode(weight=1, symbol=1))
    with pytest.raises(InvariantError):
        build_code_table(bad)


def test_invert_code_table() -> None:
    assert invert_code_table({97: "1", 98: "01"}) == {"1": 97, "01": 98}
    with pytest.raises(InvariantError):
        invert_code_table({97: "1", 98: "1"})


def test_find_prefix_violation() -> None:
    assert find_prefix_violation(["0", "10", "11"]) is None
    assert find_prefix_violation(["10", "0", "101"]) == ("10", "101")
    assert find_prefix_violation({"1": 1, "0": 2, "01": 3}) == ("0", "01")


@pytest.mark.parametrize(
    "freq, expected",
    [
        # equal weights: oldest first, first popped goes left
        ({1: 1, 2: 1, 3: 1}, {1: "01", 2: "10", 3: "11"}),
        # placeholder subtree popped second is still put on the left
        ({1: 1, 2: 2, 3: 2}, {1: "001", 2: "01", 3: "1"}),
    ],
)
def test_tie_break_golden(freq: dict[int, int], expected: dict[int, str]) -> None:
    assert build_code_table(build_huffman_tree(freq)) == expected
