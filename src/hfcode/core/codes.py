from __future__ import annotations

from collections.abc import Mapping

from hfcode.core.tree import HuffmanNode
from hfcode.errors import InvariantError

# encode: symbol -> "0101..." ; decode: "0101..." -> symbol
EncodeTable = dict[int, str]
DecodeTable = dict[str, int]


def build_code_table(root: HuffmanNode) -> EncodeTable:
    """Walk the tree depth-first: left edge = '0', right edge = '1'.

    The placeholder leaf is skipped, it never becomes a key. A tree made of
    the placeholder alone (empty input) yields an empty table.
    """
    if root.is_leaf:
        if root.is_placeholder:
            return {}
        raise InvariantError("code table: root is a symbol leaf, no code can be produced")

    codes: EncodeTable = {}

    def dfs(node: HuffmanNode, path: str) -> None:
        # Foglia
        if node.is_leaf:
            if node.symbol is not None:
                codes[node.symbol] = path
            return
        if node.left is None or node.right is None:
            raise InvariantError("code table: internal node with a single child")
        dfs(node.left, path + "0")
        dfs(node.right, path + "1")

    dfs(root, "")
    return codes


def invert_code_table(codes: Mapping[int, str]) -> DecodeTable:
    """symbol -> bits  becomes  bits -> symbol (bits must be unique)."""
    out: DecodeTable = {}
    for sym, bits in codes.items():
        if bits in out:
            raise InvariantError(f"code table: code {bits!r} used by two symbols")
        out[bits] = sym
    return out


def find_prefix_violation(codes: Mapping[str, int] | list[str]) -> tuple[str, str] | None:
    """Return (prefix, code) for the first pair breaking prefix-freeness, else None.

    Sorting puts every code right before the codes it is a prefix of, so
    checking neighbours is enough.
    """
    ordered = sorted(codes)
    for a, b in zip(ordered, ordered[1:]):
        if b.startswith(a):
            return a, b
    return None


def is_prefix_free(codes: Mapping[str, int] | list[str]) -> bool:
    return find_prefix_violation(codes) is None
