from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Optional

from hfcode.errors import InvariantError


# -------------------
# Strutture di base Huffman
# -------------------
@dataclass
class HuffmanNode:
    weight: int
    symbol: Optional[int] = None  # 0-255 per foglie, None per interni e placeholder
    left: Optional["HuffmanNode"] = None
    right: Optional["HuffmanNode"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def is_placeholder(self) -> bool:
        return self.is_leaf and self.symbol is None


def placeholder_leaf() -> HuffmanNode:
    """Zero-weight, symbol-less leaf: guarantees >= 2 leaves for 1-symbol input."""
    return HuffmanNode(weight=0, symbol=None)


def build_huffman_tree(freq: Mapping[int, int]) -> HuffmanNode:
    """Greedy forest merge over a min-heap.

    Heap key: (weight, seq). seq is insertion order: placeholder first, then
    leaves by ascending symbol, then merged nodes as they are created. So
    among equal weights the oldest tree pops first.

    Merge orientation: the first tree popped becomes the LEFT child, except
    that the subtree holding the placeholder always goes LEFT. The placeholder
    therefore sits at the end of the all-zero path: no real symbol gets an
    all-zero code and the zero padding of the last byte never decodes as data.
    """
    counter = itertools.count()
    # (weight, seq, holds_placeholder, node)
    heap: list[tuple[int, int, bool, HuffmanNode]] = []

    heapq.heappush(heap, (0, next(counter), True, placeholder_leaf()))

    for sym in sorted(freq):
        w = int(freq[sym])
        if not (0 <= sym <= 0xFF):
            raise ValueError(f"symbol out of byte range: {sym}")
        if w <= 0:
            raise ValueError(f"weight must be >= 1 for symbol {sym}, got {w}")
        heapq.heappush(heap, (w, next(counter), False, HuffmanNode(weight=w, symbol=sym)))

    while len(heap) > 1:
        w1, _, ph1, n1 = heapq.heappop(heap)
        w2, _, ph2, n2 = heapq.heappop(heap)
        if ph2:
            n1, n2 = n2, n1
        parent = HuffmanNode(weight=w1 + w2, symbol=None, left=n1, right=n2)
        heapq.heappush(heap, (parent.weight, next(counter), ph1 or ph2, parent))

    root = heap[0][3]
    if root.is_leaf and not root.is_placeholder:
        raise InvariantError("huffman tree: lone symbol leaf as root")
    return root


def iter_leaves(root: HuffmanNode) -> Iterator[HuffmanNode]:
    """Yield leaves left to right (placeholder included)."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            yield node
            continue
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)
