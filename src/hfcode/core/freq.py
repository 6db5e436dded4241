from __future__ import annotations

from collections import Counter
from collections.abc import Mapping

# symbol (0..255) -> occorrenze (>= 1)
FreqTable = Mapping[int, int]


def count_frequencies(data: bytes) -> dict[int, int]:
    """Count byte occurrences.

    Only the byte values that actually occur are keys; every count is >= 1.
    Empty input gives an empty table.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes")
    return dict(Counter(bytes(data)))
