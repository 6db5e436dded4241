from __future__ import annotations

from collections.abc import Mapping

from hfcode.errors import MissingCode, TrailingBitsError

# byte -> its 8 bits, MSB first
_BYTE_BITS: tuple[str, ...] = tuple(format(b, "08b") for b in range(256))


def encode_bits(data: bytes, codes: Mapping[int, str]) -> str:
    """Concatenate the code of every byte, in input order."""
    try:
        return "".join([codes[b] for b in data])
    except KeyError as e:
        raise MissingCode(int(e.args[0])) from None


def pack_bits(data: bytes, codes: Mapping[int, str]) -> bytes:
    """
    data -> packed stream.

    Bit i of each group of 8 lands on bit (7 - i) of the output byte (MSB
    first). The last byte is padded on the right with zero bits. No header,
    no length, no padding indicator.
    """
    if not data:
        return b""
    bits = encode_bits(data, codes)
    return bits_to_bytes(bits)


def bits_to_bytes(bits: str) -> bytes:
    if not bits:
        return b""
    n_bytes = (len(bits) + 7) // 8
    pad = n_bytes * 8 - len(bits)
    return (int(bits, 2) << pad).to_bytes(n_bytes, "big")


def bytes_to_bits(packed: bytes) -> str:
    return "".join([_BYTE_BITS[b] for b in packed])


def unpack_bits(packed: bytes, decode_table: Mapping[str, int], *, strict: bool = False) -> bytes:
    """
    Greedy prefix scan: grow a window one bit at a time and emit a symbol as
    soon as the window is a key of ``decode_table``.

    A trailing window that never matched is the padding of the last byte and
    is dropped. With ``strict=True`` it must also be shorter than 8 bits and
    all zeros, otherwise TrailingBitsError.
    """
    out = bytearray()
    window = ""
    for bit in bytes_to_bits(packed):
        window += bit
        sym = decode_table.get(window)
        if sym is not None:
            out.append(sym)
            window = ""

    if strict and window:
        if len(window) >= 8:
            raise TrailingBitsError(
                f"packed stream: {len(window)} undecodable trailing bits (max 7 allowed)"
            )
        if "1" in window:
            raise TrailingBitsError(f"packed stream: non-zero padding bits {window!r}")

    return bytes(out)


def compression_ratio(packed_len: int, original_len: int) -> float:
    """packed / original; 0.0 for empty input. Informational only."""
    if original_len <= 0:
        return 0.0
    return packed_len / original_len
