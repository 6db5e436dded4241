"""hfcode facade: bytes and files.

Compression:   bytes -> frequencies -> tree -> code table -> (packed, table text)
Decompression: table text -> decode table -> packed -> bytes

The packed stream carries no header and no length: the code table file is
required to decode it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hfcode.core.baseline import baseline_ratios
from hfcode.core.bitpack import compression_ratio, pack_bits, unpack_bits
from hfcode.core.codes import EncodeTable, DecodeTable, build_code_table
from hfcode.core.codetable import dump_code_table, load_code_table
from hfcode.core.freq import count_frequencies
from hfcode.core.tree import build_huffman_tree
from hfcode.errors import CodeTableParseError


@dataclass(frozen=True)
class CompressResult:
    packed: bytes
    codes: EncodeTable
    freq: dict[int, int]

    @property
    def original_len(self) -> int:
        return sum(self.freq.values())

    @property
    def bit_length(self) -> int:
        """Encoded bits before padding."""
        return sum(len(self.codes[sym]) * n for sym, n in self.freq.items())

    @property
    def ratio(self) -> float:
        return compression_ratio(len(self.packed), self.original_len)


def compress_bytes(data: bytes) -> CompressResult:
    data = bytes(data)
    freq = count_frequencies(data)
    root = build_huffman_tree(freq)
    codes = build_code_table(root)
    packed = pack_bits(data, codes)
    return CompressResult(packed=packed, codes=codes, freq=freq)


def decompress_bytes(packed: bytes, decode_table: DecodeTable, *, strict: bool = False) -> bytes:
    return unpack_bits(bytes(packed), decode_table, strict=strict)


@dataclass(frozen=True)
class FileStats:
    input_path: Path
    output_path: Path
    table_path: Path
    original_len: int
    packed_len: int
    n_symbols: int
    baselines: dict[str, float] | None = None

    @property
    def ratio(self) -> float:
        return compression_ratio(self.packed_len, self.original_len)


def compress_file(
    input_path: Path, output_path: Path, table_path: Path, *, compare: bool = False
) -> FileStats:
    """Write the code table first, then the packed stream."""
    data = Path(input_path).read_bytes()
    res = compress_bytes(data)

    Path(table_path).write_text(dump_code_table(res.codes), encoding="utf-8")
    Path(output_path).write_bytes(res.packed)

    return FileStats(
        input_path=Path(input_path),
        output_path=Path(output_path),
        table_path=Path(table_path),
        original_len=len(data),
        packed_len=len(res.packed),
        n_symbols=len(res.codes),
        baselines=baseline_ratios(data) if compare else None,
    )


def decompress_file(
    input_path: Path, output_path: Path, table_path: Path, *, strict: bool = False
) -> int:
    """Load + validate the table before touching the output. Returns bytes written."""
    try:
        text = Path(table_path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise CodeTableParseError(f"code table is not valid UTF-8: {e}") from e
    decode_table = load_code_table(text)
    packed = Path(input_path).read_bytes()
    data = decompress_bytes(packed, decode_table, strict=strict)
    Path(output_path).write_bytes(data)
    return len(data)


def print_stats(stats: FileStats) -> None:
    print("=== hfcode compress ===")
    print(f"Input       : {stats.input_path} ({stats.original_len} byte)")
    print(f"Output      : {stats.output_path} ({stats.packed_len} byte)")
    print(f"Code table  : {stats.table_path} ({stats.n_symbols} symbols)")
    if stats.original_len == 0:
        print("Empty input: nothing to measure")
    else:
        print(f"Ratio       : {stats.ratio:.3f} (1.0 = no compression)")
        print(f"Bits/symbol : {stats.ratio * 8:.3f} (8.0 = no compression)")
    if stats.baselines:
        for name in sorted(stats.baselines):
            print(f"  vs {name:<7}: {stats.baselines[name]:.3f}")
    print("=======================")
