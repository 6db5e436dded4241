from __future__ import annotations

import zlib
from dataclasses import dataclass

import zstandard as zstd

from hfcode.core.bitpack import compression_ratio


class BaselineZlib:
    """zlib/DEFLATE byte codec (reference only, no external deps)."""

    codec_id: str = "zlib"

    def __init__(self, level: int = 9):
        if not (0 <= level <= 9):
            raise ValueError(f"zlib level must be 0..9, got {level}")
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(bytes(data), self.level)


@dataclass
class BaselineZstd:
    """
    zstd byte codec (reference only).

    "tight" drops the optional frame fields (content size, checksum) so the
    size is closer to the raw entropy-coded payload.
    """

    level: int = 19
    codec_id: str = "zstd"
    tight: bool = True

    def compress(self, data: bytes) -> bytes:
        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))
        return c.compress(bytes(data))


def baseline_ratios(data: bytes) -> dict[str, float]:
    """Ratios (compressed/original) of general purpose codecs on the same input."""
    out: dict[str, float] = {}
    for codec in (BaselineZlib(), BaselineZstd()):
        out[codec.codec_id] = compression_ratio(len(codec.compress(data)), len(data))
    return out
