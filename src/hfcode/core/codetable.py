"""Persisted code table (text).

Layout, one record per line::

    <symbol>:<bits>\\n

- ``<bits>``: one or more ASCII '0'/'1'.
- ``<symbol>``: the character itself for printable ASCII (0x20..0x7E, but not
  the backslash), otherwise the escape ``\\xNN`` (two lowercase hex digits).
  On read, any single character below U+0100 is accepted too.
- Records are split on the LAST ':' so ':' is a valid symbol.
- Written in ascending symbol order, so equal tables give equal files.

Output is pure ASCII, hence valid UTF-8.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from hfcode.core.codes import DecodeTable, find_prefix_violation
from hfcode.errors import CodeTableParseError, InvariantError

SEPARATOR = ":"
_BINARY = frozenset("01")
_ESCAPE = re.compile(r"\\x([0-9a-fA-F]{2})")


def _symbol_to_text(sym: int) -> str:
    if 0x20 <= sym <= 0x7E and sym != 0x5C:
        return chr(sym)
    return f"\\x{sym:02x}"


def _symbol_from_text(field: str, lineno: int) -> int:
    if len(field) == 1:
        cp = ord(field)
        if cp > 0xFF:
            raise CodeTableParseError(f"symbol {field!r} is not a byte value", lineno)
        return cp
    if field.startswith("\\x"):
        m = _ESCAPE.fullmatch(field)
        if m is None:
            raise CodeTableParseError(f"bad escape {field!r} (expected \\xNN)", lineno)
        return int(m.group(1), 16)
    if not field:
        raise CodeTableParseError("empty symbol field", lineno)
    raise CodeTableParseError(f"symbol field must be one character, got {field!r}", lineno)


def dump_code_table(codes: Mapping[int, str]) -> str:
    """Encode table (symbol -> bits) -> text."""
    lines: list[str] = []
    for sym in sorted(codes):
        bits = codes[sym]
        if not bits or not set(bits) <= _BINARY:
            raise InvariantError(f"invalid code for symbol {sym}: {bits!r}")
        lines.append(f"{_symbol_to_text(sym)}{SEPARATOR}{bits}\n")
    return "".join(lines)


def parse_code_table_lines(lines: Iterable[str]) -> DecodeTable:
    """Parse records into a decode table (bits -> symbol).

    Blank lines are skipped. Fails with CodeTableParseError on the first bad
    record, or when the resulting table is not prefix-free.
    """
    table: DecodeTable = {}
    seen: dict[int, str] = {}
    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line:
            continue
        sym_field, sep, bits = line.rpartition(SEPARATOR)
        if not sep:
            raise CodeTableParseError(f"missing '{SEPARATOR}' separator in {line!r}", lineno)
        sym = _symbol_from_text(sym_field, lineno)
        if not bits:
            raise CodeTableParseError("empty code", lineno)
        bad = set(bits) - _BINARY
        if bad:
            raise CodeTableParseError(
                f"code contains non-binary characters: {''.join(sorted(bad))!r}", lineno
            )
        if sym in seen:
            raise CodeTableParseError(f"duplicate symbol 0x{sym:02x}", lineno)
        if bits in table:
            raise CodeTableParseError(f"duplicate code {bits!r}", lineno)
        seen[sym] = bits
        table[bits] = sym

    clash = find_prefix_violation(table)
    if clash is not None:
        raise CodeTableParseError(f"code {clash[0]!r} is a prefix of {clash[1]!r}")
    return table


def load_code_table(text: str) -> DecodeTable:
    """Text -> decode table (bits -> symbol)."""
    return parse_code_table_lines(text.split("\n"))
