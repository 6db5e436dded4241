"""Typed errors for hfcode.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (`python -m hfcode.errors`).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_IO = 11
EXIT_PARSE = 12
EXIT_MISSING_CODE = 13
EXIT_CORRUPT = 14


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid HFCODE_* variable)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (broken invariant, unexpected error)"),
    ExitCodeInfo(EXIT_IO, "IO", "Cannot open/read/write the input, output or code table file"),
    ExitCodeInfo(EXIT_PARSE, "PARSE", "Malformed code table file"),
    ExitCodeInfo(EXIT_MISSING_CODE, "MISSING_CODE", "A byte of the input has no entry in the code table"),
    ExitCodeInfo(EXIT_CORRUPT, "CORRUPT", "Packed stream rejected (strict mode: bad trailing bits)"),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/hfcode/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python -m hfcode.errors`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HFCodeError` and carry an `exit_code`.\n")
    lines.append("- `OSError` raised while touching files is reported as `IO`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HFCodeError(Exception):
    """Base error for hfcode."""

    exit_code: int = EXIT_GENERIC


class UsageError(HFCodeError):
    exit_code = EXIT_USAGE


class InvariantError(HFCodeError):
    """Internal construction invariant broken (tree/code table)."""

    exit_code = EXIT_GENERIC


class ParseError(HFCodeError):
    exit_code = EXIT_PARSE


class CodeTableParseError(ParseError):
    """A code table record could not be parsed.

    ``lineno`` is 1-based, or None when the error is not tied to a single line.
    """

    exit_code = EXIT_PARSE

    def __init__(self, message: str, lineno: int | None = None):
        self.lineno = lineno
        if lineno is not None:
            message = f"code table line {lineno}: {message}"
        super().__init__(message)


class MissingCode(HFCodeError):
    exit_code = EXIT_MISSING_CODE

    def __init__(self, symbol: int):
        self.symbol = symbol
        super().__init__(f"no code for byte 0x{symbol:02x} in code table")


class CorruptPayload(HFCodeError):
    exit_code = EXIT_CORRUPT


class TrailingBitsError(CorruptPayload):
    pass


# ---------------
# docs generator
# ---------------

DEFAULT_DOC_PATH = Path("docs") / "exit_codes.md"


def write_exit_codes_doc(path: Path = DEFAULT_DOC_PATH) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_exit_codes_markdown(), encoding="utf-8")
    return path


def main(argv: list[str] | None = None) -> int:
    """``python -m hfcode.errors [OUT.md]`` (default: docs/exit_codes.md)."""
    args = list(sys.argv[1:] if argv is None else argv)
    out = write_exit_codes_doc(Path(args[0]) if args else DEFAULT_DOC_PATH)
    print(f"[hfcode] wrote {out}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
