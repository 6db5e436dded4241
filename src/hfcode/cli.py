"""hfcode CLI.

This is the stable CLI entrypoint (console-script: ``hfcode``).

  hfcode -c FILE [-o OUT] [-t TABLE] [--compare]   compress
  hfcode -d FILE [-o OUT] [-t TABLE] [--strict]    decompress

Defaults for -o/-t/--strict/--compare come from hfcode.config
(HFCODE_* environment variables, then built-in defaults).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from hfcode import __version__
from hfcode.config import HFCodeConfig, load_config
from hfcode.errors import EXIT_GENERIC, EXIT_IO, HFCodeError


def _run_compress(ns: argparse.Namespace, cfg: HFCodeConfig) -> int:
    from hfcode.codec import compress_file, print_stats

    stats = compress_file(ns.compress, cfg.output_path, cfg.table_path, compare=cfg.compare)
    if not ns.quiet:
        print_stats(stats)
    return 0


def _run_decompress(ns: argparse.Namespace, cfg: HFCodeConfig) -> int:
    from hfcode.codec import decompress_file

    n = decompress_file(ns.decompress, cfg.output_path, cfg.table_path, strict=cfg.strict)
    if not ns.quiet:
        print(f"Decompression done: {cfg.output_path} ({n} byte)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hfcode", description="Huffman code/decode a file (order-0, byte symbols)"
    )
    mode = p.add_mutually_exclusive_group(required=True)
    mode.add_argument("-c", "--compress", type=Path, metavar="FILE", help="Compress FILE")
    mode.add_argument("-d", "--decompress", type=Path, metavar="FILE", help="Decompress FILE")
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Output file path (default: $HFCODE_OUTPUT or ./output.txt)",
    )
    p.add_argument(
        "-t",
        "--codefile",
        type=Path,
        default=None,
        metavar="FILE",
        help="Code table path (default: $HFCODE_TABLE or ./code.txt)",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Decompress: reject trailing bits that are not zero padding",
    )
    p.add_argument(
        "--compare",
        action="store_true",
        default=None,
        help="Compress: also report zlib/zstd ratios on the same input",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Do not print the report")
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        cfg = load_config().with_overrides(
            output_path=ns.output,
            table_path=ns.codefile,
            strict=ns.strict,
            compare=ns.compare,
        )
        if ns.compress is not None:
            return _run_compress(ns, cfg)
        if ns.decompress is not None:
            return _run_decompress(ns, cfg)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HFCodeError as e:
        if ns.debug:
            raise
        print(f"[hfcode] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except OSError as e:
        if ns.debug:
            raise
        print(f"[hfcode] I/O error: {e}", file=sys.stderr)
        return EXIT_IO
    except Exception as e:
        if ns.debug:
            raise
        print(f"[hfcode] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
