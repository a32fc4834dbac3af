"""Command-line tool for converting tablature between formats.

Usage:
    tabconv convert <input> [--from ascii|sif|json] [--to ascii|alphatex|json]
    tabconv chords <input> [--from ascii|sif|json]
    tabconv example [sif|alphatex]

Examples:
    tabconv convert testdata/verse.sif --title "Upside Down"
    tabconv convert testdata/riff.txt --to json --pretty -o riff.json
    tabconv chords testdata/verse.sif
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable

from tabconv.alphatex import ALPHATEX_EXAMPLE, AlphaTexOptions, tablature_to_alphatex
from tabconv.ascii_tab import parse_ascii_tab, tablature_to_ascii
from tabconv.chords import chord_changes
from tabconv.logger import setup_logger
from tabconv.models import Tablature
from tabconv.sif import SIF_EXAMPLE, parse_sif

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("ascii", "sif", "json")
OUTPUT_FORMATS = ("ascii", "alphatex", "json")

SUFFIX_FORMATS: dict[str, str] = {".sif": "sif", ".json": "json"}

VERBOSE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"


def parse_json(text: str) -> Tablature:
    """Load a tablature from its JSON payload.

    Raises
    ------
    ValueError
        If the text is not JSON or not a valid payload.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise ValueError(msg) from e
    return Tablature.from_dict(data)


PARSERS: dict[str, Callable[[str], Tablature | None]] = {
    "ascii": parse_ascii_tab,
    "sif": parse_sif,
    "json": parse_json,
}


def guess_format(path: str) -> str:
    """Pick an input format from a file name.

    Examples
    --------
    >>> guess_format("verse.sif")
    'sif'
    >>> guess_format("riff.txt")
    'ascii'
    """
    return SUFFIX_FORMATS.get(Path(path).suffix.lower(), "ascii")


def read_input(source: str) -> str:
    """Read input text from a file, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def load_tablature(source: str, input_format: str | None) -> Tablature | None:
    """Read and parse an input file.

    Parameters
    ----------
    source : str
        File path or ``-``.
    input_format : str | None
        One of INPUT_FORMATS, or None to guess from the file name.

    Returns
    -------
    Tablature | None
        The parsed tablature, or None if nothing could be parsed.
    """
    fmt = input_format or guess_format(source)
    logger.debug("Reading %s as %s", source, fmt)
    return PARSERS[fmt](read_input(source))


def render(tablature: Tablature, output_format: str, args: argparse.Namespace) -> str:
    """Render a tablature in the requested output format."""
    if output_format == "ascii":
        return tablature_to_ascii(tablature)
    if output_format == "json":
        indent = 2 if args.pretty else None
        return json.dumps(tablature.to_dict(), indent=indent, ensure_ascii=False)
    options = AlphaTexOptions(title=args.title, artist=args.artist, tempo=args.tempo)
    return tablature_to_alphatex(tablature, options)


def _load_or_report(args: argparse.Namespace) -> Tablature | None:
    if args.input != "-" and not Path(args.input).exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return None

    try:
        tablature = load_tablature(args.input, args.input_format)
    except ValueError as e:
        print(f"Error parsing file: {e}", file=sys.stderr)
        return None

    if tablature is None:
        print(f"Error: No tablature found in {args.input}", file=sys.stderr)
    return tablature


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert the input to another format."""
    tablature = _load_or_report(args)
    if tablature is None:
        return 1

    output = render(tablature, args.output_format, args)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %d measures to %s", len(tablature.measures), args.output)
    else:
        print(output)

    return 0


def cmd_chords(args: argparse.Namespace) -> int:
    """Print the chord changes of the input."""
    tablature = _load_or_report(args)
    if tablature is None:
        return 1

    for change in chord_changes(tablature):
        spelled = change.chord.to_harte() if change.chord is not None else "?"
        print(f"{change.measure}:{change.beat} {change.label} {spelled}")

    return 0


def cmd_example(args: argparse.Namespace) -> int:
    """Print a built-in sample document."""
    print(SIF_EXAMPLE.rstrip("\n") if args.kind == "sif" else ALPHATEX_EXAMPLE)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``tabconv`` command."""
    parser = argparse.ArgumentParser(
        prog="tabconv",
        description="Convert guitar tablature between ASCII tab, SIF and alphaTex",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s convert testdata/verse.sif --title "Upside Down"
  %(prog)s convert testdata/riff.txt --to json --pretty
  %(prog)s chords testdata/verse.sif
  %(prog)s example sif
        """,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert a tablature file")
    convert.add_argument("input", help="Input file, or - for stdin")
    convert.add_argument(
        "--from",
        dest="input_format",
        choices=INPUT_FORMATS,
        default=None,
        help="Input format (default: guessed from the file suffix)",
    )
    convert.add_argument(
        "--to",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="alphatex",
        help="Output format (default: alphatex)",
    )
    convert.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output file (default: stdout)",
    )
    convert.add_argument("--title", default=None, help="alphaTex title")
    convert.add_argument("--artist", default=None, help="alphaTex artist")
    convert.add_argument("--tempo", type=int, default=None, help="alphaTex tempo override")
    convert.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    convert.set_defaults(func=cmd_convert)

    chords = subparsers.add_parser("chords", help="List chord changes")
    chords.add_argument("input", help="Input file, or - for stdin")
    chords.add_argument("--from", dest="input_format", choices=INPUT_FORMATS, default=None)
    chords.set_defaults(func=cmd_chords)

    example = subparsers.add_parser("example", help="Print a sample document")
    example.add_argument("kind", nargs="?", choices=("sif", "alphatex"), default="sif")
    example.set_defaults(func=cmd_example)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        setup_logger(logging.DEBUG, VERBOSE_LOG_FORMAT)
    else:
        setup_logger(logging.INFO)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
