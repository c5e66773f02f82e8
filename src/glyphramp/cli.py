import argparse
import logging
import math
import os
import sys

from glyphramp.charsets import DEFAULT_RAMP, RAMPS
from glyphramp.converter import DEFAULT_ASPECT, DEFAULT_WIDTH, iter_rows, write_rows
from glyphramp.decoder import decode
from glyphramp.errors import ArgumentError, ConfigurationError, GlyphRampError, OutputError
from glyphramp.geometry import plan
from glyphramp.glyphs import validate_ramp
from glyphramp.terminal import output_width

logger = logging.getLogger(__name__)

MIN_ASPECT = 0.05
TERMINAL_MARGIN = 1

EXAMPLES = """\
Examples:
  glyphramp photo.jpg -w 100
  glyphramp photo.jpg -w 80 -a 0.45 -c "MWNXK0Okxol:,. " -o out.txt
  glyphramp logo.png -r blocks --invert
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="glyphramp",
        description="Render an image as text using a dark-to-light glyph ramp",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EXAMPLES,
    )
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        metavar="COLS",
        help=f"Output width in columns (default: terminal width, or {DEFAULT_WIDTH} when not a terminal)",
    )
    parser.add_argument(
        "-a",
        "--aspect",
        type=float,
        default=DEFAULT_ASPECT,
        metavar="RATIO",
        help=f"Character cell width/height ratio (default: {DEFAULT_ASPECT}). "
        "Smaller values give fewer rows.",
    )
    ramp_group = parser.add_mutually_exclusive_group()
    ramp_group.add_argument(
        "-c",
        "--charset",
        default=None,
        metavar="CHARS",
        # argparse %-formats help strings and the default ramp contains "%"
        help=f'Characters from dark to light (default: "{DEFAULT_RAMP.replace("%", "%%")}")',
    )
    ramp_group.add_argument("-r", "--ramp", choices=sorted(RAMPS), default=None, help="Use a named character ramp")
    parser.add_argument(
        "-i", "--invert", action="store_true", default=False, help="Invert mapping (light areas use dense characters)"
    )
    parser.add_argument("-o", "--output", default=None, metavar="PATH", help="Write result to a file instead of stdout")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output to stderr")
    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def _detach_stdout() -> None:
    """Point stdout at devnull so the flush at interpreter exit can't fail again."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def _resolve_ramp(args: argparse.Namespace) -> str:
    if args.ramp is not None:
        return RAMPS[args.ramp]
    if args.charset is not None:
        return validate_ramp(args.charset)
    return DEFAULT_RAMP


def run(args: argparse.Namespace) -> None:
    ramp = _resolve_ramp(args)
    width = args.width
    if width is None:
        # Files don't depend on whatever terminal happens to run the command
        width = DEFAULT_WIDTH if args.output else output_width(DEFAULT_WIDTH, TERMINAL_MARGIN)
    width = max(1, width)
    if not math.isfinite(args.aspect):
        raise ConfigurationError(f"Aspect must be a finite number, got {args.aspect}")
    aspect = max(MIN_ASPECT, args.aspect)

    raster = decode(args.image)
    grid = plan(raster.width, raster.height, width, aspect)
    rows = iter_rows(raster, grid, ramp, args.invert)

    if args.output is None:
        try:
            write_rows(rows, sys.stdout)
            sys.stdout.flush()
        except BrokenPipeError as e:
            _detach_stdout()
            raise OutputError("Output stream closed before all rows were written") from e
        return

    try:
        sink = open(args.output, "w", encoding="utf-8", newline="\n")
    except OSError as e:
        raise OutputError(f"Failed to open output file: {args.output}: {e.strerror or e}") from e
    with sink:
        count = write_rows(rows, sink)
    logger.debug("Wrote %d rows to %s", count, args.output)
    print(f"Wrote ASCII art to: {args.output}", file=sys.stderr)


def main(argv: list[str] | None = None):
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ArgumentError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        sys.exit(1)

    _setup_logging(args.verbose)
    try:
        run(args)
    except GlyphRampError as e:
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
