"""
Command line front end: wrap a text with reportlab metrics and show how it
would be truncated with a "Show more" label.
"""

import argparse
import logging
import sys

from .config import PLATFORM_COMPENSATION, TruncationOptions, load_options
from .measurement import DEFAULT_FONT_NAME, DEFAULT_FONT_SIZE, measure_lines
from .truncation import TruncationEngine

_LOGGER = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="show-more-text",
        description="Estimate how a text is truncated to a number of lines with a 'Show more' label",
    )
    parser.add_argument("text", help="Text to truncate, or '-' to read it from stdin")
    parser.add_argument("--width", type=float, required=True, help="Container width in points")
    parser.add_argument("--lines", type=int, default=3, help="Maximum number of lines (default: 3)")
    parser.add_argument(
        "--font", default=DEFAULT_FONT_NAME, help=f"reportlab font name (default: {DEFAULT_FONT_NAME})"
    )
    parser.add_argument(
        "--font-size",
        type=float,
        default=DEFAULT_FONT_SIZE,
        help=f"Font size in points (default: {DEFAULT_FONT_SIZE})",
    )
    parser.add_argument("--config", help="JSON file with truncation options")
    parser.add_argument(
        "--platform",
        choices=sorted(PLATFORM_COMPENSATION),
        help="Host platform, selects the default compensation",
    )
    parser.add_argument("--compensation", type=int, help="Extra safety margin in character widths")
    parser.add_argument("--monospaced", action="store_true", help="Font is monospaced")
    parser.add_argument("--short-chars", default="", help="Extra characters with short width")
    parser.add_argument("--long-chars", default="", help="Extra characters with long width")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def options_from_args(args):
    """Merge --config file values with command line overrides."""
    values = {}
    if args.config:
        base = load_options(args.config)
        values = {
            "read_more_text": base.read_more_text,
            "read_less_text": base.read_less_text,
            "compensation_units": base.compensation_units,
            "is_monospaced": base.is_monospaced,
            "short_characters": base.short_characters,
            "long_characters": base.long_characters,
            "platform": base.platform,
        }
    if args.platform:
        values["platform"] = args.platform
        if args.compensation is None:
            values["compensation_units"] = None
    if args.compensation is not None:
        values["compensation_units"] = args.compensation
    if args.monospaced:
        values["is_monospaced"] = True
    if args.short_chars:
        values["short_characters"] = tuple(values.get("short_characters", ())) + tuple(args.short_chars)
    if args.long_chars:
        values["long_characters"] = tuple(values.get("long_characters", ())) + tuple(args.long_chars)
    return TruncationOptions(**values)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = sys.stdin.read() if args.text == "-" else args.text

    try:
        options = options_from_args(args)
        lines = measure_lines(text, args.width, args.font, args.font_size)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        print(f"Error: unknown font {e}", file=sys.stderr)
        return 2
    _LOGGER.debug("Using options %s", options)

    engine = TruncationEngine.with_cache(options)
    state = engine.begin(text, args.lines, style_key=(args.font, args.font_size))
    state = engine.measure(state, args.width, lines)

    print(f"Lines: {len(lines)} (limit {state.max_lines})")
    print(f"Needs truncation: {'yes' if state.needs_truncation else 'no'}")
    print(engine.rendered_text(state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
