"""Command-line interface for pictoprime."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pictoprime.imaging.ascii import format_prime
from pictoprime.search.prime_search import PrimeSearchResult, find_prime
from pictoprime.search.settings import SearchSettings
from pictoprime.utils.log import setup_logger

logger = logging.getLogger(__name__)


def _load_settings(args: argparse.Namespace) -> SearchSettings:
    if args.settings:
        return SearchSettings.load(args.settings)
    return SearchSettings()


def _run_search(digits: str, args: argparse.Namespace) -> int:
    settings = _load_settings(args)

    result = find_prime(
        digits,
        find_sophie_companion=args.sophie,
        confidence=args.confidence,
        settings=settings,
        workers=args.workers,
        seed=args.seed,
        progress=args.progress,
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_prime(result.prime, args.width))
        print()
        print_summary(result)
    return 0


def print_summary(result: PrimeSearchResult) -> None:
    print(f"Attempts:        {result.attempts}")
    print(f"Simultaneous:    {result.workers}")
    print(f"Distinct tested: {result.distinct_tested}")
    if result.companion is not None:
        print(f"Sophie Germain:  {result.companion}")
    print(f"Time:            {result.elapsed * 1000:.0f} ms")


def cmd_number(args: argparse.Namespace) -> int:
    """Search for a prime near a digit string."""
    logger.info("Searching from %d digits", len(args.digits))
    return _run_search(args.digits, args)


def cmd_image(args: argparse.Namespace) -> int:
    """Convert an image to digits and search for a prime near them."""
    from pictoprime.imaging.ascii import image_to_digits, load_image

    image = load_image(Path(args.path))
    digits = image_to_digits(image, width=args.width, contrast=args.contrast)

    logger.info(format_prime(digits, args.width))
    logger.info("")

    # a leading zero does not survive as a number
    digits = digits.lstrip("0")
    if len(digits) < 2:
        print("Image is too bright to produce a number")
        return 1

    return _run_search(digits, args)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Find probable primes whose digits draw a picture",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--sophie", action="store_true",
                        help="Also search for an almost Sophie Germain companion")
    common.add_argument("--confidence", type=int, default=None,
                        help="Primality confidence: false positives <= 2^-N "
                             "(default: from settings, 40)")
    common.add_argument("--settings", default=None, help="JSON settings file")
    common.add_argument("--workers", type=int, default=None,
                        help="Parallel workers (default: CPU count)")
    common.add_argument("--seed", type=int, default=None, help="Random seed")
    common.add_argument("--width", type=int, default=32, help="Digits per output line")
    common.add_argument("--progress", action="store_true", help="Show a round counter")
    common.add_argument("--json", action="store_true", help="Print the result as JSON")
    common.add_argument("--log-file", default=None, help="Write a debug log to this file")
    common.add_argument("--verbose", "-v", action="store_true", help="Show debug messages")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    number_parser = subparsers.add_parser("number", parents=[common],
                                          help="Search from a digit string")
    number_parser.add_argument("digits", help="Source digits")

    image_parser = subparsers.add_parser("image", parents=[common],
                                         help="Search from an image file")
    image_parser.add_argument("path", help="Image file")
    image_parser.add_argument("--contrast", type=float, default=0.9,
                              help="Contrast scale factor")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logger(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_path=Path(args.log_file) if args.log_file else None,
    )

    commands = {
        "number": cmd_number,
        "image": cmd_image,
    }

    try:
        return commands[args.command](args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
