"""
Command-line interface.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_CONFIG, config_from_options
from .errors import ConfigurationError
from .generator import generate
from .random_source import make_source

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spgen",
        description="Generate cryptographically random passwords.",
    )
    parser.add_argument(
        "-n",
        "--length",
        type=int,
        default=DEFAULT_CONFIG.length,
        help=f"Password length (default: {DEFAULT_CONFIG.length})",
    )
    parser.add_argument("--no-uppercase", action="store_true", help="Exclude A-Z")
    parser.add_argument("--no-lowercase", action="store_true", help="Exclude a-z")
    parser.add_argument("--no-digits", action="store_true", help="Exclude 0-9")
    parser.add_argument("--no-symbols", action="store_true", help="Exclude symbols")
    parser.add_argument(
        "--avoid-ambiguous",
        action="store_true",
        help="Avoid look-alike characters (0 O 1 l I)",
    )
    parser.add_argument(
        "--exclude",
        default="",
        metavar="CHARS",
        help="Characters never to use, e.g. --exclude '{}[]'",
    )
    parser.add_argument(
        "-c", "--count", type=int, default=1, help="How many passwords to generate"
    )
    parser.add_argument(
        "--source",
        choices=("system", "quantum"),
        default="system",
        help="Random source: OS CSPRNG or simulated qubits (default: system)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the `spgen` console script and `run_spgen.py`.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
    )

    if args.count < 1:
        logger.error("--count must be at least 1")
        return 2

    try:
        config = config_from_options(
            length=args.length,
            uppercase=not args.no_uppercase,
            lowercase=not args.no_lowercase,
            digits=not args.no_digits,
            symbols=not args.no_symbols,
            avoid_ambiguous=args.avoid_ambiguous,
            exclude=args.exclude,
        )
        source = make_source(args.source)
        results = [generate(config, source) for _ in range(args.count)]
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 2

    for result in results:
        print(result.text)
        print(
            f"  Strength: {result.strength.label} "
            f"(entropy {result.entropy_bits:.0f} bits, length {result.length})"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
