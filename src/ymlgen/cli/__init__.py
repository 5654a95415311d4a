"""Command-line interface for ymlgen.

Usage:
    ymlgen generate <pattern>... [--config-dir DIR] [--no-hooks]
    ymlgen discover <pattern>...
    ymlgen inspect <file>
"""

import argparse
import logging
import sys

from ymlgen.cli.discover import cmd_discover
from ymlgen.cli.generate import cmd_generate
from ymlgen.cli.inspect_cmd import cmd_inspect


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ymlgen",
        description="Generate text files from annotated YAML data files",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate output for matching data files")
    gen.add_argument("patterns", nargs="+", help="Glob pattern(s) for YAML data files")
    gen.add_argument(
        "--config-dir", "-c", default=None,
        help="Config directory (default: $YMLGEN_CONFIG_DIR or ./.ymlgen)",
    )
    gen.add_argument(
        "--no-hooks", action="store_true",
        help="Don't run success/fail/done hooks",
    )

    disc = sub.add_parser("discover", help="List data files matching patterns")
    disc.add_argument("patterns", nargs="+", help="Glob pattern(s)")

    ins = sub.add_parser("inspect", help="Show the directives of a data file")
    ins.add_argument("file", help="Path to a data file")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        "generate": cmd_generate,
        "discover": cmd_discover,
        "inspect": cmd_inspect,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
