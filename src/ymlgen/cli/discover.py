"""Discover CLI command."""

import argparse


def cmd_discover(args: argparse.Namespace) -> int:
    from ymlgen.data.discover import discover_data_files

    files = discover_data_files(args.patterns)
    print(f"Found {len(files)} data file(s):\n")
    for path in files:
        print(f"  {path}")
    return 0
