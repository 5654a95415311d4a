"""Inspect CLI command."""

import argparse
import asyncio
from pathlib import Path


def cmd_inspect(args: argparse.Namespace) -> int:
    from ymlgen.data.discover import is_data_file
    from ymlgen.directives.parser import read_directives
    from ymlgen.errors import ConfigurationError

    path = Path(args.file)
    content = path.read_text(encoding="utf-8")
    if not is_data_file(content):
        print(f"FAIL: {path} is not a ymlgen data file")
        return 1

    try:
        directives = asyncio.run(read_directives(content, path.parent))
    except (ConfigurationError, OSError) as e:
        print(f"FAIL: {path}: {e}")
        return 1

    print(f"{path}")
    print(directives.summary())
    return 0
