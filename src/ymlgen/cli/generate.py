"""Generate CLI command."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Any, Callable


def cmd_generate(args: argparse.Namespace) -> int:
    from ymlgen.data.discover import discover_data_files
    from ymlgen.paths import generators_dir
    from ymlgen.plugins.resolver import create_generator_resolver

    files = discover_data_files(args.patterns)
    if not files:
        print("No ymlgen data files matched")
        return 0

    resolver = create_generator_resolver(generators_dir(args.config_dir))
    results = asyncio.run(_generate_all(files, resolver, run_hooks=not args.no_hooks))

    failed = 0
    for path, error in results:
        if error is not None:
            print(f"  FAIL {path}: {error}")
            failed += 1

    print(f"\n{len(files) - failed} succeeded, {failed} failed")
    return 1 if failed else 0


async def _generate_all(
    files: list[Path],
    resolver: Callable[[str], Any],
    run_hooks: bool = True,
) -> list[tuple[Path, BaseException | None]]:
    results = await asyncio.gather(
        *(_generate_one(path, resolver, run_hooks) for path in files),
        return_exceptions=True,
    )
    return [
        (path, result if isinstance(result, BaseException) else result.error)
        for path, result in zip(files, results)
    ]


async def _generate_one(path: Path, resolver: Callable[[str], Any], run_hooks: bool):
    from ymlgen.generation.processor import process_file
    from ymlgen.hooks import run_hooks as run_outcome_hooks
    from ymlgen.output.writer import create_file_writer

    content = path.read_text(encoding="utf-8")
    writer = create_file_writer(
        path.parent,
        on_success=lambda generated: print(f"  Generated {generated}"),
    )
    outcome = await process_file(
        path,
        path.stem,
        content,
        resolve_generator=resolver,
        write_file=writer,
    )
    if run_hooks:
        # subprocess.run blocks; run hooks off the event loop
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, run_outcome_hooks, outcome, path.parent)
    return outcome
