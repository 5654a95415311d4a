"""Process one data file: directives, data, every generation spec."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from ymlgen.data.reader import parse_document
from ymlgen.directives.parser import read_directives, strip_directives
from ymlgen.generation.router import route_spec

logger = logging.getLogger(__name__)


@dataclass
class ProcessOutcome:
    """Result of processing one data file."""

    on_success: str = ""
    on_fail: str = ""
    on_done: str = ""
    error: BaseException | None = None
    written: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def summary(self) -> str:
        lines = [f"Generated {len(self.written)} file(s)"]
        for name in self.written:
            lines.append(f"  {name}")
        if self.error is not None:
            lines.append(f"Error: {self.error}")
        return "\n".join(lines)


async def process_file(
    data_file: Path | str,
    file_name: str,
    content: str,
    *,
    resolve_generator: Callable[[str], Any],
    write_file: Callable[..., Any],
    read_merge_source: Callable[[Path | str, str], Any] | None = None,
    resolve_unknown_directive: Callable[[str, str], bool] | None = None,
    working_dir: Path | str | None = None,
) -> ProcessOutcome:
    """Parse, select, merge, render, and write everything a data file declares.

    Every generation spec runs concurrently. A failing spec doesn't stop
    the others; the first failure (in declaration order) is reported in
    the outcome.

    Args:
        data_file: Path of the data file.
        file_name: Base name substituted for ``*`` in output patterns.
        content: Raw data file text.
        resolve_generator: ``name -> generator`` (sync or async).
        write_file: ``(name, content, *, skip_if_exist=...)`` writer.
        read_merge_source: Reader for ``merge`` directives.
        resolve_unknown_directive: Hook accepting non-built-in directives.
        working_dir: Directory merge references resolve against.
            Defaults to the data file's directory.

    Returns:
        ProcessOutcome with lifecycle hooks, written names, and error.

    Raises:
        ConfigurationError: If the directives are invalid. Nothing is
            rendered in that case.
    """
    directory = Path(working_dir) if working_dir is not None else Path(data_file).parent
    directives = await read_directives(
        content,
        directory,
        read_merge_source=read_merge_source,
        resolve_unknown_directive=resolve_unknown_directive,
    )
    outcome = ProcessOutcome(
        on_success=directives.on_success,
        on_fail=directives.on_fail,
        on_done=directives.on_done,
    )

    try:
        document = parse_document(strip_directives(content))
    except yaml.YAMLError as e:
        outcome.error = e
        return outcome

    logger.debug("Processing %s with %d generator(s)", data_file, len(directives.specs))
    results = await asyncio.gather(
        *(
            route_spec(
                spec,
                document,
                directives.merge_data,
                file_name=file_name,
                resolve_generator=resolve_generator,
                write_file=write_file,
                data_file=str(data_file),
            )
            for spec in directives.specs
        ),
        return_exceptions=True,
    )

    for spec, result in zip(directives.specs, results):
        if isinstance(result, BaseException):
            logger.debug("Generator %s failed for %s: %s", spec.name, data_file, result)
            if outcome.error is None:
                outcome.error = result
        else:
            outcome.written.extend(result)

    return outcome
