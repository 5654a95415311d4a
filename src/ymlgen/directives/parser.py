"""Parse directive comment lines into a generation plan.

Directive lines look like::

    # ymlgen:generator model
    # ymlgen:output *.py
    # ymlgen:generator { name: schema, output: 'schema/**.json', select: types }
    # ymlgen:merge ../shared/defaults.yml

Built-in directives are ``output``, ``generator``, ``select``, ``merge``,
``success``, ``fail`` and ``done``. Anything else is offered to an optional
resolver and rejected if it declines.
"""

from __future__ import annotations

import inspect
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from ymlgen.data.reader import read_merge_source as _default_merge_reader
from ymlgen.errors import ConfigurationError, UnknownDirectiveError

logger = logging.getLogger(__name__)

_DIRECTIVE_PATTERN = re.compile(r"^[ \t]*# ymlgen:(\S+) (.+)$", re.MULTILINE)

SINGLE_WILDCARD = "*"
MULTI_WILDCARD = "**"


@dataclass(frozen=True)
class GenerationSpec:
    """One declared (generator, output pattern, select path) triple."""

    name: str
    output: str
    select: str = ""
    skip_if_exist: bool = False

    @property
    def is_multi_output(self) -> bool:
        return MULTI_WILDCARD in self.output


@dataclass
class DirectiveSet:
    """Everything the directive lines of one data file declare."""

    specs: list[GenerationSpec] = field(default_factory=list)
    merge_data: list[Any] = field(default_factory=list)
    on_success: str = ""
    on_fail: str = ""
    on_done: str = ""

    def summary(self) -> str:
        lines = [f"Generation specs: {len(self.specs)}"]
        for spec in self.specs:
            mode = "multi" if spec.is_multi_output else "single"
            select = spec.select or "<root>"
            lines.append(f"  {spec.name} -> {spec.output} ({mode}, select: {select})")
        if self.merge_data:
            lines.append(f"Merge sources: {len(self.merge_data)}")
        for label, hook in (("success", self.on_success), ("fail", self.on_fail), ("done", self.on_done)):
            if hook:
                lines.append(f"On {label}: {hook}")
        return "\n".join(lines)


def scan_directives(content: str) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs for every directive line, in order."""
    return [(m.group(1), m.group(2).strip()) for m in _DIRECTIVE_PATTERN.finditer(content)]


def strip_directives(content: str) -> str:
    """Remove directive lines so only the data document remains."""
    return _DIRECTIVE_PATTERN.sub("", content)


async def read_directives(
    content: str,
    directory: Path | str = "",
    *,
    read_merge_source: Callable[[Path | str, str], Any] | None = None,
    resolve_unknown_directive: Callable[[str, str], bool] | None = None,
) -> DirectiveSet:
    """Parse the directives of a data file.

    Args:
        content: Raw data file text.
        directory: Directory merge references are resolved against.
        read_merge_source: ``(directory, reference) -> value``, sync or async.
            Defaults to reading JSON/YAML from disk.
        resolve_unknown_directive: ``(name, value) -> bool``; returning
            False (or being absent) rejects the directive.

    Returns:
        DirectiveSet with at least one GenerationSpec.

    Raises:
        ConfigurationError: Missing output, no generators, bad inline spec.
        UnknownDirectiveError: A directive nobody accepts.
    """
    reader = read_merge_source or _default_merge_reader
    result = DirectiveSet()
    default_output = ""
    default_generator = ""
    default_select = ""

    for name, value in scan_directives(content):
        logger.debug("Directive %s: %s", name, value)
        if name == "output":
            default_output = value
        elif name == "select":
            default_select = value
        elif name == "generator":
            if value.startswith("{") and value.endswith("}"):
                result.specs.append(_parse_inline_generator(value))
            else:
                default_generator = value
        elif name == "merge":
            data = reader(directory, value)
            if inspect.isawaitable(data):
                data = await data
            result.merge_data.append(data)
        elif name == "success":
            result.on_success = value
        elif name == "fail":
            result.on_fail = value
        elif name == "done":
            result.on_done = value
        elif resolve_unknown_directive is None or not resolve_unknown_directive(name, value):
            raise UnknownDirectiveError(
                f"Invalid directive ymlgen:{name}",
                context={"directive": name, "value": value},
            )

    if default_generator:
        if not default_output:
            raise ConfigurationError("No ymlgen:output directive found")
        result.specs.append(_make_spec(default_generator, default_output, default_select))

    if not result.specs:
        raise ConfigurationError("No ymlgen:generator directive found")

    return result


def _parse_inline_generator(value: str) -> GenerationSpec:
    try:
        raw = yaml.safe_load(value)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Malformed inline generator: {value}") from e

    if not isinstance(raw, dict) or not raw.get("name"):
        raise ConfigurationError(f"Inline generator needs a name: {value}")
    if not raw.get("output"):
        raise ConfigurationError(f"Inline generator '{raw['name']}' has no output")

    return _make_spec(
        str(raw["name"]),
        str(raw["output"]),
        str(raw.get("select") or ""),
        bool(raw.get("skipIfExist", False)),
    )


def _make_spec(name: str, output: str, select: str, skip_if_exist: bool = False) -> GenerationSpec:
    if SINGLE_WILDCARD not in output:
        raise ConfigurationError(
            f"Output pattern '{output}' for generator '{name}' has no '*' wildcard"
        )
    return GenerationSpec(name=name, output=output, select=select, skip_if_exist=skip_if_exist)
