"""Route one generation spec to its output file(s).

A spec whose output pattern contains ``*`` renders once and writes
``<pattern with * = data file base name>``. A pattern containing ``**``
renders once per top-level key of the document and writes
``<pattern with ** = key>``:

    # ymlgen:generator model
    # ymlgen:output models/**.py

    __defaults:        # private: merged into every other key, no file
      base: Model
    user:              # -> models/user.py
      name: str
    order:dataclass:   # -> models/order.py, rendered by the "dataclass" generator
      id: int
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any, Callable

from ymlgen.data.select import merge_data, select_data
from ymlgen.directives.parser import MULTI_WILDCARD, SINGLE_WILDCARD, GenerationSpec
from ymlgen.errors import CollectionRequiredError
from ymlgen.render.engine import generate_text

logger = logging.getLogger(__name__)

PRIVATE_KEY_PREFIX = "__"


async def route_spec(
    spec: GenerationSpec,
    document: Any,
    merge_sources: list[Any],
    *,
    file_name: str,
    resolve_generator: Callable[[str], Any],
    write_file: Callable[..., Any],
    data_file: str = "",
) -> list[str]:
    """Render one spec against the parsed document and write the result.

    Args:
        spec: Generation spec to render.
        document: Parsed data document.
        merge_sources: Values declared by ``merge`` directives.
        file_name: Base name of the data file, substituted for ``*``.
        resolve_generator: ``name -> generator`` (sync or async).
        write_file: ``(name, content, *, skip_if_exist=...)`` writer.
        data_file: Path of the data file, exposed to generators.

    Returns:
        Output names written.
    """
    if document is None:
        logger.warning("No data in %s, skipping generator %s", data_file or file_name, spec.name)
        return []

    generator = await _resolve(resolve_generator, spec.name)

    if spec.is_multi_output:
        return await _route_keys(
            spec, document, merge_sources, generator, resolve_generator, write_file, data_file
        )

    selected = select_data(document, spec.select)
    final = merge_data(*merge_sources, selected)
    text = await generate_text(final, generator, raw_data=selected, data_file=data_file)
    output = spec.output.replace(SINGLE_WILDCARD, file_name, 1)
    await _write(write_file, output, text, spec.skip_if_exist)
    return [output]


async def _route_keys(
    spec: GenerationSpec,
    document: Any,
    merge_sources: list[Any],
    generator: Any,
    resolve_generator: Callable[[str], Any],
    write_file: Callable[..., Any],
    data_file: str,
) -> list[str]:
    if not isinstance(document, Mapping):
        raise CollectionRequiredError(
            f"Output '{spec.output}' needs a mapping document but got {type(document).__name__}",
            context={"generator": spec.name},
        )

    private = {
        key: value for key, value in document.items()
        if str(key).startswith(PRIVATE_KEY_PREFIX)
    }

    async def render_key(key: str, value: Any) -> str:
        output_key, override = (key.split(":") + [""])[:2]
        selected = select_data(value, spec.select)
        final = merge_data(*merge_sources, private, selected)
        key_generator = await _resolve(resolve_generator, override) if override else generator
        text = await generate_text(final, key_generator, raw_data=selected, data_file=data_file)
        output = spec.output.replace(MULTI_WILDCARD, output_key, 1)
        await _write(write_file, output, text, spec.skip_if_exist)
        return output

    keys = [
        (str(key), value) for key, value in document.items()
        if not str(key).startswith(PRIVATE_KEY_PREFIX)
    ]
    results = await asyncio.gather(
        *(render_key(key, value) for key, value in keys),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        raise errors[0]
    return list(results)


async def _resolve(resolve_generator: Callable[[str], Any], name: str) -> Any:
    logger.debug("Resolving generator %s", name)
    generator = resolve_generator(name)
    if inspect.isawaitable(generator):
        generator = await generator
    return generator


async def _write(write_file: Callable[..., Any], output: str, text: str, skip_if_exist: bool) -> None:
    if skip_if_exist:
        result = write_file(output, text, skip_if_exist=True)
    else:
        result = write_file(output, text)
    if inspect.isawaitable(result):
        await result
