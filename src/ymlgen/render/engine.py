"""Run one top-level render pass."""

from __future__ import annotations

import logging
from typing import Any

from ymlgen.render.context import RenderContext, TextSink

logger = logging.getLogger(__name__)

_SAME_AS_DATA = object()


async def generate_text(
    data: Any,
    generator: Any,
    *,
    raw_data: Any = _SAME_AS_DATA,
    data_file: str = "",
) -> str:
    """Render ``generator`` against ``data`` with a fresh sink and options.

    Args:
        data: Final (merged) data the generator sees as ``ctx.data``.
        generator: Generator callable or literal text.
        raw_data: Selected data before merging. Defaults to ``data``.
        data_file: Path of the data file being processed.

    Returns:
        Everything written during the pass, joined.
    """
    sink = TextSink()
    context = RenderContext(
        sink,
        data,
        raw_data=data if raw_data is _SAME_AS_DATA else raw_data,
        data_file=data_file,
    )
    await context.write(generator)
    await sink.drain()
    logger.debug("Rendered %d chunk(s) for %s", len(sink.parts), data_file or "<memory>")
    return sink.text()
