"""Higher-order generators: ``each`` iterates, ``use`` embeds."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Callable

from ymlgen.errors import CollectionRequiredError

_EACH_OPTIONS = ("sep", "start", "end", "alt", "extra")


def use(data: Any, generator: Any) -> Callable[..., Any]:
    """Render ``generator`` against a context whose data is ``data``.

    ``use(None, g)`` renders ``g`` with ``data`` set to None; pass the
    current data explicitly to keep it.
    """

    def render_use(context):
        return context.extends(data).write(generator)

    return render_use


def each(
    data: Any,
    generator: Any,
    options: Mapping[str, Any] | None = None,
    *,
    sep: Any = None,
    start: Any = None,
    end: Any = None,
    alt: Any = None,
    extra: Mapping[str, Any] | None = None,
) -> Callable[..., Any]:
    """Render ``generator`` once per entry of a mapping or sequence.

    Each entry is rendered against a context whose ``data`` is the entry
    value and whose ``key`` is the mapping key or sequence index.

    Args:
        data: Mapping or sequence to iterate.
        generator: Generator for each entry.
        options: Mapping form of the keyword options below.
        sep: Rendered before every entry but the first, with that entry's context.
        start: Rendered once before the first entry, against ``data``.
        end: Rendered only when ``data`` is empty, against ``data``.
        alt: Used instead of ``generator`` for odd positions.
        extra: Extra values visible to every context this creates.

    Returns:
        A generator callable; it raises CollectionRequiredError when run
        over anything that is not a mapping or sequence.
    """
    if options:
        unknown = set(options) - set(_EACH_OPTIONS)
        if unknown:
            raise ValueError(f"Unknown each option(s): {', '.join(sorted(unknown))}")
        sep = options.get("sep", sep)
        start = options.get("start", start)
        end = options.get("end", end)
        alt = options.get("alt", alt)
        extra = options.get("extra", extra)
    extras = dict(extra or {})

    async def render_each(context):
        position = -1
        for position, (key, value) in enumerate(_entries(data)):
            if position == 0 and start is not None:
                await context.extends(data, extras).write(start)

            entry_extras = {**extras, "key": key}
            if position > 0 and sep is not None:
                await context.extends(value, entry_extras).write(sep)

            entry_generator = alt if position % 2 and alt is not None else generator
            await context.extends(value, entry_extras).write(entry_generator)

        if position < 0 and end is not None:
            await context.extends(data, extras).write(end)

    return render_each


def _entries(data: Any) -> list[tuple[Any, Any]]:
    if isinstance(data, Mapping):
        return list(data.items())
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        return list(enumerate(data))
    raise CollectionRequiredError(
        f"each requires a mapping or sequence for rendering but got {type(data).__name__}",
        context={"type": type(data).__name__},
    )
