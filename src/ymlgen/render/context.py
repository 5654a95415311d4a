"""Render context protocol.

A generator is any callable taking a ``RenderContext``. It produces text
only through the context's write operations:

    async def generate(ctx):
        ctx.configure(auto_trim="all")
        await ctx.write()(
            "class ", ctx.data["name"], ":\n",
            ctx.each(ctx.data["fields"], field, sep="\n"), "\n",
        )

Every context of one render pass appends to the same ``TextSink`` and
shares one ``RenderOptions`` record. ``extends`` derives child contexts;
it never changes the parent.
"""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Callable

AUTO_TRIM_ALL = "all"
AUTO_TRIM_START_END = "start-end"


def to_text(value: Any) -> str:
    """Stringify a written value; ``None`` becomes the empty string."""
    return "" if value is None else str(value)


@dataclass(frozen=True)
class TextGenerator:
    """A generator-shaped value: literal text or a callable over a context."""

    kind: str
    text: str = ""
    fn: Callable[..., Any] | None = None

    @classmethod
    def of(cls, value: Any) -> TextGenerator:
        if isinstance(value, TextGenerator):
            return value
        if callable(value):
            return cls(kind="callable", fn=value)
        return cls(kind="literal", text=to_text(value))

    def render(self, context: RenderContext) -> Any:
        if self.kind == "callable":
            return self.fn(context)
        return self.text


class _Completed:
    """Awaitable returned by writes that finished without suspending."""

    def __await__(self):
        return iter(())


COMPLETED = _Completed()


class TrackedWrite:
    """Awaitable handle on a write that continues in a task.

    Awaiting the handle (or reading its result) marks the write as
    observed; the awaiting code then owns any failure.
    """

    def __init__(self, task: asyncio.Future) -> None:
        self.task = task
        self.observed = False

    def __await__(self):
        self.observed = True
        return self.task.__await__()

    def done(self) -> bool:
        return self.task.done()

    def result(self) -> Any:
        self.observed = True
        return self.task.result()


def _settled(result: Any) -> tuple[bool, Any]:
    if isinstance(result, _Completed):
        return True, None
    if isinstance(result, TrackedWrite) or asyncio.isfuture(result):
        if result.done():
            return True, result.result()
    return False, result


class TextSink:
    """Shared output buffer of one render pass.

    Writes that suspend continue in tasks tracked here so the pass can
    wait for all of them before the text is collected.
    """

    def __init__(self) -> None:
        self.parts: list[str] = []
        self._pending: list[TrackedWrite] = []

    def append(self, text: str) -> None:
        self.parts.append(text)

    def defer(self, coro) -> TrackedWrite:
        write = TrackedWrite(asyncio.ensure_future(coro))
        self._pending.append(write)
        return write

    async def drain(self) -> None:
        """Wait for every tracked write, re-raising the first unobserved failure."""
        errors: list[BaseException] = []
        while self._pending:
            batch, self._pending = self._pending, []
            results = await asyncio.gather(*(w.task for w in batch), return_exceptions=True)
            errors.extend(
                r for w, r in zip(batch, results)
                if isinstance(r, BaseException) and not w.observed
            )
        if errors:
            raise errors[0]

    def text(self) -> str:
        return "".join(self.parts)


@dataclass
class RenderOptions:
    """Options shared by every context of a render pass."""

    # False, "all" (trim computed template values) or "start-end"/True
    # (trim the outer edges of a template)
    auto_trim: str | bool = False

    def update(self, values: Mapping[str, Any]) -> None:
        known = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in known:
                raise ValueError(f"Unknown render option: {name}")
            setattr(self, name, value)


class RenderContext:
    """Evaluation state handed to generator functions.

    Attributes:
        data: Value the generator renders (after merging).
        raw_data: Selected value before merge data was applied.
        sink: Text buffer shared by the whole render pass.
        options: Options record shared by the whole render pass.
        data_file: Path of the data file being processed.

    Extra values injected through ``extends``/``each(extra=...)`` are
    readable as attributes, e.g. ``ctx.rootData``.
    """

    def __init__(
        self,
        sink: TextSink,
        data: Any = None,
        *,
        raw_data: Any = None,
        options: RenderOptions | None = None,
        extras: Mapping[str, Any] | None = None,
        data_file: str = "",
    ) -> None:
        self.sink = sink
        self.data = data
        self.raw_data = raw_data
        self.options = options if options is not None else RenderOptions()
        self.data_file = data_file
        self._extras = dict(extras or {})
        # Extras handed to contexts created by later extends() calls
        self._pending_extras = dict(self._extras)

    def __getattr__(self, name: str) -> Any:
        extras = self.__dict__.get("_extras", {})
        if name in extras:
            return extras[name]
        raise AttributeError(f"RenderContext has no attribute or extra value '{name}'")

    def __repr__(self) -> str:
        return f"RenderContext(data={self.data!r}, key={self.key!r}, extras={sorted(self._extras)})"

    @property
    def key(self) -> Any:
        """Entry key for contexts created by ``each``; None otherwise."""
        return self._extras.get("key")

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self._extras)

    def get(self, name: str, default: Any = None) -> Any:
        return self._extras.get(name, default)

    def extends(self, data: Any, extra: Mapping[str, Any] | None = None) -> RenderContext:
        """Derive a context with new data, sharing sink and options."""
        return RenderContext(
            self.sink,
            data,
            raw_data=self.raw_data,
            options=self.options,
            extras={**self._pending_extras, **(extra or {})},
            data_file=self.data_file,
        )

    def extra(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Add extras for contexts derived from this one from now on.

        This context's own extras and contexts already derived from it
        are not affected.
        """
        self._pending_extras.update(values or {}, **kwargs)

    def configure(self, options: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        """Update the render options shared by the whole pass."""
        self.options.update({**(options or {}), **kwargs})

    def write(self, *values: Any) -> Any:
        """Append values to the sink, left to right.

        Callables are invoked with this context and their (awaited) result
        is appended. Called without arguments, returns a template function
        taking ``fragment, value, fragment, ..., fragment``.

        Returns:
            An awaitable that completes once every value has been written.
        """
        if not values:
            return self._template
        return self._emit([(TextGenerator.of(value), False) for value in values])

    def each(self, data: Any, generator: Any, options: Mapping[str, Any] | None = None, **kwargs: Any):
        from ymlgen.render.combinators import each

        return each(data, generator, options, **kwargs)

    def use(self, data: Any, generator: Any):
        from ymlgen.render.combinators import use

        return use(data, generator)

    def _template(self, *parts: Any) -> Any:
        # Even positions are literal fragments, odd positions computed values
        last = len(parts) - 1 if len(parts) % 2 else len(parts) - 2
        edges = self.options.auto_trim in (AUTO_TRIM_START_END, True)

        chunks = []
        for index, part in enumerate(parts):
            if index % 2:
                chunks.append((TextGenerator.of(part), True))
                continue
            text = to_text(part)
            if edges and index == 0:
                text = text.lstrip()
            if edges and index == last:
                text = text.rstrip()
            chunks.append((TextGenerator(kind="literal", text=text), False))
        return self._emit(chunks)

    def _emit(self, chunks: list[tuple[TextGenerator, bool]]) -> Any:
        queue = deque(chunks)
        while queue:
            generator, trim = queue.popleft()
            result = generator.render(self)
            if inspect.isawaitable(result):
                done, result = _settled(result)
                if not done:
                    return self.sink.defer(self._emit_async(result, trim, queue))
            self._append(result, trim)
        return COMPLETED

    async def _emit_async(self, pending: Any, trim: bool, queue: deque) -> None:
        self._append(await pending, trim)
        while queue:
            generator, trim = queue.popleft()
            result = generator.render(self)
            if inspect.isawaitable(result):
                result = await result
            self._append(result, trim)

    def _append(self, value: Any, trim: bool) -> None:
        text = to_text(value)
        if trim and self.options.auto_trim == AUTO_TRIM_ALL:
            text = text.strip()
        self.sink.append(text)
