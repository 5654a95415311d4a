"""Render module - the context protocol generators are written against."""

from ymlgen.render.combinators import each, use
from ymlgen.render.context import RenderContext, RenderOptions, TextGenerator, TextSink
from ymlgen.render.engine import generate_text

__all__ = [
    "RenderContext",
    "RenderOptions",
    "TextGenerator",
    "TextSink",
    "each",
    "generate_text",
    "use",
]
