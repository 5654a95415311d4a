"""Directive module - parse ``# ymlgen:<name> <value>`` lines."""

from ymlgen.directives.parser import (
    DirectiveSet,
    GenerationSpec,
    read_directives,
    scan_directives,
    strip_directives,
)

__all__ = [
    "DirectiveSet",
    "GenerationSpec",
    "read_directives",
    "scan_directives",
    "strip_directives",
]
