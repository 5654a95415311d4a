"""Error taxonomy for ymlgen."""

from __future__ import annotations

from typing import Any, Mapping


class YmlgenError(Exception):
    """Base exception for ymlgen."""

    context: dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}


class ConfigurationError(YmlgenError, ValueError):
    """Raised when a data file's directives cannot produce a generation plan."""


class UnknownDirectiveError(ConfigurationError):
    """Raised for a directive no built-in handler or external resolver accepts."""


class CollectionRequiredError(YmlgenError, TypeError):
    """Raised when iteration is requested over a value that is not a collection."""


class GeneratorNotFoundError(YmlgenError, LookupError):
    """Raised when a named generator cannot be loaded."""
