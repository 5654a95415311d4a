"""Dot-path selection and deep merging of parsed data trees."""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from typing import Any


def select_data(data: Any, path: str | None) -> Any:
    """Walk ``data`` along a dot-separated path.

    Mappings are indexed by key, sequences by integer position. Any
    missing step yields ``None``; this never raises.

    Args:
        data: Parsed data tree.
        path: Dot path such as ``"prop1.prop2"``. Empty selects the root.

    Returns:
        The selected value, or ``None``.
    """
    if not path:
        return data

    current = data
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part in current:
                current = current[part]
            elif part.lstrip("-").isdigit() and int(part) in current:
                current = current[int(part)]
            else:
                return None
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return current


def merge_data(*sources: Any) -> Any:
    """Deep-merge sources left to right into a fresh value.

    Later sources win on scalar conflicts; mapping values present in
    several sources merge recursively. ``None`` sources are skipped and
    inputs are never mutated.
    """
    result: Any = None
    for source in sources:
        if source is None:
            continue
        if isinstance(result, dict) and isinstance(source, Mapping):
            _merge_into(result, source)
        elif isinstance(source, Mapping):
            result = {}
            _merge_into(result, source)
        else:
            result = copy.deepcopy(source)
    return result


def _merge_into(target: dict, source: Mapping) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            _merge_into(existing, value)
        elif isinstance(value, Mapping):
            target[key] = {}
            _merge_into(target[key], value)
        else:
            target[key] = copy.deepcopy(value)
