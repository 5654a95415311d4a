"""Parse data documents and read external merge sources."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import yaml


def parse_document(text: str) -> Any:
    """Parse the YAML body of a data file.

    The text is dedented first so data files whose lines share a common
    indentation still parse as a top-level mapping.

    Raises:
        yaml.YAMLError: If the YAML is malformed.
    """
    return yaml.safe_load(textwrap.dedent(text))


def read_merge_source(directory: Path | str, reference: str) -> Any:
    """Read a data file referenced by a ``merge`` directive.

    Args:
        directory: Directory of the data file declaring the directive.
        reference: Path of the merge source, relative to ``directory``.

    Returns:
        Parsed JSON for ``.json`` references, parsed YAML otherwise.

    Raises:
        FileNotFoundError: If the referenced file doesn't exist.
    """
    source_path = Path(directory) / reference
    with open(source_path, encoding="utf-8") as f:
        if source_path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)
