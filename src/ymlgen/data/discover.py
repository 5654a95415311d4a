"""Find ymlgen data files."""

from __future__ import annotations

import glob
from pathlib import Path

# Every data file starts with this token
MARKER = "# ymlgen"


def is_data_file(content: str) -> bool:
    """Return True if ``content`` is a ymlgen data file."""
    return content.lstrip().startswith(MARKER)


def discover_data_files(patterns: list[str], root: Path | str | None = None) -> list[Path]:
    """Expand glob patterns and keep the files that are ymlgen data files.

    Args:
        patterns: Glob patterns (``**`` matches recursively).
        root: Directory relative patterns are resolved against. Defaults to cwd.

    Returns:
        Sorted, de-duplicated list of data file paths.
    """
    base = Path(root) if root else Path.cwd()
    found: set[Path] = set()
    for pattern in patterns:
        full = pattern if Path(pattern).is_absolute() else str(base / pattern)
        for match in glob.glob(full, recursive=True):
            path = Path(match)
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            if is_data_file(content):
                found.add(path)
    return sorted(found)
