"""Write generated files relative to a working directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


def create_file_writer(
    working_dir: Path | str,
    on_success: Callable[[Path], None] | None = None,
) -> Callable[..., Awaitable[None]]:
    """Build an async writer for generated output.

    Args:
        working_dir: Directory relative output names resolve against.
        on_success: Called with the full path after each write.

    Returns:
        ``write_file(name, content, *, skip_if_exist=False)``.
    """
    root = Path(working_dir)

    async def write_file(name: str, content: str, *, skip_if_exist: bool = False) -> None:
        path = Path(name)
        if not path.is_absolute():
            path = root / path

        if skip_if_exist and path.exists():
            logger.info("Skipped existing %s", path)
            return

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        if on_success is not None:
            on_success(path)

    return write_file
