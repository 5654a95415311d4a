"""Run the lifecycle hooks a data file declares.

``# ymlgen:success``, ``# ymlgen:fail`` and ``# ymlgen:done`` values are
shell commands run in the data file's directory after processing.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from ymlgen.generation.processor import ProcessOutcome

logger = logging.getLogger(__name__)


def select_hooks(outcome: ProcessOutcome) -> list[str]:
    """Return the hook commands to run for an outcome, in order."""
    hooks = [outcome.on_fail if outcome.failed else outcome.on_success, outcome.on_done]
    return [h for h in hooks if h]


def run_hooks(outcome: ProcessOutcome, cwd: Path | str) -> list[subprocess.CompletedProcess]:
    """Run the hooks selected for ``outcome``.

    Args:
        outcome: Result of processing a data file.
        cwd: Directory to run the commands in.

    Returns:
        Completed processes, one per hook run.
    """
    results = []
    for command in select_hooks(outcome):
        logger.debug("Running hook in %s: %s", cwd, command)
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            logger.warning("Hook '%s' exited with %d: %s", command, result.returncode, result.stderr.strip())
        results.append(result)
    return results
