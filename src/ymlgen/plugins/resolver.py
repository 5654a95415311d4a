"""Resolve generator names to generator functions.

A generator named ``model`` lives in ``<generators_dir>/model.py`` and
exposes a module-level ``generate(ctx)`` function (sync or async).
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Awaitable, Callable

from ymlgen.errors import GeneratorNotFoundError

logger = logging.getLogger(__name__)

GENERATOR_ATTRIBUTE = "generate"
MODULE_NAMESPACE = "ymlgen.generators"


def load_generator_module(path: Path) -> ModuleType:
    """Execute a generator file as a module without registering it in sys.modules."""
    spec = importlib.util.spec_from_file_location(f"{MODULE_NAMESPACE}.{path.stem}", path)
    if spec is None or spec.loader is None:
        raise GeneratorNotFoundError(f"Cannot load generator module {path}", context={"path": str(path)})
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def create_generator_resolver(generators_dir: Path | str) -> Callable[[str], Awaitable[Any]]:
    """Build a resolver that loads and caches generators from a directory.

    Args:
        generators_dir: Directory holding ``<name>.py`` generator modules.

    Returns:
        Async ``name -> generate function``. Each module is loaded once.
    """
    root = Path(generators_dir)
    resolved: dict[Path, Any] = {}

    async def resolve_generator(name: str) -> Any:
        path = (root / f"{name}.py").resolve()
        cached = resolved.get(path)
        if cached is not None:
            return cached

        if not path.is_file():
            raise GeneratorNotFoundError(
                f"Generator '{name}' not found at {path}",
                context={"name": name, "path": str(path)},
            )

        logger.debug("Loading generator %s from %s", name, path)
        module = load_generator_module(path)
        generate = getattr(module, GENERATOR_ATTRIBUTE, None)
        if not callable(generate):
            raise GeneratorNotFoundError(
                f"Generator module {path} has no callable '{GENERATOR_ATTRIBUTE}'",
                context={"name": name, "path": str(path)},
            )

        resolved[path] = generate
        return generate

    return resolve_generator
