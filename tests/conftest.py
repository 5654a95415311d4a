"""Shared test fixtures for ymlgen."""

from pathlib import Path

import pytest

from ymlgen.errors import GeneratorNotFoundError

FIXTURES = Path(__file__).parent / "fixtures"


class WriteRecorder:
    """In-memory stand-in for the file writer."""

    def __init__(self):
        self.writes: list[tuple[str, str]] = []
        self.options: dict[str, dict] = {}

    async def __call__(self, name, content, **options):
        self.writes.append((name, content))
        self.options[name] = options

    @property
    def results(self) -> list[str]:
        return sorted(f"{name}:{content}" for name, content in self.writes)


@pytest.fixture
def recorder():
    return WriteRecorder()


@pytest.fixture
def make_resolver():
    """Build an async resolver over a dict of name -> generator."""

    def factory(generators):
        async def resolve(name):
            if name not in generators:
                raise GeneratorNotFoundError(f"Generator '{name}' not found")
            return generators[name]

        return resolve

    return factory


@pytest.fixture
def generators_dir():
    return FIXTURES / "generators"


@pytest.fixture
def data_dir():
    return FIXTURES / "data"
