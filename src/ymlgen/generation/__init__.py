"""Generation module - route specs to outputs and orchestrate a data file."""

from ymlgen.generation.processor import ProcessOutcome, process_file
from ymlgen.generation.router import route_spec

__all__ = ["ProcessOutcome", "process_file", "route_spec"]
