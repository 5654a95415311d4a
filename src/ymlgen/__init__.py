"""ymlgen - generate text artifacts from annotated YAML data files.

A data file declares its own generation through directive comment lines:

    # ymlgen:generator model
    # ymlgen:output *.py
    # ymlgen:select entities

    entities:
      user:
        name: str

Each directive names a generator module (loaded from the generators
directory), the sub-path of the data to hand it, and where to write the
result.
"""

import logging

from ymlgen.data.discover import MARKER, is_data_file
from ymlgen.generation.processor import ProcessOutcome, process_file

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["MARKER", "ProcessOutcome", "is_data_file", "process_file"]
